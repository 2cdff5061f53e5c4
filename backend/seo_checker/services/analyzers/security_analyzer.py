"""
Security Analyzer - HTTPS, security response headers, privacy policy and terms links.
"""

import re
from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore


SECURITY_HEADERS = (
    'X-Frame-Options',
    'X-Content-Type-Options',
    'X-XSS-Protection',
    'Strict-Transport-Security',
    'Content-Security-Policy',
)
PRIVACY_RE = re.compile(r'개인정보처리방침|개인정보|privacy', re.I)
TERMS_RE = re.compile(r'이용약관|약관|terms', re.I)


@dataclass(frozen=True)
class SecurityResult(AnalyzerResult):
    https: SubScore = field(default_factory=SubScore)
    security_headers: SubScore = field(default_factory=SubScore)
    privacy_policy: SubScore = field(default_factory=SubScore)
    terms_of_service: SubScore = field(default_factory=SubScore)


class SecurityAnalyzer(BaseAnalyzer):
    name = "security"
    result_type = SecurityResult
    
    def analyze(self, facts) -> SecurityResult:
        present_headers = {name: facts.header(name) for name in SECURITY_HEADERS if facts.header(name)}
        page_text = '\n'.join([facts.meta.text_content, *facts.meta.link_hrefs])
        
        https = SubScore.flag(facts.is_https)
        headers = SubScore.flag(bool(present_headers), headers=present_headers)
        privacy = SubScore.flag(bool(PRIVACY_RE.search(page_text)))
        terms = SubScore.flag(bool(TERMS_RE.search(page_text)))
        
        score = (
            (40 if https.exists else 0)
            + (30 if headers.exists else 0)
            + (15 if privacy.exists else 0)
            + (15 if terms.exists else 0)
        )
        return SecurityResult(
            summary=SubScore(exists=True, score=score),
            https=https,
            security_headers=headers,
            privacy_policy=privacy,
            terms_of_service=terms,
        )
