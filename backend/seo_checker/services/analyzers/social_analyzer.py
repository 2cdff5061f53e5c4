"""
Social Analyzer - OpenGraph, Twitter cards, links to social platforms.
"""

from dataclasses import dataclass, field

from seo_checker.services.analyzers.base import AnalyzerResult, BaseAnalyzer, SubScore, mean_score


OG_KEYS = ('title', 'description', 'image', 'url')
TWITTER_KEYS = ('card', 'title', 'description', 'image')


@dataclass(frozen=True)
class SocialResult(AnalyzerResult):
    facebook_og: SubScore = field(default_factory=SubScore)
    twitter_card: SubScore = field(default_factory=SubScore)
    social_links: SubScore = field(default_factory=SubScore)


class SocialAnalyzer(BaseAnalyzer):
    name = "social"
    result_type = SocialResult
    
    def analyze(self, facts) -> SocialResult:
        meta = facts.meta
        og_tags = {key: meta.og_tags[key] for key in OG_KEYS if meta.og_tags.get(key)}
        twitter_tags = {key: meta.twitter_tags[key] for key in TWITTER_KEYS if meta.twitter_tags.get(key)}
        
        facebook_og = SubScore.flag(bool(og_tags), tags=og_tags)
        twitter_card = SubScore.flag(bool(twitter_tags), tags=twitter_tags)
        social_links = SubScore.flag(bool(meta.social_platforms), platforms=list(meta.social_platforms))
        
        return SocialResult(
            summary=SubScore(
                exists=facebook_og.exists or twitter_card.exists or social_links.exists,
                score=mean_score([facebook_og.score, twitter_card.score, social_links.score]),
            ),
            facebook_og=facebook_og,
            twitter_card=twitter_card,
            social_links=social_links,
        )
