"""
Application configuration using environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = os.getenv("APP_NAME", "SEO Checker")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    
    # HTTP client settings
    HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", "15"))
    HTTP_MAX_REDIRECTS: int = int(os.getenv("HTTP_MAX_REDIRECTS", "5"))
    PROBE_TIMEOUT: int = int(os.getenv("PROBE_TIMEOUT", "3"))
    USER_AGENT: str = os.getenv("USER_AGENT", "Mozilla/5.0 (compatible; SEO-Checker/1.0)")
    SSRF_PROTECTION_ENABLED: bool = os.getenv("SSRF_PROTECTION_ENABLED", "true").lower() == "true"
    
    # Analysis
    ANALYZER_WORKERS: int = int(os.getenv("ANALYZER_WORKERS", "4"))
    VITALS_SEED: Optional[int] = _optional_int("VITALS_SEED")
    
    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ])

settings = Settings()
