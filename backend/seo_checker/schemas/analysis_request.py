"""
Pydantic schemas for analysis requests.
"""

from pydantic import BaseModel, ConfigDict, Field


class AnalysisRequest(BaseModel):
    """Request to analyze one URL."""
    url: str = Field(..., description="URL to analyze. https:// is assumed when no scheme is given.")
    
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://example.com"
            }
        }
    )
