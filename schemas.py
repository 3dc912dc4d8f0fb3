"""
Pydantic schemas for the JSON files kept under the personal data root.

These schemas are used for:
1. Validating config.json / stats.json / processing-config.json on load
2. Normalising the video list written by the watch-history fetcher
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# APPLICATION CONFIG (config.json next to the scripts)
# =============================================================================

class AppConfig(BaseModel):
    """Where the user's personal data root lives."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    personal_data_path: Optional[str] = Field(
        default=None, alias="personalDataPath",
        description="Absolute path to the personal data root"
    )
    last_updated: Optional[str] = Field(
        default=None, alias="lastUpdated",
        description="ISO-8601 timestamp of the last change"
    )


# =============================================================================
# PER-ROOT FILES (<root>/config/*.json)
# =============================================================================

class ProcessingStats(BaseModel):
    """Running counters for processed videos."""
    model_config = ConfigDict(extra="allow")

    totalVideos: int = Field(default=0, ge=0)
    processedVideos: int = Field(default=0, ge=0)
    totalCost: float = Field(default=0, ge=0)
    lastUpdated: Optional[str] = None


class ProcessingConfig(BaseModel):
    """Settings consumed by the video processing scripts."""
    model_config = ConfigDict(extra="allow")

    model: str = Field(description="LLM used to summarise videos")
    maxConcurrent: int = Field(default=1, ge=1)
    filterPolitical: bool = True


# =============================================================================
# FETCHER OUTPUT (recent-videos.json)
# =============================================================================

class LikedVideo(BaseModel):
    """A single entry of the fetched video list."""
    title: str
    url: str
    channel: str = ""
    description: str = ""
