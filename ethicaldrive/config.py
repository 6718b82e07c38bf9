"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ETHICALDRIVE_* env vars or .env"""

    model_config = SettingsConfigDict(
        env_prefix="ETHICALDRIVE_",
        env_file=".env",
        extra="ignore",
    )

    # Application
    app_name: str = "EthicalDrive"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="Logging level")

    # Narrative generation (Ollama-compatible service)
    narrative_enabled: bool = Field(default=True, description="Call the text-generation service")
    narrative_url: str = Field(default="http://localhost:11434", description="Text-generation service base URL")
    narrative_model: str = Field(default="llama3.2", description="Model for summaries and explanations")
    vision_model: str = Field(default="llava", description="Vision-capable model for video analysis")
    narrative_timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    # Perception
    object_vocabulary: Literal["v1", "v2"] = Field(default="v2", description="Object vocabulary for video perception")

    # Video
    max_upload_mb: int = Field(default=50, ge=1, description="Largest accepted upload")
    clip_max_seconds: float = Field(default=10.0, gt=0, description="Uploaded clips are truncated past this")
    live_clip_seconds: float = Field(default=3.0, gt=0, description="Default live capture duration")
    camera_device: int = Field(default=0, ge=0, description="OpenCV camera index for live capture")
    keyframe_count: int = Field(default=4, ge=1, le=16, description="Frames sent to the vision model")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names from the environment"""
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache()
def get_settings() -> Settings:
    return Settings()
