"""Analysis configuration with environment variable loading.

Pydantic-based configuration for the Gemini analysis client.
A missing API key is fatal at startup.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AnalysisConfig(BaseModel):
    """Configuration for the Gemini analysis client.

    Attributes:
        api_key: API key for Gemini access.
        fast_model: Model used when extended reasoning is off.
        thinking_model: Model used when extended reasoning is on.
        transcription_model: Model used for voice transcription.
        thinking_budget: Deliberation token budget for the thinking model.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", "")),
        description="API key for Gemini",
    )
    fast_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_FAST_MODEL", "gemini-2.5-flash-lite"),
        description="Faster, lighter model variant",
    )
    thinking_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_THINKING_MODEL", "gemini-2.5-pro"),
        description="Higher-capability model variant with a thinking budget",
    )
    transcription_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_TRANSCRIPTION_MODEL", "gemini-2.5-flash"),
        description="Model used for audio transcription",
    )
    thinking_budget: int = Field(
        default=32768,
        ge=1,
        le=32768,
        description="Thinking token budget requested in extended reasoning mode",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or API_KEY in .env")
        return v.strip()


def get_analysis_config() -> AnalysisConfig:
    """Create analysis configuration from environment.

    Returns:
        Configured AnalysisConfig instance.

    Raises:
        ValidationError: If no API key is set.
    """
    return AnalysisConfig()
