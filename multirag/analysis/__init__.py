"""Gemini access for document analysis and voice transcription.

Responsibilities:
    - Model variant selection from the reasoning-depth flag
    - Inline attachment of case documents
    - Prompt templating with the file listing
    - Streaming fragment delivery and one-shot transcription

Maintains clean separation from session state and the UI.
"""

from multirag.analysis.client import (
    AnalysisClient,
    AnalysisError,
    build_prompt,
    get_analysis_client,
)
from multirag.analysis.config import AnalysisConfig, get_analysis_config

__all__ = [
    "AnalysisClient",
    "AnalysisConfig",
    "AnalysisError",
    "build_prompt",
    "get_analysis_client",
    "get_analysis_config",
]
