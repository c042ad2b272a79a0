"""Pydantic domain models for cases, attachments and chat transcripts.

All models are frozen. State changes produce new objects via
``model_copy(update=...)`` so no caller can observe in-place mutation.

Models:
    - FileCategory: Coarse attachment classification
    - Role: Chat message speaker
    - CaseFile: Encoded attachment with preview reference
    - ChatMessage: Individual message in a case transcript
    - Case: Files plus transcript for one unit of work
    - AnalysisOptions: Per-request model selection flags
"""

from multirag.models.schemas import (
    AnalysisOptions,
    Case,
    CaseFile,
    ChatMessage,
    FileCategory,
    Role,
)

__all__ = [
    "AnalysisOptions",
    "Case",
    "CaseFile",
    "ChatMessage",
    "FileCategory",
    "Role",
]
