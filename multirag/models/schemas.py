from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FileCategory(str, Enum):
    """Coarse classification of an attached file."""

    IMAGE = "image"
    AUDIO = "audio"
    PDF = "pdf"
    VIDEO = "video"
    OTHER = "other"


class Role(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    MODEL = "model"


class CaseFile(BaseModel):
    """A document attached to a case, ready to send to the model.

    Attributes:
        name: Original filename. Not unique within a case.
        category: Classification derived from the MIME type at ingestion.
        mime_type: Original media type, passed through to the model.
        size_bytes: Byte length of the original content.
        preview_ref: Local preview URL path, empty when none was allocated.
        encoded_content: Full file content as base64 text.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category: FileCategory
    mime_type: str
    size_bytes: int = Field(ge=0)
    preview_ref: str = ""
    encoded_content: str = Field(repr=False)


class ChatMessage(BaseModel):
    """One turn of dialogue.

    Attributes:
        role: The speaker (user or model).
        content: Accumulated text. Model messages grow while streaming.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = ""


class Case(BaseModel):
    """A unit of work grouping documents and a conversation about them.

    Attributes:
        id: Unique identifier assigned at creation.
        name: Display label.
        files: Attached documents in insertion order.
        messages: Transcript in insertion order.
        created_at: Creation timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    files: tuple[CaseFile, ...] = ()
    messages: tuple[ChatMessage, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AnalysisOptions(BaseModel):
    """Per-request analysis options.

    Attributes:
        extended_reasoning: Use the slower model with a thinking budget.
    """

    extended_reasoning: bool = False
