"""Voice input: turns one finished microphone recording into prompt text.

The browser owns the microphone and buffers the whole recording. This module
tracks the single active recording and handles transcription of the buffer.
"""

import base64
import logging
from enum import Enum
from typing import Protocol

from multirag.analysis.client import AnalysisError
from multirag.ingestion.files import get_file_type
from multirag.models.schemas import CaseFile

logger = logging.getLogger(__name__)

VOICE_FILE_NAME = "voice-input.webm"
VOICE_MIME_TYPE = "audio/webm"


class Transcriber(Protocol):
    async def transcribe(self, audio_file: CaseFile) -> str: ...


class VoiceCaptureError(Exception):
    """Raised when a recording cannot start or cannot be transcribed."""

    pass


class VoiceState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"


def merge_transcript(prompt: str, transcript: str) -> str:
    """Append a transcript to unsent prompt text, space-separated."""
    return f"{prompt} {transcript}" if prompt else transcript


class VoiceCapture:
    """Allows one recording at a time and transcribes it on stop."""

    def __init__(self, client: Transcriber) -> None:
        self._client = client
        self._state = VoiceState.IDLE

    @property
    def state(self) -> VoiceState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is not VoiceState.IDLE

    def start(self) -> None:
        """Begin a recording.

        Raises:
            VoiceCaptureError: If a recording or transcription is in progress.
        """
        if self._state is not VoiceState.IDLE:
            raise VoiceCaptureError("A recording is already in progress")
        self._state = VoiceState.RECORDING

    def fail(self, reason: str) -> None:
        """Abandon the recording after a microphone error."""
        logger.warning(f"Error accessing microphone: {reason}")
        self._state = VoiceState.IDLE

    async def finish(
        self,
        encoded_audio: str,
        prompt: str,
        mime_type: str = VOICE_MIME_TYPE,
    ) -> str:
        """Transcribe the finished recording and merge it into the prompt.

        Args:
            encoded_audio: The complete recording as base64 text.
            prompt: Current unsent prompt text.
            mime_type: Media type reported by the recorder.

        Returns:
            The new prompt text.

        Raises:
            VoiceCaptureError: If no recording is active or transcription fails.
                The caller keeps its prompt unchanged.
        """
        if self._state is not VoiceState.RECORDING:
            raise VoiceCaptureError("No recording in progress")

        self._state = VoiceState.TRANSCRIBING
        try:
            audio_file = CaseFile(
                name=VOICE_FILE_NAME,
                category=get_file_type(mime_type),
                mime_type=mime_type,
                size_bytes=len(base64.b64decode(encoded_audio)),
                encoded_content=encoded_audio,
            )
            transcript = await self._client.transcribe(audio_file)
        except (AnalysisError, ValueError) as e:
            logger.warning(f"Transcription error: {e}")
            raise VoiceCaptureError(f"Transcription failed: {e}") from e
        finally:
            self._state = VoiceState.IDLE

        return merge_transcript(prompt, transcript)
