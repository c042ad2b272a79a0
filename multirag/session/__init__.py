"""Session orchestration on top of the case store and analysis client.

Responsibilities:
    - One in-flight analysis per case, guarded by controller state
    - User/model message pairing and fragment accumulation
    - Error notice on failed streams
    - Single active voice recording and its transcription
"""

from multirag.session.controller import (
    ERROR_NOTICE,
    SessionController,
    SessionControllers,
    SessionState,
)
from multirag.session.voice import (
    VoiceCapture,
    VoiceCaptureError,
    VoiceState,
    merge_transcript,
)

__all__ = [
    "ERROR_NOTICE",
    "SessionController",
    "SessionControllers",
    "SessionState",
    "VoiceCapture",
    "VoiceCaptureError",
    "VoiceState",
    "merge_transcript",
]
