"""Conversational turns for a single case.

A controller is bound to one case id. Switching the active case in the UI
does not stop a running turn: its fragments keep landing in the case that
started it.
"""

import logging
from collections.abc import AsyncIterator, Sequence
from enum import Enum
from typing import Protocol

from multirag.analysis.client import AnalysisError
from multirag.models.schemas import AnalysisOptions, CaseFile, ChatMessage, Role
from multirag.store.case_store import CaseStore

logger = logging.getLogger(__name__)

ERROR_NOTICE = "\n\nSorry, an error occurred. Please try again."


class Analyzer(Protocol):
    def stream_analysis(
        self,
        prompt: str,
        files: Sequence[CaseFile],
        options: AnalysisOptions,
    ) -> AsyncIterator[str]: ...


class SessionState(str, Enum):
    """Turn state of a controller."""

    IDLE = "idle"
    AWAITING = "awaiting"


class SessionController:
    """Runs one prompt/response turn at a time for a case."""

    def __init__(self, store: CaseStore, case_id: str, client: Analyzer) -> None:
        self._store = store
        self._case_id = case_id
        self._client = client
        self._state = SessionState.IDLE

    @property
    def case_id(self) -> str:
        return self._case_id

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_awaiting(self) -> bool:
        return self._state is SessionState.AWAITING

    async def submit(self, text: str, options: AnalysisOptions | None = None) -> bool:
        """Submit a prompt and stream the answer into the case transcript.

        Appends the user message and an empty model placeholder, then grows
        the placeholder with each fragment. A failed stream leaves whatever
        arrived and appends ERROR_NOTICE.

        Args:
            text: The user's prompt.
            options: Model selection flags. Defaults to the fast model.

        Returns:
            False if the submission was ignored (blank text, unknown case,
            or a turn already in flight), True once the turn has finished.
        """
        if not text.strip() or self.is_awaiting:
            return False
        case = self._store.get(self._case_id)
        if case is None:
            return False

        self._store.append_message(self._case_id, ChatMessage(role=Role.USER, content=text))
        self._store.append_message(self._case_id, ChatMessage(role=Role.MODEL, content=""))
        self._state = SessionState.AWAITING

        try:
            async for fragment in self._client.stream_analysis(
                text, case.files, options or AnalysisOptions()
            ):
                self._store.append_to_last_model_message(self._case_id, fragment)
        except AnalysisError as e:
            logger.error(f"Error during analysis for {self._case_id}: {e}")
            self._store.append_to_last_model_message(self._case_id, ERROR_NOTICE)
        finally:
            self._state = SessionState.IDLE

        return True


class SessionControllers:
    """Lazily created controllers, one per case id."""

    def __init__(self, store: CaseStore, client: Analyzer) -> None:
        self._store = store
        self._client = client
        self._controllers: dict[str, SessionController] = {}

    def get(self, case_id: str) -> SessionController:
        if case_id not in self._controllers:
            self._controllers[case_id] = SessionController(self._store, case_id, self._client)
        return self._controllers[case_id]

    def discard(self, case_id: str) -> None:
        self._controllers.pop(case_id, None)
