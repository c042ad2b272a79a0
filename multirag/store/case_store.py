"""In-memory case collection with an active-case reference.

Every mutation replaces the affected Case (and the collection tuple) with a
new object, so snapshots handed out earlier never change underneath callers.
"""

import logging
import time
import uuid
from collections.abc import Callable, Iterable

from multirag.ingestion.previews import PreviewRegistry
from multirag.models.schemas import Case, CaseFile, ChatMessage, Role

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def _new_case_id() -> str:
    return f"case-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class CaseStore:
    """Owns the cases of one UI session.

    Operations that take a ``case_id`` are no-ops when it is None or names
    no existing case.
    """

    def __init__(self, previews: PreviewRegistry | None = None) -> None:
        """Initialize an empty store.

        Args:
            previews: Registry whose references are released when files
                leave a case. Preview release is skipped when omitted.
        """
        self._previews = previews
        self._cases: tuple[Case, ...] = ()
        self._active_id: str | None = None
        self._listeners: list[Listener] = []

    @property
    def cases(self) -> tuple[Case, ...]:
        """All cases, newest first."""
        return self._cases

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active_case(self) -> Case | None:
        return self.get(self._active_id)

    def get(self, case_id: str | None) -> Case | None:
        if case_id is None:
            return None
        return next((c for c in self._cases if c.id == case_id), None)

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked after every effective mutation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def _replace(self, case_id: str | None, update: Callable[[Case], Case | None]) -> bool:
        """Swap one case for ``update(case)``.

        ``update`` returning None means nothing changed.
        """
        case = self.get(case_id)
        if case is None:
            return False
        updated = update(case)
        if updated is None:
            return False
        self._cases = tuple(updated if c.id == case.id else c for c in self._cases)
        self._notify()
        return True

    def _release(self, files: Iterable[CaseFile]) -> None:
        if self._previews is None:
            return
        for f in files:
            self._previews.release(f.preview_ref)

    def create(self) -> Case:
        """Create an empty case, prepend it, and make it active."""
        case = Case(id=_new_case_id(), name=f"Case #{len(self._cases) + 1}")
        self._cases = (case, *self._cases)
        self._active_id = case.id
        logger.info(f"Created {case.name} ({case.id})")
        self._notify()
        return case

    def select(self, case_id: str | None) -> None:
        """Set the active case. The id is not validated."""
        self._active_id = case_id
        self._notify()

    def delete(self, case_id: str) -> None:
        """Remove a case and release its file previews."""
        case = self.get(case_id)
        if case is None:
            return
        self._cases = tuple(c for c in self._cases if c.id != case_id)
        self._release(case.files)
        if self._active_id == case_id:
            self._active_id = None
        logger.info(f"Deleted {case.name} ({case.id})")
        self._notify()

    def clear(self) -> None:
        """Discard every case and release all their previews.

        Teardown for a closed session: listeners are not notified.
        """
        cases = self._cases
        self._cases = ()
        self._active_id = None
        for case in cases:
            self._release(case.files)
        logger.info(f"Cleared {len(cases)} case(s)")

    def add_files(self, case_id: str | None, files: Iterable[CaseFile]) -> None:
        """Append files to a case. Duplicate names are kept.

        Files that find no case are discarded and their previews released.
        """
        files = tuple(files)
        added = self._replace(
            case_id,
            lambda c: c.model_copy(update={"files": (*c.files, *files)}),
        )
        if not added:
            self._release(files)

    def remove_file(self, case_id: str | None, name: str) -> None:
        """Remove every file called ``name`` from a case."""
        removed: list[CaseFile] = []

        def update(case: Case) -> Case | None:
            kept = tuple(f for f in case.files if f.name != name)
            if len(kept) == len(case.files):
                return None
            removed.extend(f for f in case.files if f.name == name)
            return case.model_copy(update={"files": kept})

        if self._replace(case_id, update):
            self._release(removed)

    def append_message(self, case_id: str | None, message: ChatMessage) -> None:
        self._replace(
            case_id,
            lambda c: c.model_copy(update={"messages": (*c.messages, message)}),
        )

    def append_to_last_model_message(self, case_id: str | None, text: str) -> None:
        """Concatenate text onto the last message if it is a model message.

        Text is dropped silently when the last message is missing or is not
        a model message.
        """

        def update(case: Case) -> Case | None:
            if not case.messages or case.messages[-1].role is not Role.MODEL:
                return None
            last = case.messages[-1]
            grown = last.model_copy(update={"content": last.content + text})
            return case.model_copy(update={"messages": (*case.messages[:-1], grown)})

        self._replace(case_id, update)
