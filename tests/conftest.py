"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - previews: Fresh preview registry
    - store: CaseStore wired to the preview registry
    - make_case_file: Factory for encoded CaseFiles
    - fake_analyzer: Scriptable stand-in for the Gemini analysis client
    - async_client: HTTPX client for API testing
"""

import asyncio
import base64
from collections.abc import AsyncGenerator, Callable, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from multirag.analysis.client import AnalysisError
from multirag.api import app
from multirag.ingestion.files import get_file_type
from multirag.ingestion.previews import PreviewRegistry
from multirag.models.schemas import AnalysisOptions, CaseFile
from multirag.store.case_store import CaseStore


class FakeRawFile:
    """In-memory raw upload, optionally failing on read."""

    def __init__(
        self,
        name: str,
        content: bytes = b"data",
        content_type: str = "application/octet-stream",
        fail: bool = False,
    ) -> None:
        self.name = name
        self.content_type = content_type
        self._content = content
        self._fail = fail

    async def read(self) -> bytes:
        await asyncio.sleep(0)
        if self._fail:
            raise OSError(f"cannot read {self.name}")
        return self._content


class FakeAnalyzer:
    """Scriptable analysis client.

    Yields ``fragments`` in order. When ``fail_after`` is set, raises
    AnalysisError after that many fragments. When ``gate`` is set, waits on
    it before yielding anything.
    """

    def __init__(
        self,
        fragments: Sequence[str] = (),
        fail_after: int | None = None,
        gate: asyncio.Event | None = None,
        transcript: str = "",
        transcribe_error: bool = False,
    ) -> None:
        self.fragments = list(fragments)
        self.fail_after = fail_after
        self.gate = gate
        self.transcript = transcript
        self.transcribe_error = transcribe_error
        self.calls: list[tuple[str, tuple[CaseFile, ...], AnalysisOptions]] = []
        self.transcribed: list[CaseFile] = []

    async def stream_analysis(
        self,
        prompt: str,
        files: Sequence[CaseFile],
        options: AnalysisOptions,
    ) -> AsyncGenerator[str]:
        self.calls.append((prompt, tuple(files), options))
        if self.gate is not None:
            await self.gate.wait()
        for i, fragment in enumerate(self.fragments):
            if self.fail_after is not None and i >= self.fail_after:
                break
            await asyncio.sleep(0)
            yield fragment
        if self.fail_after is not None:
            raise AnalysisError("stream interrupted")

    async def transcribe(self, audio_file: CaseFile) -> str:
        self.transcribed.append(audio_file)
        if self.transcribe_error:
            raise AnalysisError("transcription unavailable")
        return self.transcript


@pytest.fixture
def previews() -> PreviewRegistry:
    """Return an empty preview registry."""
    return PreviewRegistry()


@pytest.fixture
def store(previews: PreviewRegistry) -> CaseStore:
    """Return an empty store that releases previews into ``previews``."""
    return CaseStore(previews)


@pytest.fixture
def make_case_file(previews: PreviewRegistry) -> Callable[..., CaseFile]:
    """Return a factory building CaseFiles with live preview references."""

    def factory(
        name: str = "a.pdf",
        mime_type: str = "application/pdf",
        content: bytes = b"%PDF-1.4",
    ) -> CaseFile:
        return CaseFile(
            name=name,
            category=get_file_type(mime_type),
            mime_type=mime_type,
            size_bytes=len(content),
            preview_ref=previews.allocate(content, mime_type),
            encoded_content=base64.b64encode(content).decode("ascii"),
        )

    return factory


@pytest.fixture
def fake_analyzer() -> FakeAnalyzer:
    """Return an analyzer that streams a short two-fragment answer."""
    return FakeAnalyzer(fragments=["Sum", "mary."])


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
