"""Gemini analysis client with streaming support.

Sends case documents inline alongside a templated prompt and yields response
text as it arrives. A second, non-streamed call transcribes voice recordings.

Failures surface as AnalysisError. Nothing here retries; the session layer
decides how a failed turn is presented.
"""

import base64
import logging
from collections.abc import AsyncGenerator, Sequence

from google import genai
from google.genai import types

from multirag.analysis.config import AnalysisConfig, get_analysis_config
from multirag.models.schemas import AnalysisOptions, CaseFile

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are a highly intelligent analysis assistant. Analyze the following documents and the user's query to provide a comprehensive and accurate response. The user has provided the following files for context:

{file_context}

User query: "{user_prompt}"

Based on the provided files and the query, please formulate your response."""

NO_FILES_CONTEXT = "No files provided."

TRANSCRIBE_INSTRUCTION = "Transcribe the following audio recording."


class AnalysisError(Exception):
    """Raised when a request to the model fails."""

    pass


def build_prompt(prompt: str, files: Sequence[CaseFile]) -> str:
    """Fill the analysis template with the file listing and user prompt."""
    if files:
        file_context = "\n".join(f"- {f.name} ({f.category.value})" for f in files)
    else:
        file_context = NO_FILES_CONTEXT
    return PROMPT_TEMPLATE.format(file_context=file_context, user_prompt=prompt)


def _inline_part(file: CaseFile) -> types.Part:
    # The SDK holds raw bytes and re-encodes them as base64 on the wire
    return types.Part(
        inline_data=types.Blob(
            mime_type=file.mime_type,
            data=base64.b64decode(file.encoded_content),
        )
    )


class AnalysisClient:
    """Stateless wrapper around the google-genai async client."""

    def __init__(self, config: AnalysisConfig | None = None) -> None:
        """Initialize the client.

        Args:
            config: Optional analysis configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_analysis_config()
        self._client = genai.Client(api_key=self._config.api_key)

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def _select_model(
        self, options: AnalysisOptions
    ) -> tuple[str, types.GenerateContentConfig | None]:
        if options.extended_reasoning:
            return self._config.thinking_model, types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(
                    thinking_budget=self._config.thinking_budget,
                ),
            )
        return self._config.fast_model, None

    async def stream_analysis(
        self,
        prompt: str,
        files: Sequence[CaseFile],
        options: AnalysisOptions,
    ) -> AsyncGenerator[str]:
        """Stream the model's answer about a case's documents.

        Args:
            prompt: The user's query, passed verbatim into the template.
            files: Case documents, attached inline in order.
            options: Model selection flags.

        Yields:
            Response text fragments in arrival order.

        Raises:
            AnalysisError: If the request or the stream fails.
        """
        model, config = self._select_model(options)
        contents = [
            types.Content(
                role="user",
                parts=[
                    *(_inline_part(f) for f in files),
                    types.Part(text=build_prompt(prompt, files)),
                ],
            )
        ]

        logger.info(f"Streaming analysis with {model} over {len(files)} file(s)")
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=model,
                contents=contents,
                config=config,
            )
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise AnalysisError(f"Analysis with {model} failed: {e}") from e

    async def transcribe(self, audio_file: CaseFile) -> str:
        """Transcribe a voice recording.

        Args:
            audio_file: Audio attachment to transcribe.

        Returns:
            Transcript with surrounding whitespace removed.

        Raises:
            AnalysisError: If the request fails.
        """
        model = self._config.transcription_model
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[_inline_part(audio_file), types.Part(text=TRANSCRIBE_INSTRUCTION)],
                    )
                ],
            )
        except Exception as e:
            raise AnalysisError(f"Transcription with {model} failed: {e}") from e
        return (response.text or "").strip()


# Module-level singleton instance
_analysis_client: AnalysisClient | None = None


def get_analysis_client() -> AnalysisClient:
    """Get or create the global analysis client.

    Returns:
        The AnalysisClient instance.
    """
    global _analysis_client
    if _analysis_client is None:
        _analysis_client = AnalysisClient()
    return _analysis_client
