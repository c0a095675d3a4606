"""Generation adapters.

An adapter is the only place that knows how to reach a text-generation
provider. Everything above it depends on the ``GenerationAdapter`` protocol,
so tests and examples can swap in ``MockAdapter`` or their own stub.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from .prompt_builder import RAW_TEXT_MARKER

log = logging.getLogger(__name__)


@runtime_checkable
class GenerationAdapter(Protocol):
    """One-shot text generation: a prompt in, text (or nothing) out."""

    async def generate(self, prompt: str) -> str | None:
        """Return the provider's text for ``prompt``.

        May return ``None`` or an empty string when the provider reports
        success without a payload. Raises on any provider failure.
        """
        ...


class GoogleGenAIAdapter:
    """Adapter for the Google Gen AI SDK (``google-genai``)."""

    def __init__(self, api_key: str, model: str) -> None:
        # Defer the SDK import until a real client is actually requested
        from google import genai

        self._client = genai.Client(api_key=api_key)
        self._model = model
        log.debug("GoogleGenAIAdapter initialized with model '%s'.", model)

    async def generate(self, prompt: str) -> str | None:
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
        )
        return response.text


class MockAdapter:
    """Deterministic offline adapter.

    Echoes the raw text section of the prompt back as a small Markdown
    document, so the full pipeline can run without network access.
    """

    def __init__(self, heading: str = "Formatted Document") -> None:
        self._heading = heading

    async def generate(self, prompt: str) -> str | None:
        _, _, raw = prompt.rpartition(f"{RAW_TEXT_MARKER}\n")
        body = raw.strip() or prompt.strip()
        return f"# {self._heading}\n\n{body}\n"
