"""Generation client wrapping an adapter with the pipeline's error contract."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from proformat.constants import EMPTY_GENERATION_SENTINEL
from proformat.core.types import Failure, Result, Success
from proformat.exceptions import ConfigurationError, GenerationFailure
from proformat.telemetry import TelemetryContext

from .adapters import GenerationAdapter, GoogleGenAIAdapter, MockAdapter
from .error_handler import GenerationErrorHandler

if TYPE_CHECKING:
    from proformat.config import FrozenConfig
    from proformat.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)


class GenerationClient:
    """Calls the generation adapter exactly once per request.

    - Empty payloads reported as success become ``EMPTY_GENERATION_SENTINEL``.
    - Every failure is raised as ``GenerationFailure``.
    - No retries; re-submitting is the caller's decision.
    """

    def __init__(
        self,
        adapter: GenerationAdapter,
        *,
        timeout_s: float | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        if not isinstance(adapter, GenerationAdapter):
            raise TypeError(
                f"adapter must provide an async generate(prompt) method, got {type(adapter).__name__}"
            )
        self._adapter = adapter
        self._timeout_s = timeout_s
        self._error_handler = GenerationErrorHandler()
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @property
    def adapter(self) -> GenerationAdapter:
        return self._adapter

    async def generate(self, prompt: str) -> str:
        """Return the formatted text for ``prompt``.

        Raises:
            GenerationFailure: If the adapter fails or times out.
        """
        result = await self.try_generate(prompt)
        if isinstance(result, Failure):
            raise result.error
        return result.value

    async def try_generate(self, prompt: str) -> Result[str, GenerationFailure]:
        """Like ``generate`` but returns ``Success`` or ``Failure`` instead of raising."""
        with self._telemetry("client.generate", prompt_chars=len(prompt)):
            try:
                if self._timeout_s is None:
                    text = await self._adapter.generate(prompt)
                else:
                    text = await asyncio.wait_for(
                        self._adapter.generate(prompt), timeout=self._timeout_s
                    )
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._telemetry.count("client.generate.error")
                return Failure(self._error_handler.handle_generation_error(e))

        if not text:
            log.warning("Generation service returned an empty payload.")
            return Success(EMPTY_GENERATION_SENTINEL)
        return Success(text)


def create_client(
    config: FrozenConfig, *, telemetry: TelemetryContextProtocol | None = None
) -> GenerationClient:
    """Build a client for ``config``: the real API when enabled, else the mock."""
    adapter: GenerationAdapter
    if config.use_real_api:
        if not config.api_key:
            raise ConfigurationError("use_real_api is enabled but no api_key is set")
        adapter = GoogleGenAIAdapter(config.api_key, config.model)
    else:
        adapter = MockAdapter()
    return GenerationClient(
        adapter, timeout_s=config.request_timeout_s, telemetry=telemetry
    )
