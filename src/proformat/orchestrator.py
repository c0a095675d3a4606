"""The primary user-facing entry point for formatting requests.

``RequestOrchestrator`` is a small state machine owning at most one logical
request at a time:

    IDLE --submit--> SUBMITTING --resolve--> SUCCEEDED | FAILED

Either terminal state may submit again, and FAILED may ``retry()`` the last
attempted request. ``clear()`` returns to IDLE from anywhere.

Each request carries a generation token. A response is applied only if its
token still matches the current one, so a slower, superseded request can
never overwrite a newer outcome, and nothing lands after ``clear()``. The
underlying call is not aborted; its result is simply ignored.
"""

from __future__ import annotations

from collections.abc import Callable
import itertools
import logging
import time
from typing import TYPE_CHECKING

from proformat.client.generation import GenerationClient, create_client
from proformat.client.prompt_builder import PromptBuilder
from proformat.config import resolve_config
from proformat.constants import GENERATION_ERROR_MESSAGE
from proformat.core.types import (
    Failure,
    FormatRequest,
    FormattedDocument,
    FormattingOptions,
    Phase,
)
from proformat.exceptions import GenerationFailure, InputTooLargeError
from proformat.telemetry import TelemetryContext

if TYPE_CHECKING:
    from proformat.client.adapters import GenerationAdapter
    from proformat.config import FrozenConfig
    from proformat.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

type PhaseListener = Callable[[Phase], None]


class RequestOrchestrator:
    """Owns the in-flight request and the latest result.

    The rest of the system reads ``phase``, ``result`` and ``error_message``;
    only the orchestrator mutates them.
    """

    def __init__(
        self,
        client: GenerationClient | GenerationAdapter,
        prompt_builder: PromptBuilder | None = None,
        *,
        max_input_chars: int | None = None,
        telemetry: TelemetryContextProtocol | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: A ``GenerationClient``, or a bare adapter to wrap in one.
            prompt_builder: Builder for prompts; a default one if omitted.
            max_input_chars: Reject longer submissions. ``None`` means no limit.
            telemetry: Optional telemetry context.
            clock: Source of result timestamps.
        """
        if not isinstance(client, GenerationClient):
            client = GenerationClient(client)
        self._client = client
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._max_input_chars = max_input_chars
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()
        self._clock = clock

        self._tokens = itertools.count(1)
        self._current_token: int | None = None
        self._phase = Phase.IDLE
        self._last_request: FormatRequest | None = None
        self._result: FormattedDocument | None = None
        self._error: GenerationFailure | None = None
        self._listeners: list[PhaseListener] = []

    # --- Read-only state ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_processing(self) -> bool:
        return self._phase is Phase.SUBMITTING

    @property
    def result(self) -> FormattedDocument | None:
        """The latest successful document, or None."""
        return self._result

    @property
    def formatted_text(self) -> str | None:
        return self._result.formatted if self._result else None

    @property
    def error(self) -> GenerationFailure | None:
        return self._error

    @property
    def error_message(self) -> str | None:
        """User-facing message for the FAILED state."""
        return GENERATION_ERROR_MESSAGE if self._error is not None else None

    @property
    def last_request(self) -> FormatRequest | None:
        """The most recently attempted request."""
        return self._last_request

    def subscribe(self, listener: PhaseListener) -> Callable[[], None]:
        """Call ``listener`` with the new phase on every transition.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # --- Events ---

    async def submit(
        self, raw_text: str, options: FormattingOptions | None = None
    ) -> Phase:
        """Format ``raw_text`` with ``options``.

        Empty or whitespace-only text is ignored: the phase is unchanged and
        the service is not called.

        Returns:
            The phase after this request resolved (or was discarded).

        Raises:
            InputTooLargeError: If ``raw_text`` exceeds ``max_input_chars``.
        """
        if not raw_text.strip():
            log.debug("Ignoring submission with empty input.")
            return self._phase
        if self._max_input_chars is not None and len(raw_text) > self._max_input_chars:
            raise InputTooLargeError(len(raw_text), self._max_input_chars)

        request = FormatRequest(
            raw_text=raw_text,
            options=options if options is not None else FormattingOptions(),
            created_at=next(self._tokens),
        )
        return await self._run(request)

    async def retry(self) -> Phase:
        """Re-issue the last attempted request after a failure.

        Uses the text and options of that attempt, not whatever the caller
        has edited since. Does nothing outside the FAILED phase.
        """
        if self._phase is not Phase.FAILED or self._last_request is None:
            return self._phase
        return await self._run(self._last_request.reissue(next(self._tokens)))

    def clear(self) -> None:
        """Return to IDLE and drop any result, error or in-flight outcome."""
        self._current_token = None
        self._last_request = None
        self._result = None
        self._error = None
        self._transition(Phase.IDLE)

    # --- Internal helpers ---

    async def _run(self, request: FormatRequest) -> Phase:
        self._current_token = request.created_at
        self._last_request = request
        self._result = None
        self._error = None
        self._transition(Phase.SUBMITTING)

        prompt = self._prompt_builder.build(request.raw_text, request.options)
        with self._telemetry(
            "orchestrator.submit",
            tone=request.options.tone.value,
            input_chars=len(request.raw_text),
        ):
            outcome = await self._client.try_generate(prompt)

        if request.created_at != self._current_token:
            log.debug(
                "Discarding stale response for request %d (current: %s).",
                request.created_at,
                self._current_token,
            )
            self._telemetry.count("orchestrator.stale_response")
            return self._phase

        if isinstance(outcome, Failure):
            self._error = outcome.error
            self._transition(Phase.FAILED)
        else:
            self._result = FormattedDocument(
                original=request.raw_text,
                formatted=outcome.value,
                timestamp=self._clock(),
            )
            self._transition(Phase.SUCCEEDED)
        return self._phase

    def _transition(self, phase: Phase) -> None:
        log.debug("Orchestrator phase: %s -> %s", self._phase.value, phase.value)
        self._phase = phase
        for listener in list(self._listeners):
            try:
                listener(phase)
            except Exception as e:
                log.error(
                    "Phase listener '%s' failed: %s",
                    getattr(listener, "__name__", type(listener).__name__),
                    e,
                    exc_info=True,
                )


def create_orchestrator(
    config: FrozenConfig | None = None,
    *,
    telemetry: TelemetryContextProtocol | None = None,
) -> RequestOrchestrator:
    """Create an orchestrator with optional configuration.

    If no configuration is provided, it is resolved from the environment.
    ``telemetry`` is shared by the orchestrator and its generation client.
    """
    final_config = config if config is not None else resolve_config()
    return RequestOrchestrator(
        create_client(final_config, telemetry=telemetry),
        max_input_chars=final_config.max_input_chars,
        telemetry=telemetry,
    )
