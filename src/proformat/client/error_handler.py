"""Error handling for generation requests"""  # noqa: D415

import logging

from ..exceptions import GenerationFailure

log = logging.getLogger(__name__)


class GenerationErrorHandler:
    """Converts any generation error into a single ``GenerationFailure``.

    Callers only ever see one error type. The diagnostic hint computed here
    goes to the log and the exception message, not into the type.
    """

    def describe(self, error: BaseException) -> str:
        """Return a short diagnostic hint for ``error``."""
        if isinstance(error, TimeoutError):
            return "Generation request timed out"

        error_str = str(error).lower()
        if "api key" in error_str or "api_key" in error_str or "permission" in error_str:
            return "Authentication with the generation service failed"
        if "quota" in error_str or "rate" in error_str or "429" in error_str:
            return "Generation quota or rate limit exceeded"
        if any(term in error_str for term in ("connect", "network", "unreachable", "dns")):
            return "Could not reach the generation service"
        return "Generation request failed"

    def handle_generation_error(self, error: BaseException) -> GenerationFailure:
        """Log ``error`` and return the classified failure to raise."""
        hint = self.describe(error)
        log.error("%s: %s", hint, error, exc_info=error)
        failure = GenerationFailure(f"{hint}: {error}")
        failure.__cause__ = error
        return failure
