"""Configuration scoping for entry-time overrides.

A scope only affects ``resolve_config()`` calls made inside it. Once a
FrozenConfig has been handed to a component, ambient changes are not seen.
"""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars

from .types import FrozenConfig

_ambient_config: contextvars.ContextVar[FrozenConfig] = contextvars.ContextVar(
    "proformat_config"
)


def get_ambient_config() -> FrozenConfig | None:
    """Return the configuration set by an enclosing ``config_scope``, if any."""
    try:
        return _ambient_config.get()
    except LookupError:
        return None


@contextmanager
def config_scope(config: FrozenConfig) -> Generator[None]:
    """Temporarily use a different configuration.

    Async-safe, which makes it convenient for tests:

        with config_scope(resolve_config(use_real_api=False)):
            orchestrator = create_orchestrator()
    """
    token = _ambient_config.set(config)
    try:
        yield
    finally:
        _ambient_config.reset(token)
