"""Configuration management for the formatting pipeline.

Resolve once, freeze, then flow: settings are read from programmatic
overrides and the environment (in that order of precedence), validated by
pydantic, and frozen into a ``FrozenConfig`` that components receive.
"""

import logging
from typing import Any

from pydantic import ValidationError

from proformat.exceptions import ConfigurationError

from .schema import ProformatSettings
from .scope import config_scope, get_ambient_config
from .types import FrozenConfig

log = logging.getLogger(__name__)


def resolve_config(**overrides: Any) -> FrozenConfig:
    """Resolve settings into an immutable configuration.

    Precedence: explicit overrides, then an enclosing ``config_scope``,
    then ``PROFORMAT_*`` / ``GEMINI_API_KEY`` environment variables, then
    defaults.

    Raises:
        ConfigurationError: If the resolved values fail validation.
    """
    ambient = get_ambient_config()
    if ambient is not None:
        if not overrides:
            return ambient
        base = ambient.to_dict(redact=False)
        base.update({k: v for k, v in overrides.items() if v is not None})
        return _freeze(base)

    clean = {k: v for k, v in overrides.items() if v is not None}
    return _freeze(clean)


def _freeze(values: dict[str, Any]) -> FrozenConfig:
    try:
        settings = ProformatSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    config = FrozenConfig(
        api_key=settings.api_key,
        model=settings.model,
        use_real_api=settings.use_real_api,
        request_timeout_s=settings.request_timeout_s,
        max_input_chars=settings.max_input_chars,
        export_dir=settings.export_dir,
    )
    log.debug("Resolved configuration: %s", config)
    return config


__all__ = [  # noqa: RUF022
    "resolve_config",
    "config_scope",
    "get_ambient_config",
    "FrozenConfig",
    "ProformatSettings",
]
