"""Immutable configuration handed to the pipeline after resolution."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class FrozenConfig:
    """Configuration resolved once, then passed around unchanged.

    Components receive a FrozenConfig and never consult the environment
    themselves, so later changes to the environment do not affect them.
    """

    api_key: str | None
    model: str
    use_real_api: bool
    request_timeout_s: float | None
    max_input_chars: int | None
    export_dir: Path

    def __repr__(self) -> str:
        """Repr with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, "
            f"request_timeout_s={self.request_timeout_s!r}, "
            f"max_input_chars={self.max_input_chars!r}, "
            f"export_dir={str(self.export_dir)!r})"
        )

    __str__ = __repr__

    def to_dict(self, *, redact: bool = True) -> dict[str, Any]:
        """Convert to a plain dictionary, redacting the key by default."""
        data = asdict(self)
        if redact and data["api_key"]:
            data["api_key"] = "[REDACTED]"
        data["export_dir"] = str(self.export_dir)
        return data
