"""Host capabilities consumed by the export stage.

Downloading, printing, clipboard access and pagination are side effects the
renderer delegates to whatever host it runs in. Each is a small protocol;
``HostCapabilities`` bundles the ones a host provides.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from proformat.exceptions import ExportIOFailure

if TYPE_CHECKING:
    from proformat.core.types import PaginationOptions

log = logging.getLogger(__name__)


@runtime_checkable
class DownloadCapability(Protocol):
    """Saves a payload under a filename (a browser download, a file write...)."""

    def download(self, payload: str | bytes, mime_type: str, filename: str) -> None: ...  # noqa: D102


@runtime_checkable
class ClipboardCapability(Protocol):
    """Writes text to the system clipboard. Raises ``ClipboardFailure`` on refusal."""

    def write_text(self, text: str) -> None: ...  # noqa: D102


@runtime_checkable
class PrintCapability(Protocol):
    """Opens the native print dialog for a region of the current document."""

    def print_region(self, region_id: str) -> None: ...  # noqa: D102


@runtime_checkable
class PaginationCapability(Protocol):
    """Turns rendered HTML content into a paginated document."""

    def is_ready(self) -> bool:
        """Return False while the backend is still loading."""
        ...

    async def save(
        self, content_html: str, filename: str, options: PaginationOptions
    ) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class HostCapabilities:
    """The side-effecting capabilities available to the export renderer.

    Any member may be None; using a missing capability raises
    ``ExportIOFailure``.
    """

    downloads: DownloadCapability | None = None
    clipboard: ClipboardCapability | None = None
    printer: PrintCapability | None = None
    pagination: PaginationCapability | None = None

    def require[T](self, capability: T | None, name: str) -> T:
        if capability is None:
            raise ExportIOFailure(f"No {name} capability is available on this host.")
        return capability


class DirectoryDownloads:
    """Download capability that writes payloads into a directory."""

    def __init__(self, out_dir: Path | str) -> None:
        self.out_dir = Path(out_dir)

    def download(self, payload: str | bytes, mime_type: str, filename: str) -> None:
        path = self.out_dir / filename
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            if isinstance(payload, bytes):
                path.write_bytes(payload)
            else:
                path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise ExportIOFailure(f"Could not save {filename}: {e}") from e
        log.info("Saved %s (%s) to %s", filename, mime_type, path)
