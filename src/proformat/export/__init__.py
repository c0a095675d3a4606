"""Multi-format export of formatted documents."""

from pathlib import Path

from .capabilities import (
    ClipboardCapability,
    DirectoryDownloads,
    DownloadCapability,
    HostCapabilities,
    PaginationCapability,
    PrintCapability,
)
from .pdf import ReportLabPaginator
from .renderer import ExportRenderer, markdown_to_html


def create_local_capabilities(export_dir: Path | str) -> HostCapabilities:
    """Capabilities for a local, headless host: files written to ``export_dir``."""
    return HostCapabilities(
        downloads=DirectoryDownloads(export_dir),
        pagination=ReportLabPaginator(export_dir),
    )


__all__ = [  # noqa: RUF022
    "ExportRenderer",
    "markdown_to_html",
    "create_local_capabilities",
    # Capabilities
    "HostCapabilities",
    "DownloadCapability",
    "ClipboardCapability",
    "PrintCapability",
    "PaginationCapability",
    "DirectoryDownloads",
    "ReportLabPaginator",
]
