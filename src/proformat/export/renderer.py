"""Export rendering for formatted documents.

Rendering is pure in its payload: ``render`` turns Markdown into an
``ExportArtifact`` whose bytes depend only on the text and the format. The one
piece of state it advances is the filename counter, so every artifact gets a
name no earlier export from the same renderer used.

Hand-off operations (``save``, ``paginate``, ``print_document``,
``copy_to_clipboard``) delegate to the host capabilities and raise
``ExportIOFailure`` when those fail. None of them reads or changes the
orchestrator's state, so a failed export can simply be retried.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import time
from types import MappingProxyType

from jinja2 import Environment, PackageLoader, select_autoescape
import markdown

from proformat.constants import (
    EXPORT_BACKGROUND_COLOR,
    EXPORT_DOCUMENT_TITLE,
    EXPORT_FILENAME_PREFIX,
    EXPORT_MUTED_COLOR,
    EXPORT_RULE_COLOR,
    EXPORT_TEXT_COLOR,
    PAGINATION_NOT_READY_MESSAGE,
    PRINT_REGION_ID,
    UTF8_BOM,
)
from proformat.core.types import ExportArtifact, ExportFormat, PaginationOptions
from proformat.exceptions import (
    ClipboardFailure,
    ExportIOFailure,
    PaginationNotReadyError,
)
from proformat.telemetry import TelemetryContext, TelemetryContextProtocol

from .capabilities import HostCapabilities

log = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ("extra", "sane_lists")

# Exports always use the light palette, whatever the viewer's theme
LIGHT_PALETTE = MappingProxyType(
    {
        "text": EXPORT_TEXT_COLOR,
        "background": EXPORT_BACKGROUND_COLOR,
        "muted": EXPORT_MUTED_COLOR,
        "rule": EXPORT_RULE_COLOR,
    }
)

_templates = Environment(
    loader=PackageLoader("proformat.export", "templates"),
    autoescape=select_autoescape(["html", "j2"]),
    keep_trailing_newline=True,
)


def markdown_to_html(text: str) -> str:
    """Render Markdown to an HTML fragment.

    Raw HTML in the source is escaped rather than passed through, so
    generated text cannot inject markup into exported documents.
    """
    md = markdown.Markdown(extensions=list(MARKDOWN_EXTENSIONS), output_format="xhtml")
    md.preprocessors.deregister("html_block")
    md.inlinePatterns.deregister("html")
    return md.convert(text)


class ExportRenderer:
    """Renders formatted Markdown into export artifacts and hands them off."""

    def __init__(
        self,
        capabilities: HostCapabilities | None = None,
        *,
        clock: Callable[[], float] = time.time,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self.capabilities = capabilities or HostCapabilities()
        self._clock = clock
        self._last_stamp = 0
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    # --- Pure rendering ---

    def render(
        self,
        formatted_text: str,
        fmt: ExportFormat | str,
        *,
        viewer_dark_mode: bool = False,
    ) -> ExportArtifact:
        """Render ``formatted_text`` as ``fmt``.

        ``markdown-source`` and ``plain-text`` return the text unchanged.
        ``hypertext`` and ``word-hypertext`` return a BOM-prefixed UTF-8
        document. ``paginated-document`` returns the HTML content to hand to
        the pagination capability (see ``paginate``).

        The payload is deterministic; the filename is reserved from the
        renderer's counter, so two renders never share one.

        ``viewer_dark_mode`` describes the viewer's active theme. Exports
        always use the light palette, so it never changes the output.
        """
        fmt = ExportFormat.parse(fmt)
        with self._telemetry("export.render", format=fmt.value):
            if viewer_dark_mode:
                log.debug("Viewer is in dark mode; exporting with light styling.")

            if fmt in (ExportFormat.MARKDOWN, ExportFormat.PLAIN_TEXT):
                payload: str | bytes = formatted_text
            elif fmt is ExportFormat.PDF:
                payload = self.render_content(formatted_text)
            else:
                document = self.render_document(
                    formatted_text, word_namespaces=fmt is ExportFormat.WORD
                )
                payload = (UTF8_BOM + document).encode("utf-8")

        return ExportArtifact(format=fmt, payload=payload, filename=self.filename_for(fmt))

    def render_content(self, formatted_text: str) -> str:
        """Render the Markdown into the content block used by every HTML export."""
        return f'<div class="content">{markdown_to_html(formatted_text)}</div>'

    def render_document(self, formatted_text: str, *, word_namespaces: bool = False) -> str:
        """Render a standalone, light-themed HTML document."""
        return _templates.get_template("document.html.j2").render(
            title=EXPORT_DOCUMENT_TITLE,
            body=markdown_to_html(formatted_text),
            palette=LIGHT_PALETTE,
            word_namespaces=word_namespaces,
        )

    def filename_for(self, fmt: ExportFormat) -> str:
        """Return a filename that no earlier export from this renderer used."""
        stamp = max(int(self._clock() * 1000), self._last_stamp + 1)
        self._last_stamp = stamp
        return f"{EXPORT_FILENAME_PREFIX}-{stamp}.{fmt.extension}"

    # --- Hand-off ---

    def save(self, artifact: ExportArtifact) -> str:
        """Hand a text or HTML artifact to the download capability.

        Returns:
            The artifact's filename.

        Raises:
            ExportIOFailure: If no download capability is available or it fails.
        """
        if artifact.format is ExportFormat.PDF:
            raise ValueError("Paginated documents are saved with paginate(), not save().")
        downloads = self.capabilities.require(self.capabilities.downloads, "download")
        self._call_capability(
            "download",
            downloads.download,
            artifact.payload,
            artifact.mime_type,
            artifact.filename,
        )
        return artifact.filename

    async def paginate(
        self,
        formatted_text: str,
        options: PaginationOptions | None = None,
    ) -> str:
        """Produce a paginated document through the pagination capability.

        Returns:
            The generated filename.

        Raises:
            PaginationNotReadyError: If the capability is still initializing.
            ExportIOFailure: If it is missing or fails.
        """
        pagination = self.capabilities.require(self.capabilities.pagination, "pagination")
        if not pagination.is_ready():
            raise PaginationNotReadyError(PAGINATION_NOT_READY_MESSAGE)

        artifact = self.render(formatted_text, ExportFormat.PDF)
        try:
            await pagination.save(
                str(artifact.payload), artifact.filename, options or PaginationOptions()
            )
        except ExportIOFailure:
            raise
        except Exception as e:
            raise ExportIOFailure(f"Pagination failed: {e}") from e
        return artifact.filename

    async def export(self, formatted_text: str, fmt: ExportFormat | str) -> str:
        """Render ``formatted_text`` as ``fmt`` and save it. Returns the filename."""
        fmt = ExportFormat.parse(fmt)
        if fmt is ExportFormat.PDF:
            return await self.paginate(formatted_text)
        return self.save(self.render(formatted_text, fmt))

    def print_document(self, region_id: str = PRINT_REGION_ID) -> None:
        """Open the host's print dialog for ``region_id``."""
        printer = self.capabilities.require(self.capabilities.printer, "print")
        self._call_capability("print", printer.print_region, region_id)

    def copy_to_clipboard(self, text: str) -> bool:
        """Copy ``text`` to the clipboard.

        Returns False instead of raising when the copy fails; callers simply
        skip their "copied" confirmation.
        """
        clipboard = self.capabilities.clipboard
        if clipboard is None:
            log.debug("No clipboard capability; copy skipped.")
            return False
        try:
            clipboard.write_text(text)
        except (ClipboardFailure, OSError) as e:
            log.debug("Clipboard write failed: %s", e)
            return False
        return True

    def _call_capability(self, name: str, func: Callable[..., object], *args: object) -> None:
        try:
            func(*args)
        except ExportIOFailure:
            raise
        except Exception as e:
            raise ExportIOFailure(f"The {name} capability failed: {e}") from e
