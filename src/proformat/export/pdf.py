"""PDF pagination backed by reportlab.

``ReportLabPaginator`` implements the pagination capability: it takes the
HTML content block produced by the renderer, maps its block elements onto
reportlab platypus flowables, and writes a paginated PDF.
"""

from __future__ import annotations

import asyncio
from html.entities import name2codepoint
import importlib
import logging
from pathlib import Path
import re
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any
from xml.etree import ElementTree
from xml.sax.saxutils import escape, quoteattr

from proformat.constants import EXPORT_DOCUMENT_TITLE, EXPORT_MUTED_COLOR, EXPORT_TEXT_COLOR
from proformat.exceptions import ExportIOFailure, PaginationNotReadyError

if TYPE_CHECKING:
    from proformat.core.types import PaginationOptions

log = logging.getLogger(__name__)

_HEADINGS = {f"h{n}": f"Heading{n}" for n in range(1, 7)}
_INLINE_MAP = {"strong": "b", "b": "b", "em": "i", "i": "i", "del": "strike", "u": "u"}
_INLINE_TAGS = {*_INLINE_MAP, "code", "a", "br", "span", "sup", "sub", "abbr", "img"}
_XML_ENTITIES = {"amp", "lt", "gt", "quot", "apos"}
_NAMED_ENTITY = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


class ReportLabPaginator:
    """Pagination capability that writes PDFs into a directory.

    The reportlab backend is loaded by ``warm_up()``; until then
    ``is_ready()`` is False and ``save`` refuses to run.
    """

    def __init__(self, out_dir: Path | str, *, warm: bool = True) -> None:
        self.out_dir = Path(out_dir)
        self._backend: SimpleNamespace | None = None
        if warm:
            self.warm_up()

    def warm_up(self) -> None:
        """Load the reportlab modules used for rendering."""
        if self._backend is not None:
            return
        self._backend = SimpleNamespace(
            colors=importlib.import_module("reportlab.lib.colors"),
            pagesizes=importlib.import_module("reportlab.lib.pagesizes"),
            styles=importlib.import_module("reportlab.lib.styles"),
            units=importlib.import_module("reportlab.lib.units"),
            platypus=importlib.import_module("reportlab.platypus"),
        )
        log.debug("reportlab backend loaded.")

    def is_ready(self) -> bool:
        return self._backend is not None

    async def save(
        self, content_html: str, filename: str, options: PaginationOptions
    ) -> None:
        self._require_backend()
        path = self.out_dir / filename
        await asyncio.to_thread(self._write_pdf, content_html, path, options)
        log.info("Saved %s to %s", filename, path)

    def build_flowables(self, content_html: str) -> list[Any]:
        """Parse the rendered content block into platypus flowables.

        HTML named entities (``&nbsp;``, ``&copy;``...) are resolved; any
        other ``&name;`` sequence is kept as literal text.

        Raises:
            PaginationNotReadyError: If the backend has not been loaded.
            ExportIOFailure: If the content is not well-formed.
        """
        self._require_backend()
        try:
            root = ElementTree.fromstring(f"<root>{_resolve_entities(content_html)}</root>")
        except ElementTree.ParseError as e:
            raise ExportIOFailure(f"Could not parse content for pagination: {e}") from e
        return self._blocks(root, self._styles())

    # --- Internal helpers ---

    def _require_backend(self) -> SimpleNamespace:
        if self._backend is None:
            raise PaginationNotReadyError("PDF backend has not been loaded yet.")
        return self._backend

    def _write_pdf(self, content_html: str, path: Path, options: PaginationOptions) -> None:
        rl = self._require_backend()
        flowables = self.build_flowables(content_html)

        page_size = self._page_size(options)
        unit = rl.units.inch if options.unit == "in" else rl.units.cm
        top, left, bottom, right = (m * unit for m in options.margin)
        if options.scale != 1:
            # Content is text only; there is no imagery to rasterize.
            log.debug("Raster scale %s has no effect on text-only content.", options.scale)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            doc = rl.platypus.SimpleDocTemplate(
                str(path),
                pagesize=page_size,
                topMargin=top,
                leftMargin=left,
                bottomMargin=bottom,
                rightMargin=right,
                title=EXPORT_DOCUMENT_TITLE,
            )
            doc.build(flowables)
        except OSError as e:
            raise ExportIOFailure(f"Could not write {path.name}: {e}") from e

    def _page_size(self, options: PaginationOptions) -> tuple[float, float]:
        pagesizes = self._backend.pagesizes
        size = getattr(pagesizes, options.page_format.upper(), None) or getattr(
            pagesizes, options.page_format.lower(), None
        )
        if size is None:
            raise ExportIOFailure(f"Unsupported page format: {options.page_format}")
        if options.orientation == "landscape":
            return pagesizes.landscape(size)
        return pagesizes.portrait(size)

    def _styles(self) -> dict[str, Any]:
        rl = self._backend
        sheet = rl.styles.getSampleStyleSheet()
        text = rl.colors.HexColor(EXPORT_TEXT_COLOR)
        styles: dict[str, Any] = {}
        for name in ("BodyText", "Code", *_HEADINGS.values()):
            style = sheet[name]
            style.textColor = text
            styles[name] = style
        styles["Quote"] = rl.styles.ParagraphStyle(
            "Quote",
            parent=sheet["BodyText"],
            leftIndent=18,
            fontName="Helvetica-Oblique",
            textColor=rl.colors.HexColor(EXPORT_MUTED_COLOR),
        )
        styles["Definition"] = rl.styles.ParagraphStyle(
            "Definition", parent=sheet["BodyText"], leftIndent=18, textColor=text
        )
        return styles

    def _blocks(
        self, element: ElementTree.Element, styles: dict[str, Any], body_style: str = "BodyText"
    ) -> list[Any]:
        platypus = self._backend.platypus
        body = styles[body_style]
        flowables: list[Any] = []

        # Loose text directly inside a container (e.g. a tight list item)
        lead = _inline_text(element, leading_only=True).strip()
        if lead:
            flowables.append(platypus.Paragraph(lead, body))

        for child in element:
            tag = child.tag
            if tag in _INLINE_TAGS:
                continue  # already part of the leading paragraph
            if tag in _HEADINGS:
                flowables.append(platypus.Paragraph(_inline_text(child), styles[_HEADINGS[tag]]))
            elif tag == "p":
                flowables.append(platypus.Paragraph(_inline_text(child), body))
            elif tag in ("ul", "ol"):
                items = [
                    platypus.ListItem(self._blocks(li, styles, body_style) or platypus.Paragraph("", body))
                    for li in child.findall("li")
                ]
                flowables.append(
                    platypus.ListFlowable(items, bulletType="bullet" if tag == "ul" else "1")
                )
            elif tag == "blockquote":
                flowables.extend(self._blocks(child, styles, "Quote"))
            elif tag == "pre":
                flowables.append(platypus.Preformatted("".join(child.itertext()), styles["Code"]))
            elif tag == "hr":
                flowables.append(platypus.HRFlowable(width="100%"))
            elif tag == "table":
                for row in child.iter("tr"):
                    cells = [_inline_text(cell) for cell in row]
                    flowables.append(platypus.Paragraph(" | ".join(cells), body))
            elif tag == "dl":
                for item in child:
                    if item.tag == "dt":
                        flowables.append(platypus.Paragraph(f"<b>{_inline_text(item)}</b>", body))
                    else:
                        flowables.extend(self._blocks(item, styles, "Definition"))
            elif any(grandchild.tag not in _INLINE_TAGS for grandchild in child):
                # Containers (div, footnotes, details...) keep their block structure
                flowables.extend(self._blocks(child, styles, body_style))
            else:
                flowables.append(platypus.Paragraph(_inline_text(child), body))
        return flowables


def _inline_text(element: ElementTree.Element, leading_only: bool = False) -> str:
    """Convert an element's inline content to reportlab paragraph markup.

    With ``leading_only`` the walk stops at the first block child, which
    picks up the text of a list item that also holds a nested list.
    """
    parts = [escape(element.text or "")]
    for child in element:
        if child.tag not in _INLINE_TAGS:
            if leading_only:
                break
            continue
        parts.append(_inline_child(child))
        parts.append(escape(child.tail or ""))
    return "".join(parts)


def _inline_child(child: ElementTree.Element) -> str:
    inner = _inline_text(child)
    tag = child.tag
    if tag in _INLINE_MAP:
        mapped = _INLINE_MAP[tag]
        return f"<{mapped}>{inner}</{mapped}>"
    if tag == "code":
        return f'<font face="Courier">{inner}</font>'
    if tag == "a" and child.get("href"):
        return f"<a href={quoteattr(child.get('href', ''))}>{inner}</a>"
    if tag == "br":
        return "<br/>"
    return inner


def _resolve_entities(content_html: str) -> str:
    """Replace HTML named entities with character references XML understands."""

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in _XML_ENTITIES:
            return match.group(0)
        if name in name2codepoint:
            return f"&#{name2codepoint[name]};"
        return f"&amp;{name};"

    return _NAMED_ENTITY.sub(replace, content_html)
