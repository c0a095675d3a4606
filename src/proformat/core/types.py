"""Core data types for the formatting pipeline.

These immutable dataclasses define the shape of the data as it moves from
user input, through the generation service, to the export renderers.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from proformat.constants import (
    PDF_IMAGE_QUALITY,
    PDF_IMAGE_TYPE,
    PDF_MARGIN_INCHES,
    PDF_ORIENTATION,
    PDF_PAGE_FORMAT,
    PDF_RASTER_SCALE,
    PDF_UNIT,
)

# --- Result Types ---


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome, containing the error."""

    error: TFailure


type Result[TSuccess, TFailure] = Success[TSuccess] | Failure[TFailure]


# --- Configuration Model ---


class Tone(str, Enum):
    """Writing tone requested from the generation service.

    Values are the display names and are embedded verbatim in prompts.
    """

    PROFESSIONAL = "Professional"
    ACADEMIC = "Academic"
    CASUAL = "Casual"
    EXECUTIVE = "Executive Summary"
    PERSUASIVE = "Persuasive"

    @classmethod
    def parse(cls, value: str | Tone) -> Tone:
        """Parse a tone from its member name or display value."""
        if isinstance(value, Tone):
            return value
        normalized = value.strip().lower().replace("-", " ").replace("_", " ")
        for tone in cls:
            if normalized in (tone.value.lower(), tone.name.lower()):
                return tone
        choices = ", ".join(t.value for t in cls)
        raise ValueError(f"Invalid tone: {value!r}. Must be one of: {choices}")


@dataclasses.dataclass(frozen=True, slots=True)
class FormattingOptions:
    """Style options for a single formatting request.

    Instances are immutable snapshots; use ``replace`` to derive a new one.
    """

    tone: Tone = Tone.PROFESSIONAL
    fix_grammar: bool = True
    include_summary: bool = False

    def replace(self, **changes: Any) -> FormattingOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    with_ = replace


# --- Request Lifecycle ---


class Phase(str, Enum):
    """Lifecycle phase of the request orchestrator."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.SUCCEEDED, Phase.FAILED)


@dataclasses.dataclass(frozen=True, slots=True)
class FormatRequest:
    """A formatting request as issued to the generation service."""

    raw_text: str
    options: FormattingOptions
    created_at: int  # Generation token issued by the orchestrator

    def reissue(self, created_at: int) -> FormatRequest:
        """Return the same request content under a new generation token."""
        return dataclasses.replace(self, created_at=created_at)


@dataclasses.dataclass(frozen=True, slots=True)
class FormattedDocument:
    """The outcome of a successful formatting request."""

    original: str
    formatted: str  # Markdown
    timestamp: float


# --- Export Types ---


class ExportFormat(str, Enum):
    """Formats the export renderer can produce."""

    MARKDOWN = "markdown-source"
    PLAIN_TEXT = "plain-text"
    HTML = "hypertext"
    WORD = "word-hypertext"
    PDF = "paginated-document"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: str | ExportFormat) -> ExportFormat:
        """Parse a format from its value or its file extension (``md``, ``pdf``...)."""
        if isinstance(value, ExportFormat):
            return value
        normalized = value.strip().lower().lstrip(".")
        for fmt in cls:
            if normalized in (fmt.value, fmt.extension, fmt.name.lower()):
                return fmt
        choices = ", ".join(f.extension for f in cls)
        raise ValueError(f"Invalid export format: {value!r}. Must be one of: {choices}")


_EXTENSIONS = {
    ExportFormat.MARKDOWN: "md",
    ExportFormat.PLAIN_TEXT: "txt",
    ExportFormat.HTML: "html",
    ExportFormat.WORD: "doc",
    ExportFormat.PDF: "pdf",
}

_MIME_TYPES = {
    ExportFormat.MARKDOWN: "text/markdown",
    ExportFormat.PLAIN_TEXT: "text/plain",
    ExportFormat.HTML: "text/html",
    ExportFormat.WORD: "application/msword",
    ExportFormat.PDF: "application/pdf",
}


@dataclasses.dataclass(frozen=True, slots=True)
class ExportArtifact:
    """A rendering of the current result, ready for hand-off to the host."""

    format: ExportFormat
    payload: str | bytes
    filename: str

    @property
    def mime_type(self) -> str:
        return self.format.mime_type


@dataclasses.dataclass(frozen=True, slots=True)
class PaginationOptions:
    """Options handed to the pagination capability.

    Margins are (top, left, bottom, right) in ``unit``.
    """

    margin: tuple[float, float, float, float] = (PDF_MARGIN_INCHES,) * 4
    image_type: str = PDF_IMAGE_TYPE
    image_quality: float = PDF_IMAGE_QUALITY
    scale: int = PDF_RASTER_SCALE
    unit: str = PDF_UNIT
    page_format: str = PDF_PAGE_FORMAT
    orientation: str = PDF_ORIENTATION
