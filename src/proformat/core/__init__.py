"""Core data types shared across the pipeline."""

from .types import (
    ExportArtifact,
    ExportFormat,
    Failure,
    FormatRequest,
    FormattedDocument,
    FormattingOptions,
    PaginationOptions,
    Phase,
    Result,
    Success,
    Tone,
)

__all__ = [  # noqa: RUF022
    "Tone",
    "FormattingOptions",
    "FormatRequest",
    "FormattedDocument",
    "Phase",
    "ExportFormat",
    "ExportArtifact",
    "PaginationOptions",
    "Result",
    "Success",
    "Failure",
]
