"""Exceptions for the formatting pipeline"""  # noqa: D415


class ProformatError(Exception):
    """Base exception for formatting and export errors"""  # noqa: D415


class ConfigurationError(ProformatError):
    """Raised when settings are missing or inconsistent"""  # noqa: D415


class EmptyInputError(ProformatError):
    """Raised when a caller validates input that holds no meaningful text"""  # noqa: D415


class InputTooLargeError(ProformatError):
    """Raised when input exceeds the configured character limit"""  # noqa: D415

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Input is {length} characters long; the limit is {limit} characters."
        )
        self.length = length
        self.limit = limit


class GenerationFailure(ProformatError):  # noqa: N818
    """Raised when the generation service fails for any reason.

    Network, authentication, quota and malformed-response conditions all
    surface as this single type. The original exception is kept as
    ``__cause__`` for diagnostics.
    """


class ExportIOFailure(ProformatError):  # noqa: N818
    """Raised when a download, print or pagination capability fails"""  # noqa: D415


class PaginationNotReadyError(ExportIOFailure):
    """Raised when the pagination backend has not finished loading"""  # noqa: D415


class ClipboardFailure(ExportIOFailure):  # noqa: N818
    """Raised by clipboard capabilities when a write is refused"""  # noqa: D415
