"""ProFormat: rewrite free-form text with Gemini and export it in several formats."""

import importlib.metadata
import logging

from proformat.client import (
    GenerationAdapter,
    GenerationClient,
    GoogleGenAIAdapter,
    MockAdapter,
    PromptBuilder,
    create_client,
)
from proformat.config import FrozenConfig, config_scope, resolve_config
from proformat.core.types import (
    ExportArtifact,
    ExportFormat,
    FormatRequest,
    FormattedDocument,
    FormattingOptions,
    PaginationOptions,
    Phase,
    Tone,
)
from proformat.exceptions import (
    ClipboardFailure,
    ConfigurationError,
    EmptyInputError,
    ExportIOFailure,
    GenerationFailure,
    InputTooLargeError,
    PaginationNotReadyError,
    ProformatError,
)
from proformat.export import ExportRenderer, HostCapabilities, create_local_capabilities
from proformat.orchestrator import RequestOrchestrator, create_orchestrator
from proformat.telemetry import TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("proformat")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Orchestration
    "RequestOrchestrator",
    "create_orchestrator",
    "Phase",
    # Configuration
    "FrozenConfig",
    "resolve_config",
    "config_scope",
    # Generation
    "GenerationClient",
    "GenerationAdapter",
    "GoogleGenAIAdapter",
    "MockAdapter",
    "PromptBuilder",
    "create_client",
    # Data model
    "Tone",
    "FormattingOptions",
    "FormatRequest",
    "FormattedDocument",
    # Export
    "ExportRenderer",
    "ExportFormat",
    "ExportArtifact",
    "PaginationOptions",
    "HostCapabilities",
    "create_local_capabilities",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "ProformatError",
    "ConfigurationError",
    "EmptyInputError",
    "InputTooLargeError",
    "GenerationFailure",
    "ExportIOFailure",
    "PaginationNotReadyError",
    "ClipboardFailure",
]
