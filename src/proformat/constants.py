"""
Project-wide constants for the ProFormat pipeline
"""  # noqa: D200, D212, D415

# ==============================================================================
# Generation Service
# ==============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"

# Returned in place of an empty payload from a "successful" generation call
EMPTY_GENERATION_SENTINEL = "Failed to generate formatted text."

# Shown to the user whenever generation fails, whatever the cause
GENERATION_ERROR_MESSAGE = (
    "Something went wrong with the AI service. "
    "Please check your connection or API limit."
)

# ==============================================================================
# Export Configuration
# ==============================================================================

EXPORT_FILENAME_PREFIX = "proformat-export"
EXPORT_DOCUMENT_TITLE = "Formatted Document"
UTF8_BOM = "\ufeff"

# Region handed to the print capability
PRINT_REGION_ID = "print-area"

PAGINATION_NOT_READY_MESSAGE = (
    "PDF generator is initializing. Please try again in a moment."
)

# Pagination settings
PDF_MARGIN_INCHES = 0.5
PDF_IMAGE_TYPE = "jpeg"
PDF_IMAGE_QUALITY = 0.98
PDF_RASTER_SCALE = 2
PDF_UNIT = "in"
PDF_PAGE_FORMAT = "letter"
PDF_ORIENTATION = "portrait"

# ==============================================================================
# Export Styling
# ==============================================================================

# Light, print-friendly palette applied regardless of the viewer's theme
EXPORT_TEXT_COLOR = "#111827"
EXPORT_BACKGROUND_COLOR = "#ffffff"
EXPORT_MUTED_COLOR = "#4b5563"
EXPORT_RULE_COLOR = "#e5e7eb"
