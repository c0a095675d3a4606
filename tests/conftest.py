"""
Global test configuration.
"""

import os

import pytest

from proformat.core.types import FormattingOptions, Tone
from proformat.export import HostCapabilities
from tests.helpers import (
    FlakyClipboard,
    RecordingDownloads,
    RecordingPrinter,
    StubPaginator,
)


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_proformat_env(request, monkeypatch):
    """Ensure a clean PROFORMAT_*/GEMINI_* environment for each test.

    Tests should only see environment that they explicitly set.

    Escape hatches:
      - @pytest.mark.allow_env_pollution: keep current env unchanged
      - tests marked with @pytest.mark.api bypass isolation so the real
        key can be used when explicitly running API tests.
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith(("PROFORMAT_", "GEMINI_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    # Avoid DEBUG toggles switching on telemetry
    monkeypatch.delenv("DEBUG", raising=False)


# --- Shared Fixtures ---


@pytest.fixture
def academic_options() -> FormattingOptions:
    return FormattingOptions(tone=Tone.ACADEMIC, fix_grammar=True, include_summary=True)


@pytest.fixture
def sample_markdown() -> str:
    return (
        "# Q3 Budget Review\n"
        "\n"
        "## Summary\n"
        "\n"
        "The team discussed the **Q3 budget** and needs *approval* by Friday.\n"
        "\n"
        "- Review line items\n"
        "- Confirm vendor costs\n"
        "\n"
        "1. Draft\n"
        "2. Approve\n"
        "\n"
        "> Decisions are final once signed off.\n"
    )


@pytest.fixture
def host() -> HostCapabilities:
    """Capabilities that record every hand-off instead of touching a real host."""
    return HostCapabilities(
        downloads=RecordingDownloads(),
        clipboard=FlakyClipboard(),
        printer=RecordingPrinter(),
        pagination=StubPaginator(),
    )
