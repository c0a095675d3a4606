"""Command-line front end.

Paste (or pipe) text in, get the formatted Markdown back, and optionally
export it.

Examples:
- python -m proformat notes.txt --tone academic --summary
- cat notes.txt | proformat --export pdf --export doc --out-dir exports
- proformat notes.txt --real --no-grammar   (calls the Gemini API)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING

from proformat.config import resolve_config
from proformat.core.types import ExportFormat, FormattingOptions, Phase, Tone
from proformat.exceptions import (
    ConfigurationError,
    EmptyInputError,
    ExportIOFailure,
    InputTooLargeError,
)
from proformat.export import ExportRenderer, create_local_capabilities
from proformat.orchestrator import create_orchestrator
from proformat.telemetry import InMemoryReporter, TelemetryContext, telemetry_enabled

if TYPE_CHECKING:
    from collections.abc import Sequence

    from proformat.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERATION_FAILED = 3
EXIT_EXPORT_FAILED = 4


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``proformat`` command."""
    parser = argparse.ArgumentParser(
        prog="proformat",
        description="Rewrite text into a professionally formatted document.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Text file to format (reads stdin when omitted or '-')",
    )
    parser.add_argument(
        "--tone",
        type=Tone.parse,
        default=Tone.PROFESSIONAL,
        help="One of: " + ", ".join(t.value for t in Tone),
    )
    grammar = parser.add_mutually_exclusive_group()
    grammar.add_argument(
        "--fix-grammar", dest="fix_grammar", action="store_true", default=True
    )
    grammar.add_argument(
        "--no-grammar",
        dest="fix_grammar",
        action="store_false",
        help="Keep the original phrasing mostly intact",
    )
    parser.add_argument(
        "--summary",
        dest="include_summary",
        action="store_true",
        help="Add a brief executive summary at the top",
    )
    parser.add_argument(
        "--export",
        dest="formats",
        action="append",
        type=ExportFormat.parse,
        default=[],
        metavar="FORMAT",
        help="Export format (md, txt, html, doc, pdf); repeatable",
    )
    parser.add_argument("--out-dir", type=Path, help="Directory for exported files")
    parser.add_argument("--model", help="Gemini model identifier")
    parser.add_argument(
        "--real",
        dest="use_real_api",
        action="store_true",
        default=None,
        help="Call the Gemini API (requires GEMINI_API_KEY)",
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Do not print the formatted text"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def read_input(path: Path | None) -> str:
    """Read the text to format from ``path`` or stdin.

    Raises:
        EmptyInputError: If the text is empty or whitespace only.
    """
    if path is None or str(path) == "-":
        text = sys.stdin.read()
    else:
        text = path.read_text(encoding="utf-8")
    if not text.strip():
        raise EmptyInputError("Nothing to format: the input is empty.")
    return text


async def run(args: argparse.Namespace) -> int:
    """Format the input and export it as requested. Returns the exit code.

    With telemetry enabled (``PROFORMAT_TELEMETRY=1``) a timing report is
    printed to stderr when the run ends.
    """
    reporter = InMemoryReporter()
    try:
        return await _format_and_export(args, TelemetryContext(reporter))
    finally:
        if telemetry_enabled():
            print(reporter.get_report(), file=sys.stderr)  # noqa: T201


async def _format_and_export(
    args: argparse.Namespace, telemetry: TelemetryContextProtocol
) -> int:
    config = resolve_config(
        model=args.model,
        use_real_api=args.use_real_api,
        export_dir=args.out_dir,
    )
    options = FormattingOptions(
        tone=args.tone,
        fix_grammar=args.fix_grammar,
        include_summary=args.include_summary,
    )
    text = read_input(args.input)

    log.debug("Formatting %d characters with %s", len(text), options)
    orchestrator = create_orchestrator(config, telemetry=telemetry)
    phase = await orchestrator.submit(text, options)
    if phase is not Phase.SUCCEEDED or orchestrator.result is None:
        print(orchestrator.error_message, file=sys.stderr)  # noqa: T201
        return EXIT_GENERATION_FAILED

    formatted = orchestrator.result.formatted
    if not args.quiet:
        print(formatted)  # noqa: T201

    if not args.formats:
        return EXIT_OK

    renderer = ExportRenderer(
        create_local_capabilities(config.export_dir), telemetry=telemetry
    )
    exit_code = EXIT_OK
    for fmt in args.formats:
        try:
            filename = await renderer.export(formatted, fmt)
        except ExportIOFailure as e:
            # The formatted result is unaffected; other formats still export
            print(f"Export to {fmt.extension} failed: {e}", file=sys.stderr)  # noqa: T201
            exit_code = EXIT_EXPORT_FAILED
            continue
        print(f"Saved {config.export_dir / filename}", file=sys.stderr)  # noqa: T201
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``proformat`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(run(args))
    except (EmptyInputError, InputTooLargeError, ConfigurationError) as e:
        print(f"proformat: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_USAGE
    except OSError as e:
        print(f"proformat: could not read input: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_USAGE
