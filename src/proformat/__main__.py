"""CLI entry point.

Usage:
    python -m proformat notes.txt --tone academic --summary --export pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
