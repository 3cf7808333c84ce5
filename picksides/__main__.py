#!/usr/bin/env python3
"""
Enable running picksides commands via: python -m picksides

Usage:
    python -m picksides personas
    python -m picksides analyze --persona Socrates "text"
"""

import sys


def main():
    """Route to the CLI."""
    from picksides.cli import main as cli_main
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
