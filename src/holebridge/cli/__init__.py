"""Command-line interface for holebridge.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for polygon processing
- Verbose/quiet output modes
- Dry-run and hole listing modes
- Detailed error reporting
"""

from holebridge.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
