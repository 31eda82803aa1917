"""Build tooling for the Web Audio Tutorials documentation site.

This package exposes the CLI entry points used by ``uv run pages`` to render
the Markdown tutorials, check their links, and preview the result.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from webaudio_pages import main
>>> main(["generate"])  # doctest: +SKIP
>>> from webaudio_pages import app
>>> app(["check"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
