"""Cyclopts CLI entrypoint for building and previewing the Web Audio Tutorials site.

The ``pages`` console script defined here renders the Markdown content tree
into static HTML, checks navigation and document links without writing
anything, and serves the generated output locally with analytics wired to
page views. Typical usage involves running ``pages check`` in CI and
``pages generate`` to publish.

Examples
--------
Build the site with the default configuration:

>>> from webaudio_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from webaudio_pages.cli import app
>>> app(["generate", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .app import SiteApplication
from .config import load_site_descriptor
from .generator import SiteGenerator
from .links import DeadLinkError
from .preview import PreviewServer
from .theme import ThemeComposer

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("PAGES_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Generate the static HTML site from the Markdown content tree.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="PAGES_OUTPUT_DIR"),
    ] = None,
) -> None:
    """Generate every page for the configured site.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``PAGES_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.

    Raises
    ------
    SystemExit
        With status 1 when any navigation or document link does not
        resolve; each dead link is printed to stderr and nothing is written.
    """
    site = load_site_descriptor(config)
    try:
        written = SiteGenerator(site, output_dir=output_dir).run()
    except DeadLinkError as exc:
        for diagnostic in exc.diagnostics:
            print(diagnostic, file=sys.stderr)
        raise SystemExit(1) from exc
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Report dead links without writing any output.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print every dead link and exit with status 1 when any are found."""
    site = load_site_descriptor(config)
    diagnostics = SiteGenerator(site).check()
    for diagnostic in diagnostics:
        print(diagnostic, file=sys.stderr)
    if diagnostics:
        raise SystemExit(1)
    print("no dead links found")


@app.command(help="Serve the generated site locally with analytics enabled.")
def preview(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="PAGES_CONFIG")
    ] = DEFAULT_CONFIG,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = 4173,
    build: typ.Annotated[
        bool, Parameter(help="Regenerate the site before serving")
    ] = True,
) -> None:
    """Serve ``output_dir`` until interrupted, reporting page views to Matomo."""
    site = load_site_descriptor(config)
    composer = ThemeComposer()
    if build:
        SiteGenerator(site, composer=composer).run()
    application = SiteApplication(site, composer)
    server = PreviewServer(application, site.output_dir, host=host, port=port)
    bound_host, bound_port = server.address
    print(f"serving {_format_path(site.output_dir)} at http://{bound_host}:{bound_port}/")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("stopped")


def main(argv: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse instead of ``sys.argv``.

    Examples
    --------
    >>> main(["check"])  # doctest: +SKIP
    """
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )
    app(argv)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
