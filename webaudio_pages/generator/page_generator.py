"""High-level orchestration for building the static tutorial site.

This module coordinates scanning the content tree, rendering every Markdown
document with :class:`HtmlContentRenderer`, checking navigation and document
links, and writing themed HTML through the layout the
:class:`~webaudio_pages.theme.ThemeComposer` provides. It exposes
:class:`SiteGenerator`, which consumes a
:class:`~webaudio_pages.config.SiteDescriptor`.

Link checking happens after rendering and before anything is written, so a
build with dead links leaves the output directory untouched.

Example
-------
>>> from pathlib import Path
>>> from webaudio_pages.config import load_site_descriptor
>>> from webaudio_pages.generator import SiteGenerator
>>> site = load_site_descriptor(Path("config/site.yaml"))  # doctest: +SKIP
>>> SiteGenerator(site).run()  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import typing as typ

from webaudio_pages._constants import BUILD_MANIFEST
from webaudio_pages.content import ContentTree
from webaudio_pages.generator.link_collector import DocumentLinkExtension
from webaudio_pages.generator.models import PageModel
from webaudio_pages.generator.renderer import HtmlContentRenderer
from webaudio_pages.links import DeadLinkError, LinkChecker
from webaudio_pages.paths import output_name, page_href
from webaudio_pages.theme import ThemeComposer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from webaudio_pages.config import SiteDescriptor
    from webaudio_pages.content import Document
    from webaudio_pages.links import LinkDiagnostic

logger = logging.getLogger(__name__)


class SiteGenerator:
    """Render every content document into themed HTML."""

    def __init__(
        self,
        site: SiteDescriptor,
        *,
        composer: ThemeComposer | None = None,
        content: ContentTree | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with configuration and theme.

        Parameters
        ----------
        site : SiteDescriptor
            Site metadata, navigation, and build directories.
        composer : ThemeComposer, optional
            Theme supplying the page layout; defaults to the stock theme.
        content : ContentTree, optional
            Pre-scanned content; defaults to scanning ``site.source_dir``.
        output_dir : Path, optional
            Override for the HTML output directory.
        """
        self.site = site
        self.composer = composer or ThemeComposer()
        if content is None:
            content = ContentTree.from_directory(
                site.source_dir, excluded=site.excluded_source_paths
            )
        self.content = content
        self.output_dir = output_dir or site.output_dir
        self.renderer = HtmlContentRenderer(
            site.code_highlight_theme, line_numbers=site.show_line_numbers
        )

    def check(self) -> list[LinkDiagnostic]:
        """Render documents in memory and return every dead link found."""
        pages = self._render_pages()
        return self._check_links(pages)

    def run(self) -> list[Path]:
        """Render, check, and write the site.

        Returns
        -------
        list[Path]
            Paths to the generated HTML documents, in content order.

        Raises
        ------
        DeadLinkError
            If any navigation or document link fails to resolve and is not
            exempted by ``dead_link_ignore_patterns``.
        RuntimeError
            If the content tree holds no documents.
        """
        if not len(self.content):
            msg = f"No Markdown documents found in '{self.site.source_dir}'."
            raise RuntimeError(msg)

        pages = self._render_pages()
        diagnostics = self._check_links(pages)
        if diagnostics:
            raise DeadLinkError(diagnostics)

        layout = self.composer.compose_layout()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for page in pages:
            html = layout.render(
                page,
                self.site,
                stylesheet=self.renderer.stylesheet,
                analytics=self.composer.analytics,
            )
            output_path = self.output_dir / output_name(page.path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            logger.debug("rendered %s -> %s", page.path, output_path)
            written.append(output_path)
        self._write_manifest(pages)
        return written

    def _render_pages(self) -> list[PageModel]:
        return [self._render_page(self.content.load(path)) for path in self.content]

    def _render_page(self, document: Document) -> PageModel:
        """Render one document, collecting and rewriting its links."""
        extension = DocumentLinkExtension(
            self.content, document.directory, self.site.base_path
        )
        html = self.renderer.markdown(document.body, extension)
        description = document.front_matter.get("description")
        return PageModel(
            path=document.path,
            title=document.title or self.site.title,
            href=page_href(f"/{document.path}", self.site.base_path),
            html=html,
            description=str(description) if description else self.site.description,
            links=list(extension.links),
        )

    def _check_links(self, pages: list[PageModel]) -> list[LinkDiagnostic]:
        checker = LinkChecker(self.site, self.content)
        return checker.run({page.path: page.links for page in pages})

    def _write_manifest(self, pages: list[PageModel]) -> None:
        """Persist the list of generated pages alongside the HTML output."""
        manifest = {
            "title": self.site.title,
            "base": self.site.base_path,
            "generated_at": dt.datetime.now(dt.UTC).isoformat(),
            "pages": [
                {"source": page.path, "href": page.href, "title": page.title}
                for page in pages
            ],
        }
        path = self.output_dir / BUILD_MANIFEST
        path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")


__all__ = ["SiteGenerator"]
