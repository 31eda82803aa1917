"""Collect and rewrite document links while markdown is rendered."""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from webaudio_pages.paths import is_external, is_unchecked, page_href

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from webaudio_pages.content import ContentTree
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    ContentTree = typ.Any


class DocumentLinkExtension(Extension):
    """Record every link in a document and point internal ones at ``.html``.

    One instance belongs to one document: after rendering, :attr:`links`
    holds the targets exactly as the author wrote them, in document order,
    so the link checker can report them against the document's path. Internal
    targets that resolve in the content tree are rewritten to the served
    ``.html`` href under the site base path.
    """

    def __init__(self, content: ContentTree, directory: str, base_path: str) -> None:
        super().__init__()
        self.content = content
        self.directory = directory
        self.base_path = base_path
        self.links: list[str] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the link treeprocessor on the Markdown instance."""
        processor = DocumentLinkTreeprocessor(md, self)
        md.treeprocessors.register(processor, "webaudio_document_links", 15)


class DocumentLinkTreeprocessor(Treeprocessor):
    """Walk anchors, recording and rewriting their targets."""

    def __init__(self, md: Markdown, extension: DocumentLinkExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Record link targets and rewrite resolvable internal ones."""
        for element in root.iter():
            if element.tag != "a":
                continue
            target = element.get("href")
            if not target:
                continue
            self.extension.links.append(target)
            rewritten = self._rewrite(target)
            if rewritten:
                element.set("href", rewritten)
        return root

    def _rewrite(self, target: str) -> str | None:
        """Return the served href for an internal document link, if it resolves."""
        if is_external(target) or is_unchecked(target):
            return None
        document = self.extension.content.resolve(
            target, relative_to=self.extension.directory
        )
        if document is None:
            return None
        return page_href(
            target,
            self.extension.base_path,
            self.extension.directory,
            document=document,
        )


__all__ = ["DocumentLinkExtension", "DocumentLinkTreeprocessor"]
