"""Build-time link resolution for navigation entries and Markdown documents.

:class:`LinkChecker` walks every link the site exposes (the nav bar, the
sidebar tree, social icons, and the anchors inside rendered documents) and
reports the ones the generated site could not serve:

* internal targets that do not resolve to a document in the
  :class:`~webaudio_pages.content.ContentTree` are *unresolved internal
  links*;
* absolute URLs pointing at a loopback host are *local development links*,
  since they only work on the author's machine.

Any target matching one of the descriptor's ``dead_link_ignore_patterns`` is
exempt. Other external URLs, ``mailto:`` links, and bare fragments are not
checked.

Example
-------
>>> from webaudio_pages.config import NavEntry, SidebarGroup, SiteDescriptor
>>> from webaudio_pages.content import ContentTree
>>> from webaudio_pages.links import LinkChecker
>>> site = SiteDescriptor(
...     title="Docs",
...     sidebar=(SidebarGroup("Basics", (NavEntry("Intro", "/basics/intro.md"),)),),
... )
>>> LinkChecker(site, ContentTree([])).check_navigation()[0].target
'/basics/intro.md'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .paths import is_external, is_loopback, is_unchecked

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import SiteDescriptor
    from .content import ContentTree

UNRESOLVED_INTERNAL_LINK = "unresolved internal link"
LOCAL_DEVELOPMENT_LINK = "local development link"


@dc.dataclass(frozen=True, slots=True)
class LinkDiagnostic:
    """A link the generated site cannot serve.

    Attributes
    ----------
    target : str
        The link exactly as written in the configuration or document.
    source : str
        Where the link was found, e.g. ``sidebar > Basics > Intro`` or a
        document path.
    reason : str
        ``"unresolved internal link"`` or ``"local development link"``.
    """

    target: str
    source: str
    reason: str

    def __str__(self) -> str:
        return f"{self.reason} {self.target} in {self.source}"


class DeadLinkError(RuntimeError):
    """Raised when a build finds links that do not resolve."""

    def __init__(self, diagnostics: cabc.Sequence[LinkDiagnostic]) -> None:
        self.diagnostics = tuple(diagnostics)
        lines = "\n".join(f"  - {diagnostic}" for diagnostic in self.diagnostics)
        super().__init__(f"Found {len(self.diagnostics)} dead link(s):\n{lines}")


class LinkChecker:
    """Resolve site links against a content tree."""

    def __init__(self, site: SiteDescriptor, content: ContentTree) -> None:
        self.site = site
        self.content = content

    def check_navigation(self) -> list[LinkDiagnostic]:
        """Check nav bar entries, sidebar groups and items, and social links."""
        diagnostics: list[LinkDiagnostic] = []
        for entry in self.site.nav:
            diagnostics.extend(self._check(entry.target, f"nav > {entry.label}"))
        for group in self.site.sidebar:
            if group.target:
                diagnostics.extend(self._check(group.target, f"sidebar > {group.label}"))
            for item in group.items:
                source = f"sidebar > {group.label} > {item.label}"
                diagnostics.extend(self._check(item.target, source))
        for link in self.site.social_links:
            diagnostics.extend(self._check(link.target, f"social > {link.icon}"))
        return diagnostics

    def check_document(
        self, path: str, links: cabc.Iterable[str]
    ) -> list[LinkDiagnostic]:
        """Check links collected from the document at ``path``.

        Relative links resolve against the document's directory.
        """
        directory, _, _ = path.rpartition("/")
        diagnostics: list[LinkDiagnostic] = []
        for target in links:
            diagnostics.extend(self._check(target, path, relative_to=directory))
        return diagnostics

    def run(
        self, documents: cabc.Mapping[str, cabc.Iterable[str]] | None = None
    ) -> list[LinkDiagnostic]:
        """Check navigation and, when given, every document's links.

        Parameters
        ----------
        documents : Mapping[str, Iterable[str]], optional
            Document path mapped to the link targets found in it.

        Returns
        -------
        list[LinkDiagnostic]
            Every reported link, navigation first, then documents in order.
        """
        diagnostics = self.check_navigation()
        for path, links in (documents or {}).items():
            diagnostics.extend(self.check_document(path, links))
        return diagnostics

    def _check(
        self, target: str, source: str, *, relative_to: str = ""
    ) -> list[LinkDiagnostic]:
        if is_unchecked(target) or self.site.is_ignored(target):
            return []
        if is_external(target):
            if is_loopback(target):
                return [LinkDiagnostic(target, source, LOCAL_DEVELOPMENT_LINK)]
            return []
        if self.content.resolve(target, relative_to=relative_to) is None:
            return [LinkDiagnostic(target, source, UNRESOLVED_INTERNAL_LINK)]
        return []


__all__ = [
    "LOCAL_DEVELOPMENT_LINK",
    "UNRESOLVED_INTERNAL_LINK",
    "DeadLinkError",
    "LinkChecker",
    "LinkDiagnostic",
]
