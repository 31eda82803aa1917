"""Typed dataclasses describing the Web Audio Tutorials site configuration."""

from __future__ import annotations

import dataclasses as dc
import re  # noqa: TC003 - used for runtime type metadata
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """A labelled link shown in the nav bar or inside a sidebar group."""

    label: str
    target: str


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """Named, ordered collection of links shown in the side navigation.

    Attributes
    ----------
    label : str
        Heading displayed above the group's entries.
    items : tuple[NavEntry, ...]
        Entries in display order; internal paths and external URLs may mix.
    target : str | None
        Optional link for the group heading itself.
    """

    label: str
    items: tuple[NavEntry, ...] = ()
    target: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Icon link rendered at the end of the nav bar."""

    icon: str
    target: str


@dc.dataclass(frozen=True, slots=True)
class SiteDescriptor:
    """The single configuration value a site build consumes.

    Sequences are tuples so the descriptor can be shared between the
    generator, the link checker, and the running application without any
    party mutating it.
    """

    title: str
    description: str = ""
    excluded_source_paths: frozenset[str] = frozenset()
    base_path: str = "/"
    code_highlight_theme: str = "monokai"
    show_line_numbers: bool = False
    dead_link_ignore_patterns: tuple[re.Pattern[str], ...] = ()
    nav: tuple[NavEntry, ...] = ()
    sidebar: tuple[SidebarGroup, ...] = ()
    social_links: tuple[SocialLink, ...] = ()
    source_dir: Path = Path("content")
    output_dir: Path = Path("public")

    def is_ignored(self, target: str) -> bool:
        """Return ``True`` when ``target`` matches a dead-link ignore pattern."""
        return any(pattern.search(target) for pattern in self.dead_link_ignore_patterns)


__all__ = [
    "NavEntry",
    "SidebarGroup",
    "SiteConfigError",
    "SiteDescriptor",
    "SocialLink",
]
