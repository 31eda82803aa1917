"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import re
import typing as typ

from .models import NavEntry, SidebarGroup, SiteConfigError, SocialLink


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_base_path(value: object | None) -> str:
    """Return ``value`` with exactly one leading and one trailing slash."""
    text = _optional_str(value)
    if not text:
        return "/"
    stripped = text.strip("/")
    return f"/{stripped}/" if stripped else "/"


def _normalize_globs(value: object | None) -> frozenset[str]:
    """Normalize exclusion globs given as a string or a list into a set."""
    match value:
        case str() as text:
            candidates: list[object] = [text]
        case list() | tuple() as items:
            candidates = list(items)
        case _:
            return frozenset()
    globs: set[str] = set()
    for candidate in candidates:
        text = _optional_str(candidate)
        if text:
            globs.add(text.lstrip("/"))
    return frozenset(globs)


def _compile_patterns(value: object | None) -> tuple[re.Pattern[str], ...]:
    """Compile dead-link ignore patterns, preserving their declared order."""
    match value:
        case None:
            return ()
        case str() as text:
            sources: list[object] = [text]
        case list() | tuple() as items:
            sources = list(items)
        case _:
            msg = "'ignore_dead_links' must be a pattern or a list of patterns."
            raise SiteConfigError(msg)
    patterns: list[re.Pattern[str]] = []
    for source in sources:
        text = _optional_str(source)
        if not text:
            continue
        try:
            patterns.append(re.compile(text))
        except re.error as exc:
            msg = f"Invalid dead-link ignore pattern {text!r}: {exc}"
            raise SiteConfigError(msg) from exc
    return tuple(patterns)


def _build_nav_entry(payload: object, *, context: str) -> NavEntry:
    """Build a NavEntry from a ``{label, link}`` mapping."""
    match payload:
        case {"label": label, "link": link}:
            pass
        case _:
            msg = f"{context} entries require 'label' and 'link'."
            raise SiteConfigError(msg)
    label_text = _optional_str(label)
    link_text = _optional_str(link)
    if not label_text or not link_text:
        msg = f"{context} entries require 'label' and 'link'."
        raise SiteConfigError(msg)
    return NavEntry(label=label_text, target=link_text)


def _build_nav(entries: object | None) -> tuple[NavEntry, ...]:
    """Build the ordered nav bar entries."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        msg = "'nav' must be a list of links."
        raise SiteConfigError(msg)
    return tuple(_build_nav_entry(entry, context="Nav") for entry in entries)


def _build_sidebar_group(payload: typ.Mapping[str, typ.Any]) -> SidebarGroup:
    """Build a SidebarGroup, rejecting groups that would render empty."""
    label = _optional_str(payload.get("label"))
    if not label:
        msg = "Sidebar groups require a 'label'."
        raise SiteConfigError(msg)
    raw_items = payload.get("items") or []
    if not isinstance(raw_items, list):
        msg = f"Sidebar group '{label}' items must be a list."
        raise SiteConfigError(msg)
    items = tuple(
        _build_nav_entry(item, context=f"Sidebar group '{label}'") for item in raw_items
    )
    target = _optional_str(payload.get("link"))
    if not items and not target:
        msg = f"Sidebar group '{label}' needs at least one item or a 'link'."
        raise SiteConfigError(msg)
    return SidebarGroup(label=label, items=items, target=target)


def _build_sidebar(groups: object | None) -> tuple[SidebarGroup, ...]:
    """Build the ordered sidebar tree."""
    if groups is None:
        return ()
    if not isinstance(groups, list):
        msg = "'sidebar' must be a list of groups."
        raise SiteConfigError(msg)
    built: list[SidebarGroup] = []
    for group in groups:
        if not isinstance(group, dict):
            msg = "Sidebar groups must be mappings."
            raise SiteConfigError(msg)
        built.append(_build_sidebar_group(group))
    return tuple(built)


def _build_social_links(entries: object | None) -> tuple[SocialLink, ...]:
    """Build the ordered social icon links."""
    links: list[SocialLink] = []
    match entries:
        case None:
            return ()
        case list() as items:
            iterable = items
        case _:
            msg = "'social_links' must be a list of links."
            raise SiteConfigError(msg)
    for entry in iterable:
        match entry:
            case {"icon": icon, "link": link}:
                pass
            case _:
                msg = "Social links require 'icon' and 'link'."
                raise SiteConfigError(msg)
        icon_text = _optional_str(icon)
        link_text = _optional_str(link)
        if not icon_text or not link_text:
            msg = "Social links require 'icon' and 'link'."
            raise SiteConfigError(msg)
        links.append(SocialLink(icon=icon_text, target=link_text))
    return tuple(links)


__all__ = [
    "_build_nav",
    "_build_nav_entry",
    "_build_sidebar",
    "_build_sidebar_group",
    "_build_social_links",
    "_compile_patterns",
    "_normalize_base_path",
    "_normalize_globs",
    "_optional_str",
]
