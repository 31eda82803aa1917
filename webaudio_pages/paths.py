"""Classify link targets and map internal targets onto content documents.

Navigation entries and Markdown links share one vocabulary: external targets
carry a scheme (``https://``, ``mailto:``) or are protocol-relative, while
internal targets are site paths such as ``/introduction/general-principles.md``,
``/introduction/`` or ``./setting-up-environment``. The helpers here turn an
internal target into the content document paths it may refer to and into the
``.html`` href the generated site serves.

Examples
--------
>>> from webaudio_pages.paths import document_candidates, page_href
>>> document_candidates("/introduction/")
['introduction/index.md']
>>> page_href("/introduction/general-principles.md", "/tutorials/")
'/tutorials/introduction/general-principles.html'
"""

from __future__ import annotations

import posixpath
from urllib.parse import urlsplit

from ._constants import CONTENT_SUFFIX, INDEX_DOCUMENT, PAGE_SUFFIX

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "0.0.0.0", "::1"})  # noqa: S104
_UNCHECKED_SCHEMES = ("mailto:", "tel:", "data:", "javascript:")


def is_external(target: str) -> bool:
    """Return ``True`` for absolute URLs and protocol-relative targets."""
    if target.startswith("//"):
        return True
    return bool(urlsplit(target).scheme)


def is_unchecked(target: str) -> bool:
    """Return ``True`` for targets that never take part in link resolution."""
    lower = target.strip().lower()
    return not lower or lower.startswith("#") or lower.startswith(_UNCHECKED_SCHEMES)


def is_loopback(target: str) -> bool:
    """Return ``True`` when an external URL points at a local development host."""
    if not is_external(target):
        return False
    try:
        host = urlsplit(target).hostname
    except ValueError:
        return False
    if host is None:
        return False
    return host.lower() in LOOPBACK_HOSTS or host.endswith(".localhost")


def normalize_document_path(path: str) -> str:
    """Return a root-relative posix document path without a leading slash."""
    normalized = posixpath.normpath(path.replace("\\", "/").lstrip("/"))
    return "" if normalized == "." else normalized


def document_candidates(target: str, relative_to: str = "") -> list[str]:
    """Return the content document paths an internal ``target`` may refer to.

    Parameters
    ----------
    target : str
        Internal link target; query strings and fragments are ignored.
    relative_to : str, optional
        Directory (root-relative) used to resolve targets that do not start
        with ``/``. Navigation links resolve against the content root.

    Returns
    -------
    list[str]
        Candidate paths in lookup order. Empty when the target only carries a
        fragment or a query string.
    """
    path = urlsplit(target).path
    if not path:
        return []
    joined = path if path.startswith("/") else posixpath.join("/", relative_to, path)
    trailing_slash = joined.endswith("/")
    normalized = normalize_document_path(posixpath.normpath(joined))
    if trailing_slash or not normalized:
        return [posixpath.join(normalized, INDEX_DOCUMENT) if normalized else INDEX_DOCUMENT]

    stem, suffix = posixpath.splitext(normalized)
    if suffix == CONTENT_SUFFIX:
        return [normalized]
    if suffix == PAGE_SUFFIX:
        return [f"{stem}{CONTENT_SUFFIX}"]
    return [
        f"{normalized}{CONTENT_SUFFIX}",
        posixpath.join(normalized, INDEX_DOCUMENT),
    ]


def page_href(
    target: str,
    base_path: str = "/",
    relative_to: str = "",
    *,
    document: str | None = None,
) -> str:
    """Return the served href for a link target.

    External and unchecked targets are returned unchanged. Internal targets
    gain the site base path and swap the ``.md`` suffix for ``.html``; index
    documents keep their directory form. Pass ``document`` when the target
    has already been resolved against the content tree.
    """
    if is_external(target) or is_unchecked(target):
        return target
    parsed = urlsplit(target)
    candidates = document_candidates(target, relative_to)
    if not candidates:
        return target
    document = document or candidates[0]
    if document == INDEX_DOCUMENT or document.endswith(f"/{INDEX_DOCUMENT}"):
        served = document[: -len(INDEX_DOCUMENT)]
    else:
        served = f"{posixpath.splitext(document)[0]}{PAGE_SUFFIX}"
    href = f"{base_path}{served}"
    if parsed.query:
        href = f"{href}?{parsed.query}"
    if parsed.fragment:
        href = f"{href}#{parsed.fragment}"
    return href


def output_name(document: str) -> str:
    """Return the output file path for a root-relative content document."""
    return f"{posixpath.splitext(document)[0]}{PAGE_SUFFIX}"


__all__ = [
    "LOOPBACK_HOSTS",
    "document_candidates",
    "is_external",
    "is_loopback",
    "is_unchecked",
    "normalize_document_path",
    "output_name",
    "page_href",
]
