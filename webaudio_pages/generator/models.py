"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the layout for one rendered document.

    Attributes
    ----------
    path : str
        Root-relative source document path, e.g. ``introduction/general-principles.md``.
    title : str
        Page heading used for the ``<title>`` element and the active sidebar entry.
    href : str
        Served URL of the page, including the site base path.
    html : str
        Rendered HTML for the markdown body.
    description : str
        Page description from front matter, or the site description.
    links : list[str]
        Link targets found in the document, as written.
    """

    path: str
    title: str
    href: str
    html: str
    description: str
    links: list[str] = dc.field(default_factory=list)


__all__ = ["PageModel"]
