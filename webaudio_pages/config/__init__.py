"""Load and validate the site configuration for the Web Audio Tutorials site.

This subpackage parses the project's ``site.yaml`` file, applies defaults,
compiles dead-link ignore patterns, validates the nav bar and sidebar tree,
and produces a frozen :class:`SiteDescriptor` that the generator, the link
checker, and the theme consume. The primary entry point is
:func:`load_site_descriptor`.

Examples
--------
>>> from pathlib import Path
>>> from webaudio_pages.config import load_site_descriptor
>>> site = load_site_descriptor(Path("config/site.yaml"))  # doctest: +SKIP
>>> [group.label for group in site.sidebar]  # doctest: +SKIP
['Introduction']
"""

from .loader import build_site_descriptor, load_site_descriptor
from .models import (
    NavEntry,
    SidebarGroup,
    SiteConfigError,
    SiteDescriptor,
    SocialLink,
)

__all__ = [
    "NavEntry",
    "SidebarGroup",
    "SiteConfigError",
    "SiteDescriptor",
    "SocialLink",
    "build_site_descriptor",
    "load_site_descriptor",
]
