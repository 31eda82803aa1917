"""Utilities for rendering and generating the static tutorial pages."""

from .link_collector import DocumentLinkExtension
from .models import PageModel
from .page_generator import SiteGenerator
from .renderer import HtmlContentRenderer

__all__ = [
    "DocumentLinkExtension",
    "HtmlContentRenderer",
    "PageModel",
    "SiteGenerator",
]
