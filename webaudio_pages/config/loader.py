"""Load site configuration YAML into a typed SiteDescriptor."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_nav,
    _build_sidebar,
    _build_social_links,
    _compile_patterns,
    _normalize_base_path,
    _normalize_globs,
    _optional_str,
)
from .models import SiteConfigError, SiteDescriptor

DEFAULT_SOURCE_DIR = "content"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_HIGHLIGHT_THEME = "monokai"


def load_site_descriptor(path: Path) -> SiteDescriptor:
    """Load the YAML file describing site metadata and navigation.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteDescriptor
        Immutable descriptor with defaults applied, ignore patterns compiled,
        and the navigation model validated.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the title is missing, a navigation entry is incomplete, a sidebar
        group is empty, or an ignore pattern does not compile.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from webaudio_pages.config import load_site_descriptor
    >>> site = load_site_descriptor(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.title  # doctest: +SKIP
    'Web Audio Tutorials'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_site_descriptor(loaded)


def build_site_descriptor(payload: typ.Mapping[str, typ.Any]) -> SiteDescriptor:
    """Build a SiteDescriptor from an already parsed configuration mapping.

    Relative ``source_dir`` and ``output_dir`` values are kept relative, so
    they resolve against the working directory of the build.
    """
    title = _optional_str(payload.get("title"))
    if not title:
        msg = "Site configuration requires a 'title'."
        raise SiteConfigError(msg)

    markdown = payload.get("markdown") or {}
    if not isinstance(markdown, dict):
        msg = "'markdown' must be a mapping."
        raise SiteConfigError(msg)
    theme = _optional_str(markdown.get("theme")) or DEFAULT_HIGHLIGHT_THEME
    line_numbers = bool(markdown.get("line_numbers", False))

    return SiteDescriptor(
        title=title,
        description=_optional_str(payload.get("description")) or "",
        excluded_source_paths=_normalize_globs(payload.get("exclude")),
        base_path=_normalize_base_path(payload.get("base")),
        code_highlight_theme=theme,
        show_line_numbers=line_numbers,
        dead_link_ignore_patterns=_compile_patterns(payload.get("ignore_dead_links")),
        nav=_build_nav(payload.get("nav")),
        sidebar=_build_sidebar(payload.get("sidebar")),
        social_links=_build_social_links(payload.get("social_links")),
        source_dir=Path(_optional_str(payload.get("source_dir")) or DEFAULT_SOURCE_DIR),
        output_dir=Path(_optional_str(payload.get("output_dir")) or DEFAULT_OUTPUT_DIR),
    )


__all__ = ["build_site_descriptor", "load_site_descriptor"]
