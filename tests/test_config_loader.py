"""Unit tests for loading the site configuration.

These tests cover :func:`webaudio_pages.config.load_site_descriptor` and the
helpers behind it: defaults, base path normalisation, ignore-pattern
compilation, and the validation that keeps the sidebar tree free of empty
groups. One test loads the checked-in ``config/site.yaml`` so changes to the
real navigation are caught here first.

Usage
-----
Run ``pytest tests/test_config_loader.py -v``. Only pytest's ``tmp_path`` is
required.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest

from webaudio_pages.config import (
    NavEntry,
    SidebarGroup,
    SiteConfigError,
    build_site_descriptor,
    load_site_descriptor,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_checked_in_config_describes_the_tutorial_site() -> None:
    """The repository config should carry the tutorial site's navigation."""
    site = load_site_descriptor(REPO_ROOT / "config" / "site.yaml")

    assert site.title == "Web Audio Tutorials", f"unexpected title {site.title!r}"
    assert site.code_highlight_theme == "monokai", (
        f"expected monokai highlighting, got {site.code_highlight_theme!r}"
    )
    assert site.show_line_numbers is False, "expected line numbers to be disabled"
    assert site.nav == (NavEntry("Home", "/"),), f"unexpected nav {site.nav!r}"
    assert [group.label for group in site.sidebar] == ["Introduction"], (
        "expected a single Introduction sidebar group"
    )
    assert [item.target for item in site.sidebar[0].items] == [
        "/introduction/general-principles.md",
        "/introduction/setting-up-environment.md",
    ], "sidebar items should keep their declared order"
    assert site.is_ignored("http://localhost:3000"), (
        "expected localhost links to be exempt from dead-link checks"
    )


def test_defaults_apply_when_sections_are_omitted(tmp_path: Path) -> None:
    """A config with only a title should fall back to documented defaults."""
    site = load_site_descriptor(_write_config(tmp_path, "title: Minimal"))

    assert site.base_path == "/", f"expected base '/', got {site.base_path!r}"
    assert site.code_highlight_theme == "monokai"
    assert site.source_dir == Path("content")
    assert site.output_dir == Path("public")
    assert site.nav == ()
    assert site.sidebar == ()
    assert site.dead_link_ignore_patterns == ()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("/", "/"),
        ("tutorials", "/tutorials/"),
        ("/tutorials", "/tutorials/"),
        ("/web/audio/", "/web/audio/"),
    ],
)
def test_base_path_is_normalised(raw: str, expected: str) -> None:
    """Base paths always start and end with a single slash."""
    site = build_site_descriptor({"title": "Docs", "base": raw})
    assert site.base_path == expected, f"expected {expected!r}, got {site.base_path!r}"


def test_sidebar_group_may_be_a_link_without_items(tmp_path: Path) -> None:
    """A group carrying its own link is not empty even without items."""
    path = _write_config(
        tmp_path,
        """
        title: Docs
        sidebar:
          - label: Overview
            link: /overview.md
        """,
    )
    site = load_site_descriptor(path)
    assert site.sidebar == (SidebarGroup("Overview", (), "/overview.md"),)


def test_empty_sidebar_group_is_rejected(tmp_path: Path) -> None:
    """A group with no items and no link would render as an empty heading."""
    path = _write_config(
        tmp_path,
        """
        title: Docs
        sidebar:
          - label: Examples
            items: []
        """,
    )
    with pytest.raises(SiteConfigError, match="Examples"):
        load_site_descriptor(path)


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "Docs", "nav": [{"label": "Home"}]},
        {"title": "Docs", "nav": [{"label": "", "link": "/"}]},
        {"title": "Docs", "sidebar": [{"label": "Basics", "items": [{"link": "/a.md"}]}]},
        {"title": "Docs", "social_links": [{"icon": "github"}]},
        {"title": "Docs", "social_links": {"icon": "github", "link": "https://github.com"}},
        {"title": "Docs", "ignore_dead_links": ["("]},
        {"description": "untitled"},
    ],
)
def test_invalid_entries_raise_site_config_error(
    payload: dict[str, typ.Any],
) -> None:
    """Incomplete entries and broken patterns should fail loudly."""
    with pytest.raises(SiteConfigError):
        build_site_descriptor(payload)


def test_missing_config_file_raises(tmp_path: Path) -> None:
    """A missing config path should raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_site_descriptor(tmp_path / "absent.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    """A YAML list at the top level is not a site configuration."""
    path = _write_config(tmp_path, "- title: Docs")
    with pytest.raises(TypeError):
        load_site_descriptor(path)


def test_descriptor_is_immutable(tmp_path: Path) -> None:
    """The descriptor is a frozen value shared across the build."""
    site = load_site_descriptor(_write_config(tmp_path, "title: Docs"))
    with pytest.raises(dc.FrozenInstanceError):
        site.title = "Other"  # type: ignore[misc]


def test_exclusion_globs_drop_leading_slashes(tmp_path: Path) -> None:
    """Exclusion globs are matched against root-relative paths."""
    path = _write_config(
        tmp_path,
        """
        title: Docs
        exclude:
          - /drafts/*.md
          - "**/README.md"
        """,
    )
    site = load_site_descriptor(path)
    assert site.excluded_source_paths == frozenset({"drafts/*.md", "**/README.md"})


def test_null_directories_fall_back_to_defaults(tmp_path: Path) -> None:
    """Empty ``source_dir`` and ``output_dir`` keys keep the default folders."""
    path = _write_config(
        tmp_path,
        """
        title: Docs
        source_dir:
        output_dir: ""
        """,
    )
    site = load_site_descriptor(path)

    assert site.source_dir == Path("content"), f"got {site.source_dir!r}"
    assert site.output_dir == Path("public"), f"got {site.output_dir!r}"
