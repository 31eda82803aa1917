"""Page layouts: the default theme shell and its slot-injecting decorator."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from webaudio_pages.paths import is_external, page_href

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from webaudio_pages.config import SiteDescriptor
    from webaudio_pages.generator.models import PageModel
    from webaudio_pages.theme.analytics import MatomoSite

LAYOUT_SLOTS = (
    "layout-top",
    "layout-bottom",
    "nav-bar-title-after",
    "sidebar-nav-before",
    "sidebar-nav-after",
    "doc-before",
    "doc-after",
    "doc-footer-before",
)


class Layout(typ.Protocol):
    """Anything able to render a page into a complete HTML document."""

    def render(
        self,
        page: PageModel,
        site: SiteDescriptor,
        *,
        stylesheet: str = "",
        slots: cabc.Mapping[str, str] | None = None,
        analytics: MatomoSite | None = None,
    ) -> str: ...


class DefaultLayout:
    """Render pages with the bundled ``layout.jinja`` theme template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``layout.jinja``. Defaults to the package
            ``templates`` directory.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("layout.jinja")

    def render(
        self,
        page: PageModel,
        site: SiteDescriptor,
        *,
        stylesheet: str = "",
        slots: cabc.Mapping[str, str] | None = None,
        analytics: MatomoSite | None = None,
    ) -> str:
        """Render ``page`` inside the site shell, returning the HTML document.

        When ``analytics`` is given the page embeds the Matomo tracking
        snippet for that site.
        """
        unknown = set(slots or {}) - set(LAYOUT_SLOTS)
        if unknown:
            msg = f"Unknown layout slot(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        context = {
            "site": site,
            "page": page,
            "home_href": site.base_path,
            "nav_links": [
                self._link(entry.label, entry.target, site, page)
                for entry in site.nav
            ],
            "sidebar_groups": [
                {
                    "label": group.label,
                    "link": (
                        self._link(group.label, group.target, site, page)
                        if group.target
                        else None
                    ),
                    "items": [
                        self._link(item.label, item.target, site, page)
                        for item in group.items
                    ],
                }
                for group in site.sidebar
            ],
            "social_links": [
                {"icon": link.icon, "href": link.target} for link in site.social_links
            ],
            "pygments_css": stylesheet,
            "slots": dict(slots or {}),
            "analytics": analytics,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    @staticmethod
    def _link(
        label: str, target: str, site: SiteDescriptor, page: PageModel
    ) -> dict[str, typ.Any]:
        href = page_href(target, site.base_path)
        return {
            "label": label,
            "href": href,
            "external": is_external(target),
            "active": href == page.href,
        }


class SlottedLayout:
    """Forward to a base layout with fixed slot content injected.

    Slots given per render call win over the ones bound here.
    """

    def __init__(self, base: Layout, slots: cabc.Mapping[str, str]) -> None:
        self.base = base
        self.slots = dict(slots)

    def render(
        self,
        page: PageModel,
        site: SiteDescriptor,
        *,
        stylesheet: str = "",
        slots: cabc.Mapping[str, str] | None = None,
        analytics: MatomoSite | None = None,
    ) -> str:
        """Render through the base layout with the merged slot mapping."""
        merged = {**self.slots, **(slots or {})}
        return self.base.render(
            page, site, stylesheet=stylesheet, slots=merged, analytics=analytics
        )


__all__ = ["LAYOUT_SLOTS", "DefaultLayout", "Layout", "SlottedLayout"]
