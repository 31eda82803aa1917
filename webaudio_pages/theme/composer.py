"""Compose the site theme from the default layout and runtime plugins.

:class:`ThemeComposer` is the theme entry point. It extends the default
layout without replacing it, and its startup hook attaches the Matomo
tracker to the application's router. The hook runs once per application
instance and never lets a registration failure abort startup.

Example
-------
>>> from webaudio_pages.theme import ThemeComposer
>>> composer = ThemeComposer()  # doctest: +SKIP
>>> composer.compose_layout() is composer.default_layout  # doctest: +SKIP
True
"""

from __future__ import annotations

import logging
import typing as typ

from webaudio_pages._constants import MATOMO_SITE_ID, MATOMO_TRACKER_URL

from .analytics import MatomoSite, MatomoTracker, matomo
from .layout import LAYOUT_SLOTS, DefaultLayout, Layout, SlottedLayout

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from webaudio_pages.app import Router, SiteApplication
    from webaudio_pages.config import SiteDescriptor

logger = logging.getLogger(__name__)

ANALYTICS_PLUGIN = "matomo"

TrackerFactory = typ.Callable[[str, int], MatomoTracker]


class ThemeComposer:
    """Extend the default layout and wire the analytics plugin at startup."""

    def __init__(
        self,
        default_layout: Layout | None = None,
        *,
        slots: cabc.Mapping[str, str] | None = None,
        analytics_site_id: int = MATOMO_SITE_ID,
        analytics_tracker_url: str = MATOMO_TRACKER_URL,
        tracker_factory: TrackerFactory | None = None,
    ) -> None:
        """Initialize the composer.

        Parameters
        ----------
        default_layout : Layout, optional
            Layout being extended. Defaults to :class:`DefaultLayout`.
        slots : Mapping[str, str], optional
            HTML injected into named layout slots. Without slots the default
            layout is used unchanged.
        analytics_site_id : int, optional
            Matomo site identifier. Defaults to the site's registered id.
        analytics_tracker_url : str, optional
            Matomo collection endpoint.
        tracker_factory : Callable[[str, int], MatomoTracker], optional
            Builds the tracker from ``(tracker_url, site_id)``; lets callers
            supply a tracker with its own session.

        Raises
        ------
        ValueError
            If ``slots`` names a slot the layout does not provide.
        """
        unknown = set(slots or {}) - set(LAYOUT_SLOTS)
        if unknown:
            msg = f"Unknown layout slot(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        self.default_layout = default_layout or DefaultLayout()
        self.slots = dict(slots or {})
        self.analytics_site_id = analytics_site_id
        self.analytics_tracker_url = analytics_tracker_url
        self.tracker_factory = tracker_factory or MatomoTracker

    @property
    def analytics(self) -> MatomoSite:
        """Matomo site that built pages embed for browser-side tracking."""
        return MatomoSite(self.analytics_site_id, self.analytics_tracker_url)

    def compose_layout(self) -> Layout:
        """Return the layout every page renders through.

        With no slot content this is the default layout itself; otherwise a
        :class:`SlottedLayout` forwarding to it.
        """
        if not self.slots:
            return self.default_layout
        return SlottedLayout(self.default_layout, self.slots)

    def on_application_start(
        self, app: SiteApplication, router: Router, site_data: SiteDescriptor
    ) -> None:
        """Register the Matomo tracker on ``router`` for this application.

        Calling it again for an application that already has the tracker
        does nothing. Errors raised while registering are logged and
        swallowed so the application still starts.
        """
        if app.uses(ANALYTICS_PLUGIN):
            return
        tracker: MatomoTracker | None = None
        try:
            tracker = self.tracker_factory(
                self.analytics_tracker_url, self.analytics_site_id
            )
            binding = matomo(
                router=router,
                site_id=self.analytics_site_id,
                tracker_url=self.analytics_tracker_url,
                tracker=tracker,
            )
        except Exception:  # noqa: BLE001 - analytics must never abort startup
            if tracker is not None:
                tracker.close()
            logger.warning(
                "could not register analytics for %s", site_data.title, exc_info=True
            )
            return
        app.use(ANALYTICS_PLUGIN, binding)
        logger.debug(
            "registered matomo site %s at %s",
            self.analytics_site_id,
            self.analytics_tracker_url,
        )


__all__ = ["ANALYTICS_PLUGIN", "ThemeComposer", "TrackerFactory"]
