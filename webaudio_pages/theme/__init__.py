"""Theme layer: the default page layout, slot injection, and analytics wiring."""

from .analytics import AnalyticsBinding, MatomoSite, MatomoTracker, matomo
from .composer import ANALYTICS_PLUGIN, ThemeComposer
from .layout import LAYOUT_SLOTS, DefaultLayout, Layout, SlottedLayout

__all__ = [
    "ANALYTICS_PLUGIN",
    "LAYOUT_SLOTS",
    "AnalyticsBinding",
    "DefaultLayout",
    "Layout",
    "MatomoSite",
    "MatomoTracker",
    "SlottedLayout",
    "ThemeComposer",
    "matomo",
]
