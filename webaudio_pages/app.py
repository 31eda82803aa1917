"""Runtime application model: a router emitting route changes and the app owning it.

The generated site is static, but the preview server treats every HTML page
it serves as a navigation. :class:`Router` publishes those navigations to
subscribers (the analytics tracker is one), and :class:`SiteApplication` ties
one router to a site descriptor and runs the theme's startup hook exactly
once.

Example
-------
>>> from webaudio_pages.app import Router
>>> router = Router()
>>> seen = []
>>> router.after_route_change(lambda route: seen.append(route.path))
>>> router.go("/introduction/general-principles.html").path
'/introduction/general-principles.html'
>>> seen
['/introduction/general-principles.html']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import threading
import typing as typ

if typ.TYPE_CHECKING:
    from .config import SiteDescriptor
    from .theme import ThemeComposer

logger = logging.getLogger(__name__)

RouteListener = typ.Callable[["Route"], None]


@dc.dataclass(frozen=True, slots=True)
class Route:
    """The page a router currently points at."""

    path: str
    url: str | None = None
    title: str | None = None


class Router:
    """Track the current route and notify listeners after each change."""

    def __init__(self) -> None:
        self.route = Route(path="/")
        self._listeners: list[RouteListener] = []
        self._lock = threading.Lock()

    def after_route_change(self, listener: RouteListener) -> None:
        """Subscribe ``listener``; listeners run in subscription order."""
        with self._lock:
            self._listeners.append(listener)

    @property
    def listeners(self) -> tuple[RouteListener, ...]:
        """Registered listeners, in notification order."""
        with self._lock:
            return tuple(self._listeners)

    def go(self, path: str, *, url: str | None = None, title: str | None = None) -> Route:
        """Navigate to ``path`` and notify every listener with the new route."""
        route = Route(path=path, url=url, title=title)
        with self._lock:
            self.route = route
            listeners = tuple(self._listeners)
        logger.debug("route changed to %s", path)
        for listener in listeners:
            listener(route)
        return route


class SiteApplication:
    """One running instance of the site, owning its router and plugins."""

    def __init__(
        self,
        site: SiteDescriptor,
        composer: ThemeComposer,
        *,
        router: Router | None = None,
    ) -> None:
        self.site = site
        self.composer = composer
        self.router = router or Router()
        self.plugins: dict[str, object] = {}
        self._started = False

    def use(self, name: str, plugin: object) -> None:
        """Record an installed plugin under ``name``."""
        self.plugins[name] = plugin

    def uses(self, name: str) -> bool:
        """Return ``True`` when a plugin named ``name`` is installed."""
        return name in self.plugins

    def start(self) -> SiteApplication:
        """Run the theme startup hook once; later calls return immediately."""
        if not self._started:
            self._started = True
            self.composer.on_application_start(self, self.router, self.site)
        return self

    def close(self) -> None:
        """Release plugins that hold resources, such as tracker worker threads."""
        for plugin in self.plugins.values():
            closer = getattr(plugin, "close", None)
            if callable(closer):
                closer()


__all__ = ["Route", "RouteListener", "Router", "SiteApplication"]
