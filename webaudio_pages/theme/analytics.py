"""Matomo page-view tracking bound to the application router.

:func:`matomo` subscribes a :class:`MatomoTracker` to a
:class:`~webaudio_pages.app.Router`; every route change becomes one request
to the Matomo HTTP tracking API. Requests run on the tracker's own worker
thread, so navigation never waits on the collection endpoint, and any
transport failure is logged and dropped: losing a page view is not an error
the site needs to recover from.

Example
-------
>>> from webaudio_pages.app import Router
>>> from webaudio_pages.theme.analytics import matomo
>>> binding = matomo(
...     router=Router(), site_id=22, tracker_url="https://stats.ircam.fr/"
... )  # doctest: +SKIP
>>> binding.site_id  # doctest: +SKIP
22
"""

from __future__ import annotations

import dataclasses as dc
import logging
import threading
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from http import HTTPStatus

import requests

if typ.TYPE_CHECKING:
    from webaudio_pages.app import Route, Router

logger = logging.getLogger(__name__)

_USER_AGENT = "webaudio-pages/0.1"


class MatomoTracker:
    """Send page views to a Matomo instance without blocking the caller."""

    def __init__(
        self,
        tracker_url: str,
        site_id: int,
        *,
        session: requests.Session | None = None,
        timeout: float = 5.0,
    ) -> None:
        """Initialize the tracker.

        Parameters
        ----------
        tracker_url : str
            Base URL of the Matomo instance; ``matomo.php`` is appended.
        site_id : int
            Numeric Matomo site identifier.
        session : requests.Session, optional
            Preconfigured session to reuse connections. Defaults to a new
            session owned by the tracker.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``5.0``.
        """
        self.endpoint = f"{tracker_url.rstrip('/')}/matomo.php"
        self.site_id = site_id
        self.timeout = timeout
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="matomo-tracker"
        )
        self._closed = False
        self._lock = threading.Lock()

    def track_page_view(self, url: str, title: str | None = None) -> None:
        """Queue a page view for ``url``; returns without waiting for the request."""
        params: dict[str, str | int] = {
            "idsite": self.site_id,
            "rec": 1,
            "apiv": 1,
            "send_image": 0,
            "url": url,
        }
        if title:
            params["action_name"] = title
        with self._lock:
            if self._closed:
                logger.debug("tracker closed, dropping page view for %s", url)
                return
            self._executor.submit(self._send, params)

    def close(self) -> None:
        """Wait for queued page views, then release the worker and session."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        self._session.close()

    def _send(self, params: dict[str, str | int]) -> None:
        try:
            response = self._session.get(
                self.endpoint,
                params=params,
                headers={"User-Agent": _USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("matomo tracking request failed: %s", exc)
            return
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            logger.debug(
                "matomo tracking request returned status %s", response.status_code
            )


@dc.dataclass(frozen=True, slots=True)
class MatomoSite:
    """Matomo site embedded in every built page for browser-side tracking."""

    site_id: int
    tracker_url: str

    @property
    def base_url(self) -> str:
        """Instance URL ending in one slash, the prefix of ``matomo.php``."""
        return f"{self.tracker_url.rstrip('/')}/"


@dc.dataclass(frozen=True, slots=True)
class AnalyticsBinding:
    """Association of a router with a Matomo collection endpoint.

    Created once per application instance and never mutated; it lives as
    long as the application does.
    """

    router: Router
    site_id: int
    tracker_url: str
    tracker: MatomoTracker

    def close(self) -> None:
        """Flush and stop the underlying tracker."""
        self.tracker.close()


def matomo(
    *,
    router: Router,
    site_id: int,
    tracker_url: str,
    tracker: MatomoTracker | None = None,
) -> AnalyticsBinding:
    """Subscribe a Matomo tracker to ``router`` and return the binding.

    Parameters
    ----------
    router : Router
        Router whose route changes are reported as page views.
    site_id : int
        Numeric Matomo site identifier.
    tracker_url : str
        Base URL of the Matomo instance.
    tracker : MatomoTracker, optional
        Tracker to use; defaults to a new one for ``tracker_url``/``site_id``.

    Returns
    -------
    AnalyticsBinding
        The binding that now observes ``router``.
    """
    active = tracker or MatomoTracker(tracker_url, site_id)

    def _on_route_change(route: Route) -> None:
        active.track_page_view(route.url or route.path, route.title)

    router.after_route_change(_on_route_change)
    return AnalyticsBinding(
        router=router, site_id=site_id, tracker_url=tracker_url, tracker=active
    )


__all__ = ["AnalyticsBinding", "MatomoSite", "MatomoTracker", "matomo"]
