"""Integration test for the local preview server.

A :class:`webaudio_pages.preview.PreviewServer` is bound to an ephemeral port
on the loopback interface and queried with ``requests``. Serving an HTML page
must move the application's router, which in turn reports a page view
through the Matomo tracker; the tracker's session is mocked so nothing leaves
the machine.
"""

from __future__ import annotations

import threading
import typing as typ

import pytest
import requests

from webaudio_pages.app import SiteApplication
from webaudio_pages.config import SiteDescriptor
from webaudio_pages.preview import PreviewServer
from webaudio_pages.theme import DefaultLayout, MatomoTracker, ThemeComposer

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from pytest_mock import MockerFixture


def _client() -> requests.Session:
    """Return a session that ignores proxy settings from the environment."""
    client = requests.Session()
    client.trust_env = False
    return client


def _start(
    output: Path, session: typ.Any, *, base_path: str = "/"
) -> tuple[str, SiteApplication, PreviewServer, threading.Thread]:
    """Serve ``output`` on an ephemeral loopback port in a background thread."""
    composer = ThemeComposer(
        DefaultLayout(),
        tracker_factory=lambda url, site_id: MatomoTracker(url, site_id, session=session),
    )
    site = SiteDescriptor(title="Preview", base_path=base_path, output_dir=output)
    application = SiteApplication(site, composer)
    server = PreviewServer(application, output, host="127.0.0.1", port=0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.address
    return f"http://{host}:{port}", application, server, thread


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Write a small generated site: two pages and a stylesheet."""
    output = tmp_path / "public"
    (output / "basics").mkdir(parents=True)
    (output / "index.html").write_text("<h1>Home</h1>\n", encoding="utf-8")
    (output / "basics" / "intro.html").write_text("<h1>Intro</h1>\n", encoding="utf-8")
    (output / "style.css").write_text("body {}\n", encoding="utf-8")
    return output


@pytest.fixture
def tracking_session(mocker: MockerFixture) -> typ.Any:
    """Return a session that accepts every tracking request."""
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = mocker.Mock(status_code=204)
    return session


@pytest.fixture
def served_site(
    output_dir: Path, tracking_session: typ.Any
) -> cabc.Iterator[tuple[str, SiteApplication, typ.Any]]:
    """Serve the output directory at the root and yield its base URL."""
    base_url, application, server, thread = _start(output_dir, tracking_session)
    try:
        yield base_url, application, tracking_session
    finally:
        server.httpd.shutdown()
        thread.join(timeout=5)


def test_serving_pages_moves_the_router(
    served_site: tuple[str, SiteApplication, typ.Any],
) -> None:
    """HTML pages are route changes; other files and misses are not."""
    base_url, application, _session = served_site
    visited: list[str] = []
    application.router.after_route_change(lambda route: visited.append(route.path))

    for path in ("/basics/intro.html", "/style.css", "/missing.html", "/"):
        _client().get(f"{base_url}{path}", timeout=5)

    assert visited == ["/basics/intro.html", "/"], f"unexpected routes {visited!r}"
    assert application.router.route.url == f"{base_url}/"


def test_served_pages_are_tracked(
    served_site: tuple[str, SiteApplication, typ.Any],
) -> None:
    """The analytics binding registered at startup reports served pages."""
    base_url, application, session = served_site

    response = _client().get(f"{base_url}/basics/intro.html", timeout=5)
    assert response.status_code == 200
    application.close()

    session.get.assert_called_once()
    params = session.get.call_args.kwargs["params"]
    assert params["url"] == f"{base_url}/basics/intro.html"


def test_pages_are_served_under_the_base_path(
    output_dir: Path, tracking_session: typ.Any
) -> None:
    """Generated hrefs carry the base path, so the preview serves pages there."""
    base_url, application, server, thread = _start(
        output_dir, tracking_session, base_path="/tutorials/"
    )
    visited: list[str] = []
    application.router.after_route_change(lambda route: visited.append(route.path))
    try:
        page = _client().get(f"{base_url}/tutorials/basics/intro.html", timeout=5)
        outside = _client().get(f"{base_url}/basics/intro.html", timeout=5)
        root = _client().get(f"{base_url}/", timeout=5)
    finally:
        server.httpd.shutdown()
        thread.join(timeout=5)

    assert page.status_code == 200
    assert "Intro" in page.text
    assert outside.status_code == 404, "pages outside the base path are not served"
    assert [r.status_code for r in root.history] == [302]
    assert root.url == f"{base_url}/tutorials/"
    assert root.status_code == 200
    assert visited == ["/tutorials/basics/intro.html", "/tutorials/"], (
        f"unexpected routes {visited!r}"
    )
