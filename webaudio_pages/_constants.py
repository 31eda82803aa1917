"""Common literal values used across webaudio_pages.

These constants keep filenames, suffixes, and analytics identifiers
centralized so the loader, generator, theme, and tests import the same values
without drifting. Intended for internal use within the webaudio_pages package.

Examples
--------
>>> from webaudio_pages import _constants
>>> _constants.CONTENT_SUFFIX
'.md'
>>> _constants.MATOMO_TRACKER_URL.endswith("/")
True
"""

CONTENT_SUFFIX = ".md"
PAGE_SUFFIX = ".html"
INDEX_DOCUMENT = "index.md"
BUILD_MANIFEST = ".webaudio-pages-manifest.json"

MATOMO_SITE_ID = 22
MATOMO_TRACKER_URL = "https://stats.ircam.fr/"
