"""Google Play Store lookup strategy for storeversion.

Google Play has no public version API, so this strategy fetches the app's
details page and scans the raw HTML for the version literal that the page
embeds in its inline data blobs. That literal looks like:

    [[["4.12.0"]]

The pattern tolerates plain MAJOR.MINOR.PATCH versions as well as vendor
variants with an alphabetic channel segment followed by further segments
(e.g., "2024.1.prod.3"). Normalization later keeps only the numeric core.

Request:
    GET https://play.google.com/store/apps/details?id=<app_id>&hl=<region>

    The hl parameter defaults to "en_US".

Key Properties:

- The store link is the constructed request URL (the page has no separate
  canonical link to extract)
- Release notes are never available
- If the page structure changes and the pattern stops matching, the store
  version becomes "" which normalizes to "0.0.0": "no update detected"
  rather than a crash

Error Handling:
    - NetworkError: non-200 status or transport failure. Unlike the App
      Store lookup this is NOT a soft error; it propagates out of
      storeversion.core.get_status because a broken page fetch is an
      actionable bug, not a routine "no update" outcome.

Example:
    From Python:

        from storeversion.lookup.base import LookupRequest
        from storeversion.lookup.play_store import PlayStoreLookup

        meta = PlayStoreLookup().fetch(LookupRequest(app_id="com.example.app"))
        print(meta.version)     # e.g. "4.12.0"
        print(meta.store_link)  # https://play.google.com/store/apps/details?id=...
"""

from __future__ import annotations

import re

import requests

from storeversion.exceptions import NetworkError
from storeversion.logging import get_global_logger

from .base import LookupRequest, StoreMetadata, register_strategy

DETAILS_URL = "https://play.google.com/store/apps/details"
DEFAULT_LOCALE = "en_US"

# Supports 1.2.3 (most apps) and 1.2.prod.3 style channel versions
_VERSION_LITERAL = re.compile(r'\[\[\["(\d+\.\d+(\.[a-z]+)?(\.([^"]|\\")*)?)"\]\]')


def extract_version(html: str) -> str:
    """Return the first embedded version literal in a details page, or ""."""
    match = _VERSION_LITERAL.search(html)
    return match.group(1) if match else ""


def details_url(app_id: str, region: str | None = None) -> str:
    """Build the details page URL for an app, with encoded query string."""
    params = {"id": app_id, "hl": region or DEFAULT_LOCALE}
    return requests.Request("GET", DETAILS_URL, params=params).prepare().url


class PlayStoreLookup:
    """Lookup strategy for the Google Play Store (platform tag "android")."""

    # Page fetch failures are always fatal for this store.
    soft_errors = ()

    def fetch(self, request: LookupRequest) -> StoreMetadata:
        """Scrape the Play Store details page for an app's published version.

        Args:
            request: Package name, optional locale and optional version
                override.

        Returns:
            Store metadata with the scraped version ("" if not found), the
                request URL as store link, and no release notes.

        Raises:
            NetworkError: If the page responds with a non-200 status or the
                request fails.
        """
        logger = get_global_logger()

        page_url = details_url(request.app_id, request.region)

        logger.verbose("LOOKUP", "Strategy: play_store (details page scrape)")
        logger.verbose("LOOKUP", f"Fetching page: {page_url}")

        try:
            response = requests.get(page_url, timeout=request.timeout)
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to fetch Play Store page: {err}") from err

        if response.status_code != 200:
            raise NetworkError(
                f"Invalid response code: {response.status_code}",
                status_code=response.status_code,
            )

        html_content = response.text
        logger.verbose("LOOKUP", f"Page fetched ({len(html_content)} bytes)")

        version = extract_version(html_content)
        if version:
            logger.verbose("LOOKUP", f"Store version: {version}")
        else:
            logger.verbose(
                "LOOKUP", "No version literal found on page; treating as unknown"
            )

        if request.override is not None:
            logger.verbose("LOOKUP", f"Forcing store version: {request.override}")
            version = request.override

        return StoreMetadata(
            version=version,
            store_link=page_url,
            release_notes=None,
            source="play_store",
        )


# Register this strategy when the module is imported
register_strategy("android", PlayStoreLookup)
