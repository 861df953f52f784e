# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Apple App Store lookup strategy for storeversion.

Queries the public iTunes lookup API, which returns a typed JSON document,
so no page parsing is needed.

Request:
    GET https://itunes.apple.com/lookup?bundleId=<app_id>&country=<region>

    The country parameter is only sent when a region is configured; the
    API defaults to the US store otherwise. Regions are ISO 3166-1 alpha-2
    codes (e.g., "gb", "de").

Response:
    {
      "resultCount": 1,
      "results": [
        {
          "version": "4.12.0",
          "trackViewUrl": "https://apps.apple.com/us/app/example/id123",
          "releaseNotes": "Bug fixes and improvements."
        }
      ]
    }

Field Extraction (JSONPath):
    - results[0].version       (required unless a version is forced)
    - results[0].trackViewUrl  (required)
    - results[0].releaseNotes  (optional)

Error Handling:
    - NetworkError: non-200 status or transport failure (soft)
    - NotFoundError: empty results array (soft)
    - ParseError: body is not JSON, or a required field is missing (hard)

Soft errors become a None status in storeversion.core.get_status; an app
that is not (yet) published in a region should not break the caller.

Example:
    From Python:

        from storeversion.lookup.app_store import AppStoreLookup
        from storeversion.lookup.base import LookupRequest

        meta = AppStoreLookup().fetch(
            LookupRequest(app_id="com.example.app", region="gb")
        )
        print(meta.version, meta.store_link)
"""

from __future__ import annotations

import json

from jsonpath_ng import parse as jsonpath_parse
import requests

from storeversion.exceptions import NetworkError, NotFoundError, ParseError
from storeversion.logging import get_global_logger

from .base import LookupRequest, StoreMetadata, register_strategy

LOOKUP_URL = "https://itunes.apple.com/lookup"

_VERSION_PATH = jsonpath_parse("results[0].version")
_LINK_PATH = jsonpath_parse("results[0].trackViewUrl")
_NOTES_PATH = jsonpath_parse("results[0].releaseNotes")


def _first_value(expr, data: dict) -> object | None:
    matches = expr.find(data)
    return matches[0].value if matches else None


class AppStoreLookup:
    """Lookup strategy for the Apple App Store (platform tag "ios")."""

    soft_errors = (NetworkError, NotFoundError)

    def fetch(self, request: LookupRequest) -> StoreMetadata:
        """Query the iTunes lookup API for an app's published version.

        Args:
            request: Bundle id, optional country code and optional version
                override.

        Returns:
            Store metadata with the raw store version, the trackViewUrl
                page link and release notes (if any).

        Raises:
            NetworkError: If the API responds with a non-200 status or the
                request fails.
            NotFoundError: If the results array is empty.
            ParseError: If the body is not JSON or lacks version or
                trackViewUrl.

        Note:
            When request.override is set, it replaces the version from the
            response and the version field is not read at all. The request
            is still made, so an unknown bundle id still yields
            NotFoundError.
        """
        logger = get_global_logger()

        params = {"bundleId": request.app_id}
        if request.region:
            params["country"] = request.region

        logger.verbose("LOOKUP", "Strategy: app_store (iTunes lookup API)")
        logger.verbose("LOOKUP", f"Bundle id: {request.app_id}")
        if request.region:
            logger.verbose("LOOKUP", f"Country: {request.region}")

        try:
            response = requests.get(LOOKUP_URL, params=params, timeout=request.timeout)
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to query App Store: {err}") from err

        if response.status_code != 200:
            raise NetworkError(
                f"App Store lookup failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        logger.verbose("LOOKUP", f"API response: {response.status_code} OK")

        try:
            data = response.json()
        except ValueError as err:
            raise ParseError(
                f"Invalid JSON response from App Store. Response: {response.text[:200]}"
            ) from err

        logger.debug("HTTP", f"JSON response: {json.dumps(data, indent=2)}")

        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ParseError("App Store response has no 'results' array")

        if not data["results"]:
            raise NotFoundError(
                f"Can't find an app in the App Store with the id: {request.app_id}"
            )

        if request.override is not None:
            logger.verbose("LOOKUP", f"Forcing store version: {request.override}")
            version = request.override
        else:
            version = _first_value(_VERSION_PATH, data)
            if version is None:
                raise ParseError("App Store result has no 'version' field")
            logger.verbose("LOOKUP", f"Store version: {version}")

        store_link = _first_value(_LINK_PATH, data)
        if not store_link:
            raise ParseError("App Store result has no 'trackViewUrl' field")

        release_notes = _first_value(_NOTES_PATH, data)

        return StoreMetadata(
            version=str(version),
            store_link=str(store_link),
            release_notes=None if release_notes is None else str(release_notes),
            source="app_store",
        )


# Register this strategy when the module is imported
register_strategy("ios", AppStoreLookup)
