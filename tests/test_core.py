"""
Tests for storeversion.core module.

Tests status building including:
- Platform dispatch and unsupported platforms
- Store addressing from the lookup config
- Normalization of local and store versions
- Failure policy (soft App Store failures, fatal Play Store failures)
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests
import requests_mock

from storeversion.config import LookupConfig, StoreOverrides
from storeversion.core import (
    build_request,
    get_status,
    get_version_status,
    status_can_update,
)
from storeversion.exceptions import NetworkError, ParseError
from storeversion.lookup.app_store import LOOKUP_URL
from storeversion.lookup.base import StoreMetadata
from storeversion.lookup.play_store import DETAILS_URL
from storeversion.package_info import PackageInfo
from storeversion.results import VersionStatus


class TestBuildRequest:
    """Tests for store addressing."""

    def test_defaults_to_package_id(self):
        """Test that the package id is used without overrides."""
        request = build_request("ios", "com.example.app", LookupConfig())
        assert request.app_id == "com.example.app"
        assert request.region is None
        assert request.override is None
        assert request.timeout is None

    def test_store_overrides_win(self, sample_config_data):
        """Test that per-store id and region come from the config."""
        config = LookupConfig.from_dict(sample_config_data)
        request = build_request("ios", "com.example.app", config)
        assert request.app_id == "com.example.app.ios"
        assert request.region == "gb"
        assert request.override == "9.9.9"
        assert request.timeout == 15.0

    def test_overrides_are_per_store(self):
        """Test that one store's overrides do not leak into another."""
        config = LookupConfig(stores={"ios": StoreOverrides(app_id="ios.only")})
        request = build_request("android", "com.example.app", config)
        assert request.app_id == "com.example.app"


class TestGetStatusAppStore:
    """Tests for get_status against the App Store."""

    def test_status_success(self, app_store_payload):
        """Test building a status from an App Store lookup."""
        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json=app_store_payload)
            status = get_status("ios", "2.3.0 (45)", "com.example.app")

        assert isinstance(status, VersionStatus)
        assert status.local_version == "2.3.0"
        assert status.store_version == "2.4.1"
        assert status.store_link == "https://apps.apple.com/us/app/example/id123456"
        assert status.release_notes == "Bug fixes and performance improvements."
        assert status.can_update

    def test_store_version_is_normalized(self, app_store_payload):
        """Test that the store version is reduced to its numeric core."""
        app_store_payload["results"][0]["version"] = "3.0.0-hotfix.2"

        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json=app_store_payload)
            status = get_status("ios", "3.0.0", "com.example.app")

        assert status.store_version == "3.0.0"
        assert not status.can_update

    def test_empty_results_returns_none(self):
        """Test that an unknown app yields no status rather than an error."""
        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json={"resultCount": 0, "results": []})
            assert get_status("ios", "1.0.0", "com.example.app") is None

    def test_http_error_returns_none(self):
        """Test that an App Store HTTP failure yields no status.

        The App Store and Play Store deliberately differ here; see
        TestGetStatusPlayStore.test_http_error_propagates.
        """
        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, status_code=500)
            assert get_status("ios", "1.0.0", "com.example.app") is None

    def test_parse_error_propagates(self, app_store_payload):
        """Test that a malformed App Store response is not swallowed."""
        del app_store_payload["results"][0]["version"]

        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json=app_store_payload)
            with pytest.raises(ParseError):
                get_status("ios", "1.0.0", "com.example.app")

    def test_force_version_wins(self, app_store_payload):
        """Test that a forced version replaces the store version."""
        config = LookupConfig(force_version="10.0.0-rc1")

        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json=app_store_payload)
            status = get_status("ios", "2.4.1", "com.example.app", config)

        assert status.store_version == "10.0.0"
        assert status.can_update


class TestGetStatusPlayStore:
    """Tests for get_status against the Play Store."""

    def test_status_success(self, play_store_html):
        """Test building a status from a Play Store page."""
        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, text=play_store_html)
            status = get_status("android", "2.4.1", "com.example.app")

        assert status.local_version == "2.4.1"
        assert status.store_version == "2.4.1"
        assert status.release_notes is None
        assert status.store_link.startswith(DETAILS_URL)
        assert not status.can_update

    def test_http_error_propagates(self):
        """Test that a Play Store HTTP failure is raised to the caller.

        Unlike the App Store lookup, a failed page fetch is an actionable
        bug rather than a routine "no update" outcome.
        """
        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, status_code=500)
            with pytest.raises(NetworkError):
                get_status("android", "1.0.0", "com.example.app")

    def test_transport_error_propagates(self):
        """Test that a Play Store connection failure is raised as NetworkError."""
        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, exc=requests.exceptions.ConnectionError)
            with pytest.raises(NetworkError, match="Failed to fetch Play Store page"):
                get_status("android", "1.0.0", "com.example.app")

    def test_no_literal_is_never_newer(self, make_play_store_page):
        """Test that a page without a version literal reports no update."""
        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, text=make_play_store_page(None))
            status = get_status("android", "0.0.1", "com.example.app")

        assert status.store_version == "0.0.0"
        assert not status.can_update

    def test_force_version_wins(self, play_store_html):
        """Test that a forced version replaces the scraped version."""
        config = LookupConfig(force_version="3.0.0")

        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, text=play_store_html)
            status = get_status("android", "2.4.1", "com.example.app", config)

        assert status.store_version == "3.0.0"
        assert status.can_update

    def test_channel_version_normalized(self, make_play_store_page):
        """Test that channel versions keep only their numeric core."""
        with requests_mock.Mocker() as m:
            m.get(DETAILS_URL, text=make_play_store_page("2024.2.prod.1"))
            status = get_status("android", "2024.1.0", "com.example.app")

        assert status.store_version == "2024.2"
        assert status.can_update


class TestUnsupportedPlatform:
    """Tests for platforms without a lookup strategy."""

    def test_returns_none(self):
        """Test that an unsupported platform yields no status."""
        with patch("storeversion.lookup.app_store.requests.get") as mock_get:
            assert get_status("windows", "1.0.0", "com.example.app") is None
        mock_get.assert_not_called()


class TestGetVersionStatus:
    """Tests for the package-info based entry point."""

    def test_uses_package_info(self, app_store_payload):
        """Test that package name and version come from the provider."""
        info = PackageInfo(package_name="com.example.app", version="2.5.0")

        with requests_mock.Mocker() as m:
            m.get(LOOKUP_URL, json=app_store_payload)
            status = get_version_status(info, "ios")
            url = m.last_request.url

        assert "bundleId=com.example.app" in url
        assert status.local_version == "2.5.0"
        assert not status.can_update


def _status(local_version: str, store_version: str) -> VersionStatus:
    meta = StoreMetadata(
        version=store_version,
        store_link="https://example.com",
        release_notes=None,
        source="test",
    )
    return VersionStatus._from_lookup(local_version, meta)


class TestStatusCanUpdate:
    """Tests for status_can_update helper."""

    def test_none_status(self):
        """Test that a missing status never reports an update."""
        assert not status_can_update(None)

    def test_matches_property(self):
        """Test that the helper agrees with VersionStatus.can_update."""
        newer = _status("1.0.0", "1.1.0")
        same = _status("1.1.0", "1.1.0")
        assert status_can_update(newer) is newer.can_update is True
        assert status_can_update(same) is same.can_update is False

    def test_update_message(self):
        """Test the default prompt text."""
        status = _status("1.0.0", "1.1.0")
        assert status.update_message == (
            "You can now update this app from 1.0.0 to 1.1.0"
        )

    def test_status_is_immutable(self):
        """Test that VersionStatus is frozen."""
        status = _status("1.0.0", "1.1.0")
        with pytest.raises(AttributeError):
            status.store_version = "2.0.0"  # type: ignore


class TestFromLookup:
    """Tests for building a VersionStatus from store metadata."""

    def test_normalizes_both_versions(self):
        """Test that raw local and store versions are normalized."""
        status = _status("v1.2 (build 7)", "1.3.0-beta.2")
        assert status.local_version == "1.2"
        assert status.store_version == "1.3.0"
        assert status.can_update

    def test_unparseable_versions_fall_back(self):
        """Test that versions without a numeric core become 0.0.0."""
        status = _status("unknown", "")
        assert status.local_version == "0.0.0"
        assert status.store_version == "0.0.0"
        assert not status.can_update
