"""
Pytest configuration and shared fixtures for storeversion tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from storeversion.logging import SilentLogger, get_global_logger, set_global_logger


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Keep the global logger silent and restore it after each test."""
    previous = get_global_logger()
    set_global_logger(SilentLogger())
    yield
    set_global_logger(previous)


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Provide a complete lookup config structure."""
    return {
        "force_version": "9.9.9",
        "timeout": 15,
        "stores": {
            "ios": {"app_id": "com.example.app.ios", "region": "gb"},
            "android": {"app_id": "com.example.app", "region": "de_DE"},
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("config.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def app_store_payload() -> dict[str, Any]:
    """Provide an iTunes lookup response with one result."""
    return {
        "resultCount": 1,
        "results": [
            {
                "version": "2.4.1",
                "trackViewUrl": "https://apps.apple.com/us/app/example/id123456",
                "releaseNotes": "Bug fixes and performance improvements.",
                "bundleId": "com.example.app",
            }
        ],
    }


def _play_store_page(version: str | None) -> str:
    """Build a minimal Play Store details page embedding a version literal."""
    blob = f'[[["{version}"]],[[[30,"11"]]]]' if version else "[[null]]"
    return (
        "<!doctype html><html><head><title>Example App</title></head><body>"
        '<script nonce="x">AF_initDataCallback({key: \'ds:5\', data:'
        f"[null,[[{blob}]]]"
        "});</script></body></html>"
    )


@pytest.fixture
def play_store_html() -> str:
    """Provide a Play Store details page publishing version 2.4.1."""
    return _play_store_page("2.4.1")


@pytest.fixture
def make_play_store_page():
    """
    Factory fixture for Play Store details pages.

    Usage:
        html = make_play_store_page("2024.1.prod.3")
        html = make_play_store_page(None)  # no version literal
    """
    return _play_store_page
