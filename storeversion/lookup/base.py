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

"""Store lookup strategy protocol and registry for storeversion.

This module defines the foundational components for store lookups:

- LookupRequest / StoreMetadata: what goes into and comes out of a lookup
- LookupStrategy protocol: Interface that all store strategies implement
- Strategy registry: Global dict mapping platform tags to implementations
- Registration and lookup functions: register_strategy() and get_strategy()

Two strategies ship with the package:

- ios: AppStoreLookup, queries the iTunes lookup JSON API
- android: PlayStoreLookup, scrapes the Play Store details page

Design Philosophy:
    - Strategies are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (strategies self-register)
    - The platform tag is supplied by the caller and resolved once per lookup
    - Each strategy is stateless and instantiated on demand
    - Each strategy declares which of its errors are soft (soft_errors);
      the status builder turns those into "no status" and lets the rest
      propagate

Example:
    Registering a strategy for another store:
        ```python
        from storeversion.lookup.base import (
            LookupRequest,
            StoreMetadata,
            register_strategy,
        )

        class MyStoreLookup:
            soft_errors = ()

            def fetch(self, request: LookupRequest) -> StoreMetadata:
                ...

        register_strategy("mystore", MyStoreLookup)
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Protocol

from storeversion.exceptions import UnsupportedPlatformError

# -------------------------------
# Lookup DTOs
# -------------------------------


@dataclass(frozen=True)
class LookupRequest:
    """Input for a single store lookup.

    Attributes:
        app_id: Store identifier of the app (bundle id or package name).
        region: Store region or locale code; strategy-specific default if
            None.
        override: Version string that replaces whatever the store reports.
            Useful for exercising update prompts before a release exists.
        timeout: Request timeout in seconds; None uses the HTTP client's
            default.
    """

    app_id: str
    region: str | None = None
    override: str | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class StoreMetadata:
    """Store-side facts about an app, as retrieved (not yet normalized).

    Attributes:
        version: Raw store version string ("" when none could be found).
        store_link: URL of the app's store page.
        release_notes: Release notes, if the store provides them.
        source: Name of the strategy that produced this (for logging).
    """

    version: str
    store_link: str
    release_notes: str | None
    source: str


# -------------------------------
# Strategy Protocol
# -------------------------------


class LookupStrategy(Protocol):
    """Protocol for store lookup strategies.

    Attributes:
        soft_errors: Exception types that mean "no status available" for
            this store. The status builder returns None for these and
            re-raises everything else.
    """

    soft_errors: ClassVar[tuple[type[Exception], ...]]

    def fetch(self, request: LookupRequest) -> StoreMetadata:
        """Retrieve store metadata for an app.

        Args:
            request: Identifier, region and optional version override.

        Returns:
            The store version, store link and optional release notes.

        Raises:
            NetworkError: On non-2xx responses or transport failures.
            NotFoundError: If the store has no app with that identifier.
            ParseError: If the response lacks a required field.
        """
        ...


# -------------------------------
# Strategy Registry
# -------------------------------

_STRATEGY_REGISTRY: dict[str, type[LookupStrategy]] = {}


def register_strategy(platform: str, strategy_class: type[LookupStrategy]) -> None:
    """Register a lookup strategy for a platform tag.

    Registering the same tag twice overwrites the previous registration
    (allows monkey-patching for tests).

    Args:
        platform: Platform tag (e.g., "ios"). Lowercase by convention.
        strategy_class: Class implementing the LookupStrategy protocol.
    """
    _STRATEGY_REGISTRY[platform] = strategy_class


def get_strategy(platform: str) -> LookupStrategy:
    """Get a new lookup strategy instance for a platform tag.

    Args:
        platform: Platform tag (e.g., "ios", "android"). Case-sensitive.

    Returns:
        A new instance of the registered strategy.

    Raises:
        UnsupportedPlatformError: If no strategy is registered for the tag.
            The message lists the supported platforms.
    """
    if platform not in _STRATEGY_REGISTRY:
        available = ", ".join(sorted(_STRATEGY_REGISTRY)) or "(none)"
        raise UnsupportedPlatformError(
            f"The target platform {platform!r} is not supported. "
            f"Available: {available}"
        )
    return _STRATEGY_REGISTRY[platform]()


def available_platforms() -> list[str]:
    """Return the registered platform tags, sorted."""
    return sorted(_STRATEGY_REGISTRY)
