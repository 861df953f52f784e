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

"""Exception hierarchy for storeversion.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of lookup failures:

- ConfigError: Configuration-related errors (YAML parse, invalid fields)
- NetworkError: Non-2xx HTTP status or transport failure
- NotFoundError: The store answered but has no app with that identifier
- ParseError: The store answered with a body missing an expected field
- UnsupportedPlatformError: No lookup strategy exists for a platform tag

All exceptions inherit from StoreVersionError, allowing users to catch all
storeversion errors with a single except clause if needed.

Example:
    Catching a hard scrape failure:
        ```python
        from storeversion.core import get_status
        from storeversion.exceptions import NetworkError

        try:
            status = get_status("android", "1.0.0", "com.example.app")
        except NetworkError as e:
            print(f"Play Store page could not be fetched: {e}")
        ```

Note:
    Which of these errors reach the caller depends on the lookup strategy.
    The App Store lookup degrades NetworkError and NotFoundError to "no
    status"; the Play Store lookup lets NetworkError propagate.
"""

from __future__ import annotations

__all__ = [
    "StoreVersionError",
    "ConfigError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "UnsupportedPlatformError",
]


class StoreVersionError(Exception):
    """Base exception for all storeversion errors."""

    pass


class ConfigError(StoreVersionError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Invalid field types in a lookup configuration
    - Missing configuration files passed as defaults
    """

    pass


class NetworkError(StoreVersionError):
    """Raised when a store request fails at the HTTP or transport level.

    Attributes:
        status_code: HTTP status code, or None for transport failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(StoreVersionError):
    """Raised when the store query succeeded but matched no application."""

    pass


class ParseError(StoreVersionError):
    """Raised when a store response lacks a field the lookup requires.

    This is a developer-visible problem (wrong identifier type, changed API
    contract) rather than a routine "no update" outcome, so it is never
    silently turned into an absent status.
    """

    pass


class UnsupportedPlatformError(StoreVersionError):
    """Raised when no lookup strategy is registered for a platform tag.

    The status builder catches this and returns None.
    """

    pass
