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

"""Core orchestration for storeversion.

This module builds VersionStatus values: it resolves the lookup strategy
for a platform, addresses the store using the lookup configuration, and
normalizes both the local and the store version.

Failure Policy:

Each strategy declares which of its errors are soft (soft_errors). Soft
errors are logged and produce None, so an update-prompt flow simply does
nothing. Everything else propagates:

- **ios** (App Store): NetworkError and NotFoundError are soft. ParseError
    propagates.
- **android** (Play Store): nothing is soft. A failed page fetch raises
    NetworkError to the caller.
- **unknown platform**: logged, returns None.

Design Principles:

- One network round trip per status check; no retries and no caching
- No shared mutable state between calls; checks may run concurrently
- VersionStatus is only constructed here, through VersionStatus._from_lookup

Example:
    Programmatic usage:
        ```python
        from storeversion.config import LookupConfig, StoreOverrides
        from storeversion.core import get_status

        status = get_status(
            "ios",
            local_version="1.4.0",
            package_id="com.example.app",
            config=LookupConfig(stores={"ios": StoreOverrides(region="gb")}),
        )
        if status is not None and status.can_update:
            print(status.update_message)
        ```

"""

from __future__ import annotations

from storeversion.config import LookupConfig
from storeversion.exceptions import UnsupportedPlatformError
from storeversion.logging import get_global_logger
from storeversion.lookup import LookupRequest, get_strategy
from storeversion.package_info import PackageInfoProvider
from storeversion.results import VersionStatus
from storeversion.versioning import can_update


def build_request(
    platform: str, package_id: str, config: LookupConfig
) -> LookupRequest:
    """Address a store: per-store overrides win over the package id."""
    overrides = config.for_platform(platform)
    return LookupRequest(
        app_id=overrides.app_id or package_id,
        region=overrides.region,
        override=config.force_version,
        timeout=config.timeout,
    )


def get_status(
    platform: str,
    local_version: str,
    package_id: str,
    config: LookupConfig | None = None,
) -> VersionStatus | None:
    """Look up the store version for an app and pair it with the local one.

    Args:
        platform: Platform tag selecting the store ("ios" or "android").
        local_version: Installed version, in any form (normalized here).
        package_id: The app's package identifier, used as the store id
            unless the config overrides it for this platform.
        config: Per-store overrides, forced version and timeout.

    Returns:
        VersionStatus with both versions normalized, or None if the
            platform is unsupported or the store lookup failed softly.

    Raises:
        NetworkError: If the Play Store page could not be fetched.
        ParseError: If the App Store response lacks a required field.
    """
    logger = get_global_logger()
    config = config or LookupConfig()

    try:
        strategy = get_strategy(platform)
    except UnsupportedPlatformError as err:
        logger.verbose("STATUS", str(err))
        return None

    request = build_request(platform, package_id, config)
    logger.verbose("STATUS", f"Checking {platform} store for {request.app_id}")

    try:
        meta = strategy.fetch(request)
    except strategy.soft_errors as err:
        logger.verbose("STATUS", f"No store version available: {err}")
        return None

    status = VersionStatus._from_lookup(local_version, meta)
    logger.verbose(
        "STATUS",
        f"Local {status.local_version}, store {status.store_version} "
        f"(source: {meta.source})",
    )
    return status


def get_version_status(
    package_info: PackageInfoProvider,
    platform: str,
    config: LookupConfig | None = None,
) -> VersionStatus | None:
    """Check the running app against its store listing.

    Args:
        package_info: Provider of the app's package name and version
            (e.g., PackageInfo or package_info_from_distribution()).
        platform: Platform tag selecting the store.
        config: Per-store overrides, forced version and timeout.

    Returns:
        VersionStatus, or None when no status is available.
    """
    return get_status(
        platform,
        local_version=package_info.version,
        package_id=package_info.package_name,
        config=config,
    )


def status_can_update(status: VersionStatus | None) -> bool:
    """True if a status exists and its store version is newer."""
    return status is not None and can_update(
        status.local_version, status.store_version
    )
