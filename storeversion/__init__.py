"""
storeversion - App store update checks

A Python library and CLI that tells whether an installed application is out
of date relative to the version currently published in its app store.

storeversion provides:
  - Version normalization to a leading MAJOR.MINOR[.PATCH] core
  - Field-wise integer version comparison
  - Apple App Store lookup via the iTunes lookup JSON API
  - Google Play Store lookup by scraping the app details page
  - YAML lookup configuration (per-store ids and regions, forced versions)

Quick Start
-----------
Check an app:

    $ storeversion check --platform ios --package-id com.example.app \\
        --local-version 1.4.0

For full CLI documentation:

    $ storeversion --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Status building: strategy dispatch, normalization, failure policy.
config : package
    Lookup configuration dataclasses and YAML loading.
lookup : package
    Strategy pattern for retrieving store metadata per platform.
versioning : package
    Version normalization and comparison.
results : module
    VersionStatus, the value consumed by presentation layers.

Public API
----------
    from storeversion.core import get_status, get_version_status
    from storeversion.config import LookupConfig, load_lookup_config
    from storeversion.versioning import can_update, normalize
    from storeversion.results import VersionStatus

Presentation (dialogs, store launching) is left to the caller: it receives
a VersionStatus and decides what to show.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Check installed app versions against App Store and Play Store"

# Re-export commonly used functions for convenience
from storeversion.config import LookupConfig, StoreOverrides, load_lookup_config
from storeversion.core import get_status, get_version_status, status_can_update
from storeversion.package_info import PackageInfo, package_info_from_distribution
from storeversion.results import VersionStatus
from storeversion.versioning import can_update, compare_versions, normalize

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "LookupConfig",
    "StoreOverrides",
    "load_lookup_config",
    "get_status",
    "get_version_status",
    "status_can_update",
    "PackageInfo",
    "package_info_from_distribution",
    "VersionStatus",
    "can_update",
    "compare_versions",
    "normalize",
]
