"""
Version normalization and comparison utilities for storeversion.

Store pages and local package metadata report versions in many shapes:
"1.2.3", "v1.2", "4.5.6-beta+build.7", "2024.1.prod.3". Only the leading
numeric core is meaningful when deciding whether an update exists, so every
version is first reduced to MAJOR.MINOR[.PATCH] and then compared field by
field as integers.

Modules
-------
keys : module
    Normalization and field-wise comparison.

Public API
----------
normalize : function
    Extract the leading MAJOR.MINOR[.PATCH] core, or "0.0.0".
version_fields : function
    Split a version into canonical digit fields.
compare_versions : function
    Compare two versions, returning -1, 0, or 1.
can_update : function
    Check whether a store version is newer than a local version.

Examples
--------
    >>> from storeversion.versioning import can_update, normalize
    >>> normalize("3.4.1 (build 88)")
    '3.4.1'
    >>> can_update("1.9.0", "1.10.0")
    True

Notes
-----
- Normalization and comparison never raise
- Versions of different lengths are zero-padded before comparing
"""

from .keys import (
    FALLBACK_VERSION,
    can_update,
    compare_versions,
    normalize,
    version_fields,
)

__all__ = [
    "FALLBACK_VERSION",
    "can_update",
    "compare_versions",
    "normalize",
    "version_fields",
]
