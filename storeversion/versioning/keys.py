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

"""Core version normalization and comparison for storeversion.

This module is format-agnostic: it does NOT touch the network. It reduces
arbitrary version strings to a leading MAJOR.MINOR[.PATCH] form and compares
those forms field by field as numbers.
"""

from __future__ import annotations

import re

# Leading numeric core; build metadata, channel suffixes and extra fields
# after it are ignored. ASCII digits only.
_VERSION_CORE = re.compile(r"\d+\.\d+(\.\d+)?", re.ASCII)

FALLBACK_VERSION = "0.0.0"


def normalize(raw: str | None) -> str:
    """Reduce a version string to its leading MAJOR.MINOR[.PATCH] form.

    Never raises. Text without a recognizable numeric core (including empty
    text) yields "0.0.0", which is never considered newer than anything.

    Example:
        >>> normalize("1.2.3-beta+4")
        '1.2.3'
        >>> normalize("v2.10")
        '2.10'
        >>> normalize("garbage")
        '0.0.0'
    """
    m = _VERSION_CORE.search(raw or "")
    return m.group(0) if m else FALLBACK_VERSION


def version_fields(version: str | None) -> tuple[str, ...]:
    """Split a version into its digit fields (normalizing first).

    Leading zeros are stripped, so every field is in canonical form ("007"
    becomes "7", "000" becomes "0"). Fields stay text: a store may publish
    fields too long for int().

    Example:
        >>> version_fields("1.010.0")
        ('1', '10', '0')
    """
    return tuple(p.lstrip("0") or "0" for p in normalize(version).split("."))


def _field_key(field: str) -> tuple[int, str]:
    """Order canonical digit fields numerically: longer is larger."""
    return len(field), field


def _pad_equal(
    a: tuple[str, ...], b: tuple[str, ...]
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Pad tuples with zero fields so they align for element-wise comparison."""
    n = max(len(a), len(b))
    return a + ("0",) * (n - len(a)), b + ("0",) * (n - len(b))


def compare_versions(a: str, b: str) -> int:
    """Compare two versions field by field, most significant first.

    Returns -1 if a < b, 0 if equal, 1 if a > b.

    Fields are compared numerically, so "1.10" is newer than "1.9", and
    fields of any length are handled. When the two versions have a different
    number of fields, the shorter one is padded with zero fields first: "1.2"
    equals "1.2.0" and is older than "1.2.5".
    """
    aa, bb = _pad_equal(version_fields(a), version_fields(b))
    for left, right in zip(aa, bb):
        if _field_key(left) > _field_key(right):
            return 1
        if _field_key(right) > _field_key(left):
            return -1
    return 0


def can_update(local: str, store: str) -> bool:
    """Return True if the store version is newer than the local version.

    Both arguments are expected in normalized form; anything else is
    normalized on the way in, so this never raises.

    Example:
        >>> can_update("1.9.0", "1.10.0")
        True
        >>> can_update("2.0", "1.9.9")
        False
        >>> can_update("1.2", "1.2.0")  # zero-padded, equal
        False
    """
    return compare_versions(store, local) > 0
