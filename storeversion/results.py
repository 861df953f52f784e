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

"""Public API return types for storeversion.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Using the status returned by a lookup:
        ```python
        from storeversion.core import get_status

        status = get_status("ios", "1.4.0", "com.example.app")
        if status is not None and status.can_update:
            print(f"Update {status.local_version} -> {status.store_version}")
            print(status.store_link)
        ```

Note:
    Only public API return types belong in this module. Lookup types
    (like StoreMetadata and LookupRequest) stay with the lookup strategies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeversion.versioning import can_update, normalize

if TYPE_CHECKING:
    from storeversion.lookup.base import StoreMetadata


@dataclass(frozen=True)
class VersionStatus:
    """The installed version of an app next to the version in its store.

    Instances are created only through the private _from_lookup factory,
    which storeversion.core.get_status calls after a store lookup; it
    normalizes both versions. Consumers read the fields and can_update;
    they do not construct statuses themselves.

    Attributes:
        local_version: Normalized version of the installed app.
        store_version: Normalized version currently published in the store.
        store_link: URL of the app's store page, used for the update action.
        release_notes: Release notes for the store version, when the store
            provides them (App Store only).
    """

    local_version: str
    store_version: str
    store_link: str
    release_notes: str | None = None

    @classmethod
    def _from_lookup(cls, local_version: str, meta: StoreMetadata) -> VersionStatus:
        """Build a status from a local version and retrieved store metadata.

        Both versions are normalized here; this is the only place a
        VersionStatus is created (storeversion.core.get_status calls it).
        """
        return cls(
            local_version=normalize(local_version),
            store_version=normalize(meta.version),
            store_link=meta.store_link,
            release_notes=meta.release_notes,
        )

    @property
    def can_update(self) -> bool:
        """True if the store version is newer than the local version."""
        return can_update(self.local_version, self.store_version)

    @property
    def update_message(self) -> str:
        """Default prompt text for a presentation layer."""
        return (
            f"You can now update this app from {self.local_version} "
            f"to {self.store_version}"
        )
