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

"""Local package information for storeversion.

The status builder needs two facts about the running application: its
package identifier and its installed version. Mobile shells and packaging
tools each have their own way of reporting these, so the builder accepts
anything shaped like PackageInfo. This module provides the dataclass and a
reader for installed Python distributions.

Example:
    From an installed distribution:
        ```python
        from storeversion.package_info import package_info_from_distribution

        info = package_info_from_distribution("storeversion")
        print(info.package_name, info.version)
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, metadata
from typing import Protocol

from storeversion.exceptions import ConfigError


class PackageInfoProvider(Protocol):
    """Anything exposing the running app's identifier and version."""

    @property
    def package_name(self) -> str: ...

    @property
    def version(self) -> str: ...


@dataclass(frozen=True)
class PackageInfo:
    """Identifier and installed version of the running application.

    Attributes:
        package_name: Package identifier (bundle id / application id).
        version: Installed version string, as reported (not normalized).
    """

    package_name: str
    version: str


def package_info_from_distribution(name: str) -> PackageInfo:
    """Read package name and version from an installed distribution.

    Args:
        name: Distribution name as installed (e.g., "storeversion").

    Returns:
        PackageInfo with the distribution's canonical name and version.

    Raises:
        ConfigError: If no distribution with that name is installed.
    """
    try:
        meta = metadata(name)
    except PackageNotFoundError as err:
        raise ConfigError(f"Distribution {name!r} is not installed") from err
    return PackageInfo(package_name=meta["Name"], version=meta["Version"])
