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

"""Store lookup strategies for storeversion.

This package provides a pluggable strategy pattern for retrieving the
version an app store currently publishes. The platform tag supplied by the
caller selects the strategy.

Available Strategies:
    ios : AppStoreLookup
        Structured lookup against the iTunes lookup JSON API. Provides
        version, store page link and release notes.
    android : PlayStoreLookup
        Scrapes the Play Store details page for the embedded version
        literal. Provides version and the page URL; never release notes.

Example:
    Resolve and use a strategy:

        from storeversion.lookup import LookupRequest, get_strategy

        strategy = get_strategy("android")
        meta = strategy.fetch(LookupRequest(app_id="com.example.app"))
        print(meta.version)
"""

# Import strategy modules to trigger self-registration
from . import (
    app_store,  # noqa: F401
    play_store,  # noqa: F401
)
from .base import (
    LookupRequest,
    LookupStrategy,
    StoreMetadata,
    available_platforms,
    get_strategy,
    register_strategy,
)

__all__ = [
    "LookupRequest",
    "LookupStrategy",
    "StoreMetadata",
    "available_platforms",
    "get_strategy",
    "register_strategy",
]
