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

"""Lookup configuration for storeversion.

Public API:

- LookupConfig: Per-store overrides, forced version and timeout
- StoreOverrides: Identifier and region for a single store
- load_lookup_config: Load a YAML config (with optional defaults file)
- validate_config: Check a config mapping without network calls
- validate_config_file: Same, reading the mapping from a YAML file

Example:
    Basic usage:

        from pathlib import Path
        from storeversion.config import load_lookup_config

        config = load_lookup_config(Path("storeversion.yaml"))
        print(config.for_platform("android").app_id)

"""

from .loader import (
    LookupConfig,
    StoreOverrides,
    load_lookup_config,
    validate_config,
    validate_config_file,
)

__all__ = [
    "LookupConfig",
    "StoreOverrides",
    "load_lookup_config",
    "validate_config",
    "validate_config_file",
]
