"""
Lookup configuration loading for storeversion.

A lookup configuration tells the status builder how to address each store
when the app's own package name is not the right identifier, which region
to query, and whether to force a store version for testing.

File Format
-----------
    force_version: "2.0.0"     # optional; replaces any store version
    timeout: 10                # optional; request timeout in seconds
    stores:
      ios:
        app_id: com.example.app.ios   # optional; defaults to package name
        region: gb                    # optional; ISO 3166-1 alpha-2
      android:
        app_id: com.example.app
        region: de_DE                 # optional; hl locale, default en_US

Layers
------
An optional defaults file can be passed alongside the config. The loader
performs deep merging with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from the config override defaults)
  - **Lists**: Completely replaced
  - **Scalars**: Overwritten

Environment Variables
---------------------
String values of the form "${NAME}" are replaced with the value of the
environment variable NAME. Unset variables become null (the field is then
treated as not configured); a variable set to an empty string expands to an
empty string. An expanded timeout is read as a number, so
`timeout: "${STORE_TIMEOUT}"` works; validate_config accepts the
unexpanded placeholder there.

Functions
---------
load_lookup_config : function
    Load, merge, expand and validate a YAML config file.
validate_config : function
    Check a config mapping for errors without any network calls.

Error Handling
--------------
- FileNotFoundError: Config or defaults file doesn't exist
- ConfigError: YAML parse errors, non-mapping documents, invalid fields
- All errors are chained with "from err" for better debugging

Examples
--------
    >>> from pathlib import Path
    >>> from storeversion.config import load_lookup_config
    >>> cfg = load_lookup_config(Path("storeversion.yaml"))
    >>> cfg.for_platform("ios").region
    'gb'
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
import os
from pathlib import Path
from typing import Any

import yaml

from storeversion.exceptions import ConfigError

_TOP_LEVEL_FIELDS = {"force_version", "timeout", "stores"}
_STORE_FIELDS = {"app_id", "region"}

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class StoreOverrides:
    """Per-store addressing.

    Attributes:
        app_id: Identifier to use in this store instead of the package name.
        region: Region or locale code for this store.
    """

    app_id: str | None = None
    region: str | None = None


@dataclass(frozen=True)
class LookupConfig:
    """Settings for a version status lookup.

    Attributes:
        stores: Per-store overrides keyed by platform tag.
        force_version: Version that replaces the store-reported version in
            every strategy.
        timeout: Request timeout in seconds (None: HTTP client default).
    """

    stores: dict[str, StoreOverrides] = field(default_factory=dict)
    force_version: str | None = None
    timeout: float | None = None

    def for_platform(self, platform: str) -> StoreOverrides:
        """Return the overrides for a platform (empty if none configured)."""
        return self.stores.get(platform) or StoreOverrides()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LookupConfig:
        """Build a config from an already validated mapping."""
        stores = {
            platform: StoreOverrides(
                app_id=(values or {}).get("app_id"),
                region=(values or {}).get("region"),
            )
            for platform, values in (data.get("stores") or {}).items()
        }
        timeout = data.get("timeout")
        return cls(
            stores=stores,
            force_version=data.get("force_version"),
            timeout=None if timeout is None else float(timeout),
        )


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML file that must contain a mapping.

    Raises:
      FileNotFoundError      - when file does not exist
      ConfigError            - for invalid YAML or a non-mapping document
    """
    if not p.exists():
        raise FileNotFoundError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        # An empty file is a valid "use all defaults" config.
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _is_env_placeholder(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("${") and value.endswith("}")


def _parse_number(text: str) -> float | str:
    """Read an expanded value as a finite number, or return it unchanged."""
    try:
        number = float(text)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def _expand_env(value: Any) -> Any:
    """Recursively replace "${NAME}" strings with environment values."""
    from storeversion.logging import get_global_logger

    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if _is_env_placeholder(value):
        env_var = value[2:-1]
        env_value = os.environ.get(env_var)
        if env_value is None:
            get_global_logger().verbose(
                "CONFIG", f"Warning: Environment variable {env_var} not set"
            )
            return None
        return env_value
    return value


# -------------------------------
# Validation
# -------------------------------


def validate_config(data: Any) -> list[str]:
    """Validate a lookup config mapping.

    Checks structure and field types only; makes no network calls.

    Args:
        data: Parsed YAML document.

    Returns:
        List of error messages (empty if valid).
    """
    if not isinstance(data, dict):
        return ["Config must be a mapping"]

    errors = []

    for key in data:
        if key not in _TOP_LEVEL_FIELDS:
            errors.append(f"Unknown field: {key}")

    force_version = data.get("force_version")
    if force_version is not None and not isinstance(force_version, str):
        errors.append(
            "force_version must be a string (quote it in YAML, e.g. \"2.0\")"
        )

    timeout = data.get("timeout")
    if timeout is not None and not _is_env_placeholder(timeout):
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            errors.append("timeout must be a number")
        elif timeout <= 0:
            errors.append("timeout must be greater than zero")

    stores = data.get("stores")
    if stores is None:
        return errors
    if not isinstance(stores, dict):
        errors.append("stores must be a dictionary")
        return errors

    for platform, values in stores.items():
        if values is None:
            continue
        if not isinstance(values, dict):
            errors.append(f"stores.{platform} must be a dictionary")
            continue
        for key, value in values.items():
            if key not in _STORE_FIELDS:
                errors.append(f"Unknown field: stores.{platform}.{key}")
            elif value is not None and not isinstance(value, str):
                errors.append(f"stores.{platform}.{key} must be a string")
            elif isinstance(value, str) and not value.strip():
                errors.append(f"stores.{platform}.{key} cannot be empty")

    return errors


# -------------------------------
# Public API
# -------------------------------


def validate_config_file(config_path: Path) -> list[str]:
    """Validate a config file without expanding or building it.

    Returns:
        List of error messages (empty if valid). A missing file or a YAML
            error is reported as a single message instead of raised.
    """
    try:
        data = _load_yaml_file(config_path)
    except (ConfigError, FileNotFoundError) as err:
        return [str(err)]
    return validate_config(data)


def load_lookup_config(
    config_path: Path,
    *,
    defaults_path: Path | None = None,
) -> LookupConfig:
    """
    Load the effective lookup configuration from YAML.

    Steps
      1) Read defaults YAML (if given) and config YAML.
      2) Merge: defaults -> config (dicts deep-merge, scalars replace).
      3) Expand "${NAME}" values from the environment.
      4) Validate and build a LookupConfig.

    Raises
      FileNotFoundError if either file is missing,
      ConfigError on YAML errors or validation failures.
    """
    from storeversion.logging import get_global_logger

    logger = get_global_logger()

    merged: dict[str, Any] = {}
    if defaults_path is not None:
        logger.verbose("CONFIG", f"Loading defaults: {defaults_path}")
        merged = _deep_merge_dicts(merged, _load_yaml_file(defaults_path))

    logger.verbose("CONFIG", f"Loading config: {config_path}")
    merged = _deep_merge_dicts(merged, _load_yaml_file(config_path))

    timeout_from_env = _is_env_placeholder(merged.get("timeout"))
    merged = _expand_env(merged)
    if timeout_from_env and isinstance(merged.get("timeout"), str):
        merged["timeout"] = _parse_number(merged["timeout"])

    if merged:
        dumped = yaml.dump(merged, default_flow_style=False, sort_keys=False)
        logger.debug("CONFIG", f"Effective config:\n{dumped.rstrip()}")

    errors = validate_config(merged)
    if errors:
        raise ConfigError(
            f"Invalid config {config_path}: " + "; ".join(errors)
        )

    return LookupConfig.from_dict(merged)
