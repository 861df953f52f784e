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

"""Command-line interface for storeversion.

Commands:

    check: Compare an app's local version with its store listing
    validate: Validate a lookup config file
    normalize: Print the normalized form of version strings

Example:
    Check an iOS app:
        ```bash
        $ storeversion check --platform ios --package-id com.example.app \\
            --local-version 1.4.0
        ```

    Check an installed Python distribution against a config:
        ```bash
        $ storeversion check --platform android --distribution myapp \\
            --config storeversion.yaml --verbose
        ```

Exit Codes:

- 0: Success (including "no status available")
- 1: Error (configuration, network, or validation failure)
- 2: Update available (only with check --exit-code)

Note:
    The CLI uses argparse for command parsing. Each command has its own
    handler function (cmd_<command>). Verbose mode shows full tracebacks
    on errors for debugging.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys

from storeversion.config import (
    LookupConfig,
    StoreOverrides,
    load_lookup_config,
    validate_config_file,
)
from storeversion.core import get_status
from storeversion.exceptions import StoreVersionError
from storeversion.logging import get_logger, set_global_logger
from storeversion.lookup import available_platforms
from storeversion.package_info import package_info_from_distribution
from storeversion.versioning import normalize

EXIT_UPDATE_AVAILABLE = 2


def _config_from_args(args: argparse.Namespace) -> LookupConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = load_lookup_config(Path(args.config)) if args.config else LookupConfig()

    stores = dict(config.stores)
    if args.app_id or args.region:
        current = config.for_platform(args.platform)
        stores[args.platform] = StoreOverrides(
            app_id=args.app_id or current.app_id,
            region=args.region or current.region,
        )

    return LookupConfig(
        stores=stores,
        force_version=args.force_version or config.force_version,
        timeout=args.timeout if args.timeout is not None else config.timeout,
    )


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'storeversion check' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 success, 1 failure, 2 update available with
            --exit-code).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        if args.distribution:
            info = package_info_from_distribution(args.distribution)
            package_id, local_version = info.package_name, info.version
        else:
            package_id, local_version = args.package_id, args.local_version

        config = _config_from_args(args)

        logger.step(1, 2, f"Looking up {args.platform} store version...")
        status = get_status(args.platform, local_version, package_id, config)
    except (StoreVersionError, FileNotFoundError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    logger.step(2, 2, "Comparing versions...")
    print()

    if status is None:
        print(f"No version status available for {package_id} ({args.platform}).")
        return 0

    print("=" * 70)
    print("VERSION STATUS")
    print("=" * 70)
    print(f"Package:         {package_id}")
    print(f"Platform:        {args.platform}")
    print(f"Local Version:   {status.local_version}")
    print(f"Store Version:   {status.store_version}")
    print(f"Store Link:      {status.store_link}")
    print(f"Can Update:      {'yes' if status.can_update else 'no'}")
    if status.release_notes:
        print("Release Notes:")
        for line in status.release_notes.splitlines():
            print(f"  {line}")
    print("=" * 70)
    print()

    if status.can_update:
        print(f"[UPDATE] {status.update_message}")
        return EXIT_UPDATE_AVAILABLE if args.exit_code else 0

    print("[OK] App is up to date.")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'storeversion validate' command.

    Validates a lookup config without making network calls.

    Returns:
        Exit code (0 for valid config, 1 for invalid).

    """
    set_global_logger(get_logger(verbose=args.verbose))

    config_path = Path(args.config).resolve()
    print(f"Validating config: {config_path}")
    print()

    errors = validate_config_file(config_path)
    if errors:
        print(f"Errors ({len(errors)}):")
        for error in errors:
            print(f"  [X] {error}")
        print()
        print(f"[FAILED] Config validation failed with {len(errors)} error(s).")
        return 1

    print("[SUCCESS] Config is valid!")
    return 0


def cmd_normalize(args: argparse.Namespace) -> int:
    """Handler for 'storeversion normalize' command."""
    for raw in args.versions:
        print(f"{raw} -> {normalize(raw)}")
    return 0


def _package_version() -> str:
    try:
        return version("storeversion")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the storeversion CLI."""
    parser = argparse.ArgumentParser(
        prog="storeversion",
        description="Check whether an app is out of date in its app store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"storeversion {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Compare the local version with the store version",
        description="Look up the store listing and report whether an update is available.",
    )
    parser_check.add_argument(
        "--platform",
        required=True,
        help=f"Store platform tag ({', '.join(available_platforms())})",
    )
    source = parser_check.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--package-id",
        help="Package identifier of the app (requires --local-version)",
    )
    source.add_argument(
        "--distribution",
        help="Read package name and version from an installed distribution",
    )
    parser_check.add_argument(
        "--local-version",
        help="Installed version of the app (with --package-id only)",
    )
    parser_check.add_argument(
        "--config",
        help="Path to a lookup config YAML file",
    )
    parser_check.add_argument(
        "--app-id",
        help="Store identifier, if different from the package id",
    )
    parser_check.add_argument(
        "--region",
        help="Store region (App Store country or Play Store locale)",
    )
    parser_check.add_argument(
        "--force-version",
        help="Pretend the store publishes this version",
    )
    parser_check.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: none)",
    )
    parser_check.add_argument(
        "--exit-code",
        action="store_true",
        help=f"Exit with {EXIT_UPDATE_AVAILABLE} when an update is available",
    )
    parser_check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_check.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_check.set_defaults(func=cmd_check)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a lookup config file (no network calls)",
    )
    parser_validate.add_argument(
        "config",
        help="Path to the lookup config YAML file",
    )
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'normalize' command
    parser_normalize = subparsers.add_parser(
        "normalize",
        help="Print the normalized MAJOR.MINOR[.PATCH] form of versions",
    )
    parser_normalize.add_argument(
        "versions",
        nargs="+",
        help="Version strings to normalize",
    )
    parser_normalize.set_defaults(func=cmd_normalize)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the storeversion CLI.

    This function is registered as the 'storeversion' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check" and args.package_id and not args.local_version:
        parser.error("--package-id requires --local-version")
    if args.command == "check" and args.distribution and args.local_version:
        parser.error("--local-version cannot be used with --distribution")

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
