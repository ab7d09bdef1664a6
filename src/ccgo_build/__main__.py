# SPDX-License-Identifier: GPL-2.0-only
# Copyright (C) 2025 ccgo-build contributors
"""
ccgo-build - Build configuration, versioning and publishing for CCGO native libraries.

Main entry point for the command line tool.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn

import yaml

from ccgo_build import __version__
from ccgo_build.config.keys import ConfigKey
from ccgo_build.config.resolver import ConfigError
from ccgo_build.context import BuildContext
from ccgo_build.signing import gpg
from ccgo_build.signing.signing_key import prepare
from ccgo_build.versioning.command_runner import CommandRunner

LOG_LEVEL_ENV_VAR = "CCGO_BUILD_LOG_LEVEL"
MASK = "****"


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="ccgo-build",
        description="ccgo-build - Build configuration, versioning and publishing for CCGO native libraries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration sources (priority from high to low):
  1. Environment variables        MAVEN_CENTRAL_USERNAME, SIGNING_IN_MEMORY_KEY, ...
  2. CCGO.toml                    [publish.maven] central_username = "..."
  3. <project>/gradle.properties  mavenCentralUsername=...
  4. ~/.gradle/gradle.properties  mavenCentralUsername=...

Examples:
  ccgo-build info                         # Version, tag and project settings
  ccgo-build --release names              # Archive names for a release build
  ccgo-build get MAVEN_LOCAL_PATH
  ccgo-build signing --require            # Fail unless signing is possible
  CCGO_CI_BUILD_IS_RELEASE=true ccgo-build info
        """,
    )

    parser.add_argument(
        "-C",
        "--project-root",
        type=str,
        default=".",
        help="Gradle root project directory (default: current directory)",
    )

    release_group = parser.add_mutually_exclusive_group()
    release_group.add_argument(
        "--release",
        dest="release",
        action="store_true",
        default=None,
        help="Treat this as a release build",
    )
    release_group.add_argument(
        "--no-release",
        dest="release",
        action="store_false",
        help="Treat this as a beta/debug build",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: ${LOG_LEVEL_ENV_VAR} or WARNING)",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"ccgo-build version {__version__}",
        help="Show version information and exit",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("info", help="Show version info and project settings")

    get_parser = subparsers.add_parser("get", help="Resolve one configuration key")
    get_parser.add_argument("key", help="Key name, env var or gradle property (e.g. MAVEN_LOCAL_PATH)")
    get_parser.add_argument("--default", default="", help="Value to print when the key is not configured")
    get_parser.add_argument("--reveal", action="store_true", help="Print credentials instead of masking them")

    subparsers.add_parser("repos", help="List Maven repositories")
    subparsers.add_parser("names", help="Show archive and artifact names")

    signing_parser = subparsers.add_parser("signing", help="Show how publications will be signed")
    signing_parser.add_argument(
        "--require",
        action="store_true",
        default=None,
        help="Fail if signing is unavailable (default: SIGN_ENABLED)",
    )

    export_parser = subparsers.add_parser(
        "export-key",
        help="Export a gpg secret key as a single gradle.properties line",
    )
    export_parser.add_argument("key_id", help="GPG key id")
    export_parser.add_argument("--passphrase", default="", help="Key passphrase")

    return parser.parse_args(argv)


def configure_logging(level_name: str | None) -> None:
    """Configure root logging from the CLI option or environment."""
    level_name = level_name or os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING")
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def dump(data: Any) -> str:
    """Render data as YAML."""
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def command_info(context: BuildContext) -> int:
    data = {
        "version": context.version.as_dict(),
        "project": context.document.summary(),
        "target_directory": str(context.target_directory()),
    }
    print(dump(data), end="")
    return 0


def command_get(context: BuildContext, args: argparse.Namespace) -> int:
    try:
        key = ConfigKey.from_name(args.key)
    except KeyError as err:
        print(f"Error: {err.args[0]}", file=sys.stderr)
        print("Known keys: " + ", ".join(key.name for key in ConfigKey), file=sys.stderr)
        return 1

    result = context.resolver.lookup(key)
    if result is None:
        value, source = args.default, "default"
    else:
        value, source = result.value, result.source

    if key.sensitive and value and not args.reveal:
        value = MASK

    print(value)
    print(f"source: {source}", file=sys.stderr)
    return 0


def command_repos(context: BuildContext) -> int:
    repositories = [
        {"name": repo.name, "url": repo.url, "credentials": repo.has_credentials}
        for repo in context.repositories()
    ]
    print(dump({"repositories": repositories}), end="")
    return 0


def command_names(context: BuildContext) -> int:
    print(dump(context.namer.as_dict()), end="")
    return 0


def command_signing(context: BuildContext, args: argparse.Namespace) -> int:
    plan = context.signing_plan(required=args.require)
    data = {
        "mode": plan.mode.value,
        "enabled": plan.enabled,
        "diagnostic": plan.diagnostic,
    }
    print(dump(data), end="")
    return 0


def command_export_key(context: BuildContext, args: argparse.Namespace) -> int:
    exported = gpg.export_secret_key(args.key_id, args.passphrase, runner=context.runner)
    if not exported:
        print(f"Error: Failed to export gpg key {args.key_id}", file=sys.stderr)
        return 1

    prepared = prepare(exported)
    if not prepared.is_valid:
        print(f"Error: Exported key is not usable: {prepared.problem}", file=sys.stderr)
        return 1

    print(f"signingInMemoryKey={gpg.to_single_line(prepared.key_text)}")
    return 0


def main(argv: list[str] | None = None, runner: CommandRunner | None = None) -> int:
    """
    Main entry point for the ccgo-build command line tool.

    Args:
        argv: Command line arguments (defaults to sys.argv)
        runner: Command runner for git and gpg (defaults to subprocess)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    try:
        context = BuildContext.create(Path(args.project_root), release=args.release, runner=runner)

        if args.command == "info":
            return command_info(context)
        if args.command == "get":
            return command_get(context, args)
        if args.command == "repos":
            return command_repos(context)
        if args.command == "names":
            return command_names(context)
        if args.command == "signing":
            return command_signing(context, args)
        if args.command == "export-key":
            return command_export_key(context, args)

        print(f"Error: Unknown command: {args.command}", file=sys.stderr)
        return 1

    except ConfigError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


def run() -> NoReturn:
    """
    Run the application and exit with appropriate code.

    This is used by the console script entry point.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
