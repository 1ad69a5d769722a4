"""CLI argument parsing and main entry point.

Thin command handlers over :class:`~railway_cli.configs.Configs`:

* ``railway status``: show the project linked to this directory.
* ``railway link``: link this directory to a project/environment.
* ``railway unlink``: remove the closest link.
* ``railway service link``: attach a service to the closest link.
* ``railway logout``: forget the stored token.
* ``railway check-update``: look for a newer release.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import httpx

from railway_cli.configs import Configs
from railway_cli.constants import APP_NAME, CLI_VERSION
from railway_cli.display.console import error, print_update_banner
from railway_cli.display.logging_config import VALID_LEVELS, secret_redaction_filter, setup_logging
from railway_cli.errors import RailwayError

module_logger = logging.getLogger(__name__)


# ── command handlers ─────────────────────────────────────────────────────


def _cmd_status(configs: Configs, args: argparse.Namespace) -> None:
    project = asyncio.run(configs.get_linked_project())
    print(f"Project: {project.name or project.project}")
    print(f"Environment: {project.environment_name or project.environment}")
    print(f"Service: {project.service or 'None'}")
    print(f"Linked directory: {project.project_path}")


def _cmd_link(configs: Configs, args: argparse.Namespace) -> None:
    configs.link_project(args.project, args.name, args.environment, args.environment_name)
    configs.write()
    print(f"Linked {configs.get_current_directory()} to project {args.name or args.project}")


def _cmd_unlink(configs: Configs, args: argparse.Namespace) -> None:
    configs.unlink_project()
    configs.write()
    print("Project unlinked")


def _cmd_service(configs: Configs, args: argparse.Namespace) -> None:
    if args.service_action == "link":
        configs.link_service(args.service_id)
        configs.write()
        print(f"Linked service {args.service_id}")
    elif args.service_action == "unlink":
        configs.unlink_service()
        configs.write()
        print("Service unlinked")
    else:
        print("Usage: railway service {link SERVICE_ID | unlink}", file=sys.stderr)
        sys.exit(1)


def _cmd_logout(configs: Configs, args: argparse.Namespace) -> None:
    configs.root_config.user.token = None
    configs.write()
    print("Logged out")


def _cmd_check_update(configs: Configs, args: argparse.Namespace) -> None:
    if not args.force and not sys.stdout.isatty():
        print("Update check skipped: stdout is not a terminal (use --force to check anyway)")
        return
    latest = asyncio.run(configs.check_update(force=args.force))
    if latest is None:
        print(f"{APP_NAME} v{CLI_VERSION} is up to date")
    else:
        print_update_banner(latest)


def _cmd_config_path(configs: Configs, args: argparse.Namespace) -> None:
    print(configs.root_config_path)


def _maybe_notify_update(configs: Configs) -> None:
    """Best-effort throttled update notice after a command."""
    if configs.env_is_ci():
        return
    try:
        latest = asyncio.run(configs.check_update())
    except Exception as exc:
        module_logger.debug("Update check failed: %s", exc)
        return
    if latest is not None:
        print_update_banner(latest)


# ── CLI parser construction ──────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with one subcommand per handler."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_NAME} v{CLI_VERSION}",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="warning",
        choices=[lvl.lower() for lvl in VALID_LEVELS],
        help="Set stderr logging level (default: warning)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        metavar="PATH",
        help="Also write debug logs to PATH",
    )

    subparsers = parser.add_subparsers(dest="command")

    sp_status = subparsers.add_parser("status", help="Show the linked project for this directory")
    sp_status.set_defaults(func=_cmd_status)

    sp_link = subparsers.add_parser("link", help="Link this directory to a project")
    sp_link.add_argument("--project", "-p", required=True, help="Project id")
    sp_link.add_argument("--environment", "-e", required=True, help="Environment id")
    sp_link.add_argument("--name", default=None, help="Project name")
    sp_link.add_argument("--environment-name", default=None, help="Environment name")
    sp_link.set_defaults(func=_cmd_link)

    sp_unlink = subparsers.add_parser("unlink", help="Unlink the closest linked project")
    sp_unlink.set_defaults(func=_cmd_unlink)

    sp_service = subparsers.add_parser("service", help="Link or unlink a service")
    service_sub = sp_service.add_subparsers(dest="service_action")
    sp_service_link = service_sub.add_parser("link", help="Link a service")
    sp_service_link.add_argument("service_id", help="Service id")
    service_sub.add_parser("unlink", help="Unlink the service")
    sp_service.set_defaults(func=_cmd_service)

    sp_logout = subparsers.add_parser("logout", help="Remove the stored token")
    sp_logout.set_defaults(func=_cmd_logout)

    sp_update = subparsers.add_parser("check-update", help="Check for a newer release")
    sp_update.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Check even if already checked today or not on a terminal",
    )
    sp_update.set_defaults(func=_cmd_check_update)

    sp_path = subparsers.add_parser("config-path", help="Print the config file path")
    sp_path.set_defaults(func=_cmd_config_path)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Program entry point: parse arguments and dispatch to subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_level, args.log_file)

    try:
        configs = Configs()
        secret_redaction_filter.register(configs.get_railway_auth_token())
        secret_redaction_filter.register(configs.get_railway_token())
        args.func(configs, args)
    except (RailwayError, httpx.HTTPError) as exc:
        module_logger.debug("Command '%s' failed", args.command, exc_info=True)
        error(str(exc))
        sys.exit(1)

    if args.command != "check-update":
        _maybe_notify_update(configs)
