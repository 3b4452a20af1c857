"""
Terminal entry point for the Power BI dataset refresher.

Loads secrets and the dataset registry, obtains a bearer token (reusing the
cached one while it is still valid) and triggers dataset refreshes for every
company or for a single one.

Example usages::

    # Interactive menu.
    python -m pbi_updater.main

    # Scheduled run refreshing every company without waiting for ENTER.
    python -m pbi_updater.main --all --no-pause
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, Dict, List

from pbi_updater.core.config import AppSettings, get_settings
from pbi_updater.core.errors import (
    ConfigurationError,
    GroupNotFoundError,
    TokenUnavailableError,
)
from pbi_updater.core.logging import configure_logging
from pbi_updater.core.secrets import load_credentials
from pbi_updater.dependencies import get_refresh_service, get_token_manager
from pbi_updater.models import TokenRecord
from pbi_updater.schemas import AllGroups, DispatchMode, RefreshResult, SingleGroup
from pbi_updater.services import load_resource_groups

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

BANNER = r"""
 ____                        ____ ___   _   _           _       _
|  _ \ _____      _____ _ __| __ )_ _| | | | |_ __   __| | __ _| |_ ___ _ __
| |_) / _ \ \ /\ / / _ \ '__|  _ \| |  | | | | '_ \ / _` |/ _` | __/ _ \ '__|
|  __/ (_) \ V  V /  __/ |  | |_) | |  | |_| | |_) | (_| | (_| | ||  __/ |
|_|   \___/ \_/\_/ \___|_|  |____/___|  \___/| .__/ \__,_|\__,_|\__\___|_|
                                             |_|
"""

MENU_ALL = "1"
MENU_ONE = "2"
MENU_SETTINGS = "3"
MENU_EXIT = "4"
MENU_OPTIONS: Dict[str, str] = {
    MENU_ALL: "All companies",
    MENU_ONE: "One company",
    MENU_SETTINGS: "Settings",
    MENU_EXIT: "Exit",
}

InputFn = Callable[[str], str]


class ExitRequested(Exception):
    """Raised when the user picks Exit; the session ends without pausing."""


def _print_group_header(group_key: int) -> None:
    print(f"Company: {group_key}")


def _print_result(result: RefreshResult) -> None:
    outcome = result.outcome
    status = f" ({outcome.status_code})" if outcome.status_code is not None else ""
    if outcome.success:
        print(f"\t- Request: Accepted{status}")
    else:
        print(f"\t- Request: Rejected{status}", file=sys.stderr)


def open_in_editor(path: Path) -> bool:
    """Open ``path`` with the platform's default handler."""
    try:
        if sys.platform.startswith("win"):
            os.startfile(path)  # type: ignore[attr-defined]
        elif sys.platform == "darwin":
            subprocess.run(["open", str(path)], check=True)
        else:
            subprocess.run(["xdg-open", str(path)], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.warning("Could not open %s: %s", path, exc)
        return False
    return True


def _prompt_menu(input_fn: InputFn) -> str:
    for number, label in MENU_OPTIONS.items():
        print(f"  {number}) {label}")
    return input_fn("Option: ").strip()


async def _dispatch(
    mode: DispatchMode, groups: Dict[int, List[str]], token: TokenRecord
) -> List[RefreshResult]:
    return await get_refresh_service().dispatch(
        mode,
        groups,
        token,
        on_group=_print_group_header,
        on_result=_print_result,
    )


async def _refresh_one_interactive(
    groups: Dict[int, List[str]], token: TokenRecord, input_fn: InputFn
) -> None:
    while True:
        raw = input_fn("Company ID: ").strip()
        try:
            key = int(raw)
        except ValueError:
            print(f"'{raw}' is not a valid company ID.", file=sys.stderr)
            continue
        try:
            await _dispatch(SingleGroup(key=key), groups, token)
        except GroupNotFoundError:
            print("Company not found!", file=sys.stderr)
            continue
        return


async def run(
    args: argparse.Namespace,
    settings: AppSettings,
    *,
    input_fn: InputFn = input,
) -> int:
    """Run one refresher session and return the process exit code."""
    paths = settings.paths
    try:
        credentials = load_credentials(paths.secrets_path)
        groups = load_resource_groups(paths.dataset_path)
    except ConfigurationError as exc:
        print(f"Failed to load configuration.\n{exc}", file=sys.stderr)
        return EXIT_FAILURE

    manager = get_token_manager()
    try:
        token = await manager.obtain_token(credentials)
    except TokenUnavailableError:
        print(
            "Failed to generate a new token.\nConsider checking the secrets file.",
            file=sys.stderr,
        )
        return EXIT_FAILURE
    if manager.acquired_fresh:
        print("New token generated!")

    if args.all:
        await _dispatch(AllGroups(), groups, token)
        return EXIT_OK
    if args.company is not None:
        try:
            await _dispatch(SingleGroup(key=args.company), groups, token)
        except GroupNotFoundError as exc:
            print(str(exc), file=sys.stderr)
            return EXIT_FAILURE
        return EXIT_OK

    choice = _prompt_menu(input_fn)
    if choice == MENU_ALL:
        await _dispatch(AllGroups(), groups, token)
    elif choice == MENU_ONE:
        await _refresh_one_interactive(groups, token, input_fn)
    elif choice == MENU_SETTINGS:
        if not open_in_editor(paths.dataset_path):
            print("Failed to open the dataset file for editing.")
        print("Restart the application to apply the changes.")
    elif choice == MENU_EXIT:
        print("Bye")
        raise ExitRequested()
    else:
        print("Unrecognized option.", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trigger Power BI dataset refreshes per company."
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--all",
        action="store_true",
        help="Refresh every company without showing the menu.",
    )
    target.add_argument(
        "--company",
        type=int,
        default=None,
        metavar="ID",
        help="Refresh a single company without showing the menu.",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Exit immediately instead of waiting for ENTER.",
    )
    return parser


def _pause(input_fn: InputFn) -> None:
    try:
        input_fn("\nPress ENTER to finish\n")
    except EOFError:
        pass


def main(argv: list[str] | None = None, *, input_fn: InputFn = input) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    print(BANNER)
    try:
        exit_code = asyncio.run(run(args, settings, input_fn=input_fn))
    except ExitRequested:
        return EXIT_OK
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if settings.pause_on_exit and not args.no_pause:
        _pause(input_fn)
    return exit_code


def cli() -> None:  # pragma: no cover - console script entry point
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - script entry point
    cli()
