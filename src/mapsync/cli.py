"""mapsync command line.

Usage:
    mapsync push ALL
    mapsync pull contact_mapping --format json
    mapsync list-mappings --direction push
    mapsync describe-object Contact
    mapsync -n push account_mapping

Selectors are a mapping name or ALL (any case). With interaction enabled,
a missing or unusable selector opens a prompt; with --no-interaction it
goes straight to the resolver and any problem is reported on stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from enum import IntEnum
from typing import TextIO

import structlog
from pydantic import ValidationError

from src.mapsync.commands.dispatch import SyncDispatcher, SyncHandler, log_only_handler
from src.mapsync.commands.interact import MappedObjectCatalog, MappingInteraction
from src.mapsync.commands.output import render_dispatch_result, render_mappings
from src.mapsync.commands.prompter import ConsolePrompter, InteractivePrompter
from src.mapsync.config import OutputFormat, get_settings
from src.mapsync.core.logging import configure_structlog
from src.mapsync.mappings.exceptions import MapSyncError, UserAbortError
from src.mapsync.mappings.resolver import MappingResolver
from src.mapsync.mappings.schemas import SyncDirection
from src.mapsync.mappings.storage import JsonFileMappingStore, MappingStore

logger = structlog.get_logger(__name__)


class ExitCode(IntEnum):
    OK = 0
    ERROR = 1
    ABORTED = 3


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="mapsync",
        description="Resolve CRM sync mappings and dispatch push/pull runs",
    )
    parser.add_argument(
        "--mappings-file",
        default=settings.MAPPINGS_FILE,
        help=f"JSON file of mapping definitions (default: {settings.MAPPINGS_FILE})",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=settings.OUTPUT_FORMAT.value,
        help="Output format for results",
    )
    parser.add_argument(
        "-n",
        "--no-interaction",
        dest="interactive",
        action="store_false",
        default=settings.INTERACTIVE,
        help="Never prompt; fail on a missing or invalid selector",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    for verb, help_text in (
        ("push", "Push local records to the remote CRM"),
        ("pull", "Pull remote CRM records into the local store"),
    ):
        sub = subparsers.add_parser(verb, help=help_text)
        sub.add_argument("selector", nargs="?", default=None, help="Mapping name or ALL")

    list_parser = subparsers.add_parser("list-mappings", help="List mapping definitions")
    list_parser.add_argument(
        "--direction",
        choices=[SyncDirection.PUSH.value, SyncDirection.PULL.value],
        default=None,
        help="Only mappings that support this direction",
    )

    describe_parser = subparsers.add_parser(
        "describe-object", help="Show the mappings that target a remote object type"
    )
    describe_parser.add_argument("object", nargs="?", default=None, help="Remote object type")

    return parser


def _run_sync(
    args: argparse.Namespace,
    store: MappingStore,
    prompter: InteractivePrompter,
    handler: SyncHandler,
    stdout: TextIO,
) -> ExitCode:
    direction = SyncDirection(args.command)
    selector = args.selector

    if args.interactive:
        interaction = MappingInteraction(store, prompter)
        selector = interaction.interact_mapping(
            selector,
            message=f"Choose a mapping to {direction.value}",
            all_option=f"All {direction.value} mappings",
            direction=direction,
        )
    elif not selector:
        raise MapSyncError(f"A mapping name or ALL is required to {direction.value}.")

    dispatcher = SyncDispatcher(MappingResolver(store), handler=handler)
    result = dispatcher.dispatch(selector, direction)
    print(render_dispatch_result(result, args.output_format), file=stdout)
    return ExitCode.OK if result.ok else ExitCode.ERROR


def _run_list(args: argparse.Namespace, store: MappingStore, stdout: TextIO) -> ExitCode:
    if args.direction == SyncDirection.PUSH.value:
        mappings = store.load_push_mappings()
    elif args.direction == SyncDirection.PULL.value:
        mappings = store.load_pull_mappings()
    else:
        mappings = store.load_multiple()
    print(render_mappings([m for m in mappings if m is not None], args.output_format), file=stdout)
    return ExitCode.OK


def _run_describe(
    args: argparse.Namespace,
    store: MappingStore,
    prompter: InteractivePrompter,
    stdout: TextIO,
) -> ExitCode:
    catalog = MappedObjectCatalog(store)
    object_name = args.object
    if args.interactive:
        object_name = MappingInteraction(store, prompter).interact_object(object_name, catalog)
    elif not object_name:
        raise MapSyncError("A remote object type is required.")

    names = catalog.objects().get(object_name)
    if not names:
        raise MapSyncError(f"No mappings target remote object {object_name}.")
    mappings = [store.load(name) for name in names]
    print(render_mappings([m for m in mappings if m is not None], args.output_format), file=stdout)
    return ExitCode.OK


def main(
    argv: Sequence[str] | None = None,
    *,
    store: MappingStore | None = None,
    prompter: InteractivePrompter | None = None,
    handler: SyncHandler = log_only_handler,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the command line and return its exit code.

    Keyword arguments let callers inject collaborators; by default the
    store is read from --mappings-file and prompts go to the console.
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        parser = build_parser()
    except ValidationError as exc:
        print(f"Error: invalid settings: {exc}", file=stderr)
        return ExitCode.ERROR
    args = parser.parse_args(argv)
    configure_structlog(args.log_level)

    try:
        if store is None:
            store = JsonFileMappingStore(args.mappings_file)
        prompter = prompter or ConsolePrompter(stdout=stderr)

        if args.command in (SyncDirection.PUSH.value, SyncDirection.PULL.value):
            return _run_sync(args, store, prompter, handler, stdout)
        if args.command == "list-mappings":
            return _run_list(args, store, stdout)
        return _run_describe(args, store, prompter, stdout)
    except UserAbortError as exc:
        print(str(exc), file=stderr)
        return ExitCode.ABORTED
    except MapSyncError as exc:
        logger.debug("cli.command_failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
