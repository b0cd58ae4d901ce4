#!/usr/bin/env python3
"""config-picker command line.

Usage:
    config-picker [--root DIR] [-v] create-type TYPE
    config-picker [--root DIR] [-v] add-path TYPE TEMPLATE [TEMPLATE ...]
    config-picker [--root DIR] [-v] store TYPE LABEL
    config-picker [--root DIR] [-v] load TYPE LABEL
    config-picker [--root DIR] [-v] list [TYPE]

Environment variables:
    CONFIG_PICKER_ROOT          Storage root (default: ~/.config-picker)
    CONFIG_PICKER_LOG_LEVEL     Console log level (default: WARNING)
    CONFIG_PICKER_LOG_FILE      Optional log file
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .settings import PickerSettings, SettingsError, load_variables
from .storage import ConfigStorage, StorageError
from .templating import BaseDirsLookup, ChainedLookup, MappingLookup, TemplateError, VariableResolver
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="config-picker",
        description="Store and restore labeled snapshots of configuration files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Declare a config type and the files it covers
    config-picker create-type vim
    config-picker add-path vim '{{HOME}}/.vimrc'

    # Snapshot the current files, then bring them back later
    config-picker store vim work
    config-picker load vim work
""",
    )
    parser.add_argument(
        "--root",
        type=Path,
        help="Storage root (overrides CONFIG_PICKER_ROOT)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-type", help="Create a new config type")
    create.add_argument("config_type")

    add_path = subparsers.add_parser("add-path", help="Add path templates to a config type")
    add_path.add_argument("config_type")
    add_path.add_argument("templates", nargs="+")

    store = subparsers.add_parser("store", help="Snapshot the live files under a label")
    store.add_argument("config_type")
    store.add_argument("label")

    load = subparsers.add_parser("load", help="Restore the files of a label")
    load.add_argument("config_type")
    load.add_argument("label")

    list_ = subparsers.add_parser("list", help="List config types, or labels of one type")
    list_.add_argument("config_type", nargs="?")

    return parser


def build_storage(settings: PickerSettings) -> ConfigStorage:
    """Wire the resolver (settings variables first, then base dirs) and storage."""
    lookup = ChainedLookup(MappingLookup(settings.variables), BaseDirsLookup())
    return ConfigStorage(VariableResolver(lookup), settings.root_dir)


def run_command(storage: ConfigStorage, args: argparse.Namespace) -> int:
    if args.command == "create-type":
        type_storage = storage.create_config_type(args.config_type)
        print(
            f'Config type created, config type = "{args.config_type}", '
            f'descriptor file = "{type_storage.descriptor_path}"'
        )
    elif args.command == "add-path":
        type_storage = storage.get_config_type_storage(args.config_type)
        type_storage.add_paths(*args.templates)
    elif args.command == "store":
        storage.get_config_type_storage(args.config_type).store(args.label)
    elif args.command == "load":
        storage.get_config_type_storage(args.config_type).load(args.label)
    elif args.command == "list":
        if args.config_type:
            names = storage.get_config_type_storage(args.config_type).iter_labels()
        else:
            names = storage.iter_config_types()
        for name in sorted(names):
            print(name)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = PickerSettings.from_env()
    if args.root is not None:
        settings = replace(settings, root_dir=args.root.expanduser())
    if args.verbose:
        settings = replace(settings, log_level=logging.DEBUG)

    setup_logging(settings.log_level, settings.log_file)
    logger.debug(f"Storage root: {settings.root_dir}")

    try:
        settings = replace(settings, variables=load_variables(settings.settings_file))
        storage = build_storage(settings)
        return run_command(storage, args)
    except (StorageError, TemplateError, SettingsError) as e:
        message = f"error: {e}"
        if e.__cause__ is not None:
            message += f"\n  caused by: {e.__cause__}"
        print(message, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
