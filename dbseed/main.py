"""
Main entry point for dbseed

Usage:
    python -m dbseed [--source-url URL] [--dest-url URL] [--config PATH] SELECTION...

Example:
    python -m dbseed org 123 / deduction latest 1000
"""

import argparse
import os
import sys
from typing import Callable, List, Optional, Sequence

from dotenv import dotenv_values
from loguru import logger

from .config import DATABASE_URL_KEY, SOURCE_ENV_FILES, DEST_ENV_FILES
from .logging_utils import configure_logging
from .parser import ParseError
from .repl import REPL, format_selection
from .sanitize import SanitizeConfig, default_config_path, read as read_config
from .selection import Selection, parse_selections


def _lookup_env_files(paths: Sequence[str]) -> Optional[str]:
    # The first env file that exists decides, even when it lacks the key
    for path in paths:
        if os.path.isfile(path):
            logger.debug("reading {} from {}", DATABASE_URL_KEY, path)
            return dotenv_values(path).get(DATABASE_URL_KEY)
    return None


def get_source_url(arg: Optional[str]) -> Optional[str]:
    """Source database URL from the flag, else .env.production"""
    if arg is not None:
        return arg
    return _lookup_env_files(SOURCE_ENV_FILES)


def get_dest_url(arg: Optional[str]) -> Optional[str]:
    """Destination database URL from the flag, else .env"""
    if arg is not None:
        return arg
    return _lookup_env_files(DEST_ENV_FILES)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dbseed',
        description='Seed a database with selected rows copied from another',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Organization 123, then its 1000 latest deductions
  dbseed org 123 / deduction latest 1000

  # Explicit connection URLs
  dbseed -s postgres://prod/app -d postgres://localhost/app org 123

  # Interactive mode
  dbseed -i
        """
    )

    parser.add_argument(
        '--source-url', '-s',
        help='Source database URL (default: DATABASE_URL from .env.production)'
    )

    parser.add_argument(
        '--dest-url', '-d',
        help='Destination database URL (default: DATABASE_URL from .env)'
    )

    parser.add_argument(
        '--config', '-c',
        default=None,
        help='Sanitization config file (default: ~/.config/seed/config.toml)'
    )

    parser.add_argument(
        '--interactive', '-i',
        action='store_true',
        help='Read selections from an interactive prompt'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        'args',
        nargs='*',
        help='Selection, e.g. "org 123 / deduction latest 1000"'
    )

    return parser


def load_config(path: Optional[str]) -> SanitizeConfig:
    """Load the sanitization config, falling back to an empty one"""
    config = read_config(path or default_config_path())
    if config is None:
        logger.debug("using empty sanitize config")
        return SanitizeConfig()
    return config


def seed(selections: List[Selection], source_url: str, dest_url: str,
         write: Optional[Callable[[str], None]] = print) -> int:
    """Hand the ordered selections to the engine.

    Each selection is reported through write; pass None when the caller
    has already shown them.
    """
    logger.info("seeding {} tables", len(selections))
    logger.debug("source {}, destination {}", source_url, dest_url)
    if write is not None:
        for selection in selections:
            write(format_selection(selection))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = build_arg_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    source_url = get_source_url(args.source_url)
    if source_url is None:
        print("Error: No source url provided or found in .env.production", file=sys.stderr)
        return 1

    dest_url = get_dest_url(args.dest_url)
    if dest_url is None:
        print("Error: No dest url provided or found in .env", file=sys.stderr)
        return 1

    config = load_config(args.config)

    if args.interactive:
        selections = REPL(config).start()
        if not selections:
            return 0
        # The REPL has already echoed each selection
        return seed(selections, source_url, dest_url, write=None)

    if not args.args:
        print("Error: No tables selected for seeding", file=sys.stderr)
        return 1

    try:
        selections = parse_selections(args.args)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for selection in selections:
        selection.table = config.resolve_table(selection.table)

    return seed(selections, source_url, dest_url)


if __name__ == '__main__':
    sys.exit(main())
