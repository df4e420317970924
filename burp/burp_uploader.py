#!/usr/bin/env python3
"""
burp - Command Line Interface

Upload source packages to the AUR, optionally assigning them a category.
"""

import argparse
from typing import List, Optional

from . import __version__
from .commands import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    handle_list_categories_command,
    handle_upload_command,
)
from .config import load_config
from .exceptions import ConfigError
from .logging_utils import setup_logging, get_logger
from .services import CategoryService
from .utils import print_error

# Get logger for this module
logger = get_logger(__name__)

CATEGORY_HELP = "help"


def _create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="burp",
        usage="burp [options] targets...",
        description="Upload packages to the AUR.",
        epilog="burp also honors a config file. See burp(1) for more information.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("files", nargs="*", metavar="targets", help="Package archives to upload")
    parser.add_argument("-u", "--user", dest="username", help="AUR login username.")
    parser.add_argument("-p", "--password", help="AUR login password.")
    parser.add_argument(
        "-c",
        "--category",
        metavar="CAT",
        help="Assign the uploaded package with category CAT. This will default to "
        "the current category for pre-existing packages and 'None' for new packages. "
        "-c help will give a list of valid categories.",
    )
    parser.add_argument(
        "-C",
        "--cookies",
        metavar="FILE",
        dest="cookie_path",
        help="Use FILE to store cookies rather than the default temporary file. "
        "Useful with the -k option.",
    )
    parser.add_argument(
        "-k",
        "--keep-cookies",
        action="store_true",
        default=None,
        dest="persist",
        help="Cookies will be persistent and reused for logins. If you specify this "
        "option, you must also provide a path to a cookie file.",
    )
    # Left out of --help on purpose.
    parser.add_argument("--domain", help=argparse.SUPPRESS)
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Do not show upload progress bars."
    )
    parser.add_argument("--version", action="version", version=f"burp {__version__}")

    return parser


def _resolve_category(category: Optional[str]) -> Optional[str]:
    """
    Translate a category name from the command line to its id.

    Returns:
        The id, or None if the name is not valid (an error has been printed)
    """
    category_id = CategoryService.resolve(category)
    if category_id is None:
        print_error(f"invalid category {category}")
        CategoryService().list_categories()
    return category_id


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to handle command line arguments and route to appropriate handlers."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.category == CATEGORY_HELP:
        return handle_list_categories_command()

    overrides = {
        "username": args.username,
        "password": args.password,
        "cookie_path": args.cookie_path,
        "persist": args.persist,
        "domain": args.domain,
        "verbose": args.verbose,
        "quiet": args.quiet,
    }
    if args.category:
        category_id = _resolve_category(args.category)
        if category_id is None:
            return EXIT_FAILURE
        overrides["category"] = category_id

    try:
        config = load_config(overrides=overrides)
    except ConfigError as e:
        print_error(e.message)
        return EXIT_FAILURE

    if config.log_folder:
        setup_logging(log_folder=config.log_folder, verbose=config.verbose)

    if config.persist and not config.cookie_path:
        print_error("--keep-cookies requires a cookie file (-C FILE or Cookies in the config file)")
        return EXIT_FAILURE

    if not args.files:
        parser.print_help()
        return EXIT_SUCCESS

    return handle_upload_command(config, args.files)


if __name__ == "__main__":
    raise SystemExit(main())
