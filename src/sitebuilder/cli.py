"""Command line interface for the Blog Builder."""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import constants
from common.base.logging_config import configure_logging, get_logger
from common.config.site_config import find_root, load_config
from common.errors import BlogError
from common.result import BlogResult
from .sitetree import SiteTree, create_site

logger = get_logger(__name__)

def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the `blog` command."""
    parser = argparse.ArgumentParser(
        description='Build a static site from Blog Builder markup.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog='blog'
    )

    # Logging configuration
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Increase logging output (-v for info, -vv for debug)')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only log errors')
    parser.add_argument('--log-file',
                        help='Also write logs to this file (rotated at 1MB)')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    new_parser = subparsers.add_parser('new', help='Create a new site in a new directory')
    new_parser.add_argument('name', help='Name of the site and of its directory')

    subparsers.add_parser('build', help='Render every page of the current site to html/')
    subparsers.add_parser('check', help='Parse every page and report errors without writing')
    subparsers.add_parser('clean', help='Remove the html/ output directory')
    subparsers.add_parser('version', help='Print the version')
    subparsers.add_parser('help', help='Show this help message')

    parser.epilog = """
Examples:
  %(prog)s new my-site      # Create my-site/blog.toml and my-site/source/index.txt
  %(prog)s build            # Build the site containing the current directory
  %(prog)s -v check         # Validate every page, with progress logging
  %(prog)s clean            # Delete the generated html/ directory
    """ % {'prog': parser.prog}

    return parser

def log_level_for(verbose: int, quiet: bool) -> str:
    if quiet:
        return 'ERROR'
    if verbose >= 2:
        return 'DEBUG'
    if verbose == 1:
        return 'INFO'
    return 'WARNING'

def report_errors(result: BlogResult) -> int:
    """Print every error of a failed result and return the exit code."""
    for error in result.errors:
        print(f"error: {error}", file=sys.stderr)
    count = len(result.errors)
    print(f"{count} error{'s' if count != 1 else ''} found", file=sys.stderr)
    return 1

def _open_site() -> SiteTree:
    root = find_root()
    return SiteTree(root, load_config(root))

def cmd_new(args: argparse.Namespace) -> int:
    root = create_site(Path.cwd(), args.name)
    print(f"Created new site at {root}")
    return 0

def cmd_build(args: argparse.Namespace) -> int:
    result = _open_site().build()
    if not result.is_ok:
        return report_errors(result)
    print(f"Built {len(result.value)} file(s)")
    return 0

def cmd_check(args: argparse.Namespace) -> int:
    result = _open_site().check()
    if not result.is_ok:
        return report_errors(result)
    print(f"Checked {result.value} page(s), no errors found")
    return 0

def cmd_clean(args: argparse.Namespace) -> int:
    site = _open_site()
    if site.clean():
        print(f"Removed {site.output_dir}")
    return 0

def cmd_version(args: argparse.Namespace) -> int:
    print(f"blog {constants.VERSION}")
    return 0

COMMANDS: Dict[str, Callable[[argparse.Namespace], int]] = {
    'new': cmd_new,
    'build': cmd_build,
    'check': cmd_check,
    'clean': cmd_clean,
    'version': cmd_version,
}

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level=log_level_for(args.verbose, args.quiet), log_file=args.log_file)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args)
    except BlogError as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130

if __name__ == '__main__':
    sys.exit(main())
