"""
Command-line entry point for sizecmp.

Runs a single size_cmp query and prints the matching entry names, one per
line or as a JSON array. Arguments left out on the command line fall back to
the defaults in the configuration file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.parser import ConfigurationError, load_config
from .function import SizeCmpFunction
from .models.config import DEFAULT_LOG_FORMAT, LOG_LEVELS

__all__ = ["main"]

# Exit codes
EXIT_SUCCESS = 0
EXIT_QUERY_ERROR = 1
EXIT_CONFIG_ERROR = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="sizecmp",
        description="List files under a directory whose size compares to a given size",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sizecmp /var/log --size 10MB --operator ge
  sizecmp ~/Downloads --size 1GiB --operator gt --full-path
  sizecmp --config ./sizecmp.yaml --json
        """,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Directory to search recursively (default: from configuration)",
    )
    parser.add_argument(
        "--size", "-s",
        help="Size to compare against, e.g. 10MB or 2.5GiB (default: from configuration)",
    )
    parser.add_argument(
        "--operator", "-o",
        help="Comparison operator: eq, le, ge, gt or lt (default: from configuration)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Path to configuration file (default: discovered)",
        metavar="PATH",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override log level from configuration",
        metavar="LEVEL",
    )
    parser.add_argument(
        "--full-path",
        action="store_true",
        help="Print full paths instead of base names",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array",
    )

    return parser.parse_args(argv)


def configure_logging(level: str, fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure the root logger for command-line use."""
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one size_cmp query from the command line.

    Exit Codes:
        0: Query ran
        1: Query rejected (invalid path, size or operator)
        2: Configuration error

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)

    try:
        parse_result = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    config = parse_result.config
    configure_logging(args.log_level or config.logging.level, config.logging.format)

    logger = logging.getLogger(__name__)
    for warning in parse_result.warnings:
        logger.warning(f"Configuration warning: {warning}")

    function = SizeCmpFunction(default_path=config.defaults.path)
    result = function.query(
        path=args.path or config.defaults.path,
        size=args.size if args.size is not None else config.defaults.size,
        operator=args.operator if args.operator is not None else config.defaults.operator,
    )

    if not result.succeeded:
        return EXIT_QUERY_ERROR

    output = result.get_full_paths() if args.full_path else result.matches
    if args.json:
        print(json.dumps(output, indent=2))
    else:
        for line in output:
            print(line)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
