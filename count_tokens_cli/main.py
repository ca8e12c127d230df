"""Main entry point for the token counter CLI."""

import logging
import sys
from typing import List, Optional

from .cli import parse_cli_args
from .counting import count_tokens
from .errors import TokenCounterError
from .input import read_input
from .output import OutputFormatter, format_human_readable, format_json
from .tokenizer import resolve_tokenizer

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "count_tokens_cli"
LOG_FORMAT ="%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send package log records to stderr, at DEBUG when verbose.

    Reconfigured on every call so an invocation never inherits the level
    or stream of an earlier one in the same process.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _report_error(error: BaseException) -> None:
    formatter = OutputFormatter(sys.stderr)
    for line in formatter.format_error(error):
        print(line, file=sys.stderr)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the token counter CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error)
    """
    if args is None:
        args = sys.argv[1:]

    try:
        options = parse_cli_args(args)
        configure_logging(options.verbose)
        logger.debug("Invocation options: %s", options)

        source = read_input(options)

        # Nothing is printed until encoding has succeeded
        with resolve_tokenizer(options) as tokenizer:
            report = count_tokens(source, tokenizer, options)
    except TokenCounterError as e:
        _report_error(e)
        return 1
    except Exception as e:
        logger.debug("Token counting failed", exc_info=True)
        _report_error(e)
        return 1

    if options.json_output:
        print(format_json(report))
    else:
        print(format_human_readable(report))
    return 0


def cli_entry_point() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry_point()
