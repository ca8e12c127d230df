"""CLI argument parsing and configuration for token counter."""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, NoReturn, Optional

from .errors import InvalidChunkSizeError
from .models import DEFAULT_MODEL

VERSION = "1.0.0"


@dataclass(frozen=True)
class InvocationOptions:
    """Configuration parsed from CLI arguments."""

    source_path: Optional[Path]
    use_clipboard: bool = False
    model: str = DEFAULT_MODEL
    encoding_name: Optional[str] = None
    show_details: bool = False
    chunk_size: Optional[int] = None
    json_output: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.chunk_size is not None and (
            isinstance(self.chunk_size, bool)
            or not isinstance(self.chunk_size, int)
            or self.chunk_size <= 0
        ):
            raise InvalidChunkSizeError(self.chunk_size)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def parse_chunk_size(value: Optional[str]) -> Optional[int]:
    """Convert a --chunks value into a positive integer.

    Raises:
        InvalidChunkSizeError: If the value is not a positive integer
    """
    if value is None:
        return None
    try:
        size = int(value.strip())
    except ValueError:
        raise InvalidChunkSizeError(value) from None
    if size <= 0:
        raise InvalidChunkSizeError(value)
    return size


class CLIArgumentParser:
    """Handles CLI argument parsing and validation."""

    def __init__(self) -> None:
        """Initialize the argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create and configure the argument parser."""
        parser = _ArgumentParser(
            prog="count-tokens",
            description="Count the number of tokens in a file using tiktoken",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  count-tokens prompt.txt
  count-tokens prompt.txt --model gpt-4o --details
  count-tokens prompt.txt --encoding o200k_base --chunks 1000
  count-tokens --clipboard --json
            """.strip(),
        )

        parser.add_argument(
            "file",
            nargs="?",
            metavar="file",
            help="Path to the file to analyze (required unless --clipboard)",
        )
        parser.add_argument(
            "--version", action="version", version=f"%(prog)s {VERSION}"
        )

        # Tokenizer selection
        parser.add_argument(
            "-m",
            "--model",
            default=DEFAULT_MODEL,
            metavar="MODEL",
            help=f"OpenAI model to use for encoding (default: {DEFAULT_MODEL})",
        )
        parser.add_argument(
            "-e",
            "--encoding",
            metavar="ENCODING",
            help="Specific encoding to use (overrides model)",
        )

        # Report options
        parser.add_argument(
            "-d",
            "--details",
            action="store_true",
            help="Show detailed token information",
        )
        # Validated after parsing so a bad value raises InvalidChunkSizeError
        parser.add_argument(
            "-c",
            "--chunks",
            metavar="SIZE",
            help="Split output into chunks of specified token size",
        )
        parser.add_argument(
            "--clipboard",
            action="store_true",
            help="Read text from the system clipboard instead of a file",
        )
        parser.add_argument(
            "--json", action="store_true", help="Output results in JSON format"
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Log debug information to stderr",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> InvocationOptions:
        """Parse command line arguments into InvocationOptions.

        Args:
            args: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Parsed and validated configuration

        Raises:
            SystemExit: On --help, --version or argument syntax errors
            InvalidChunkSizeError: If --chunks is not a positive integer
        """
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)
        return self._build_config(parsed_args)

    def _build_config(self, args: argparse.Namespace) -> InvocationOptions:
        """Build InvocationOptions from parsed arguments."""
        return InvocationOptions(
            source_path=Path(args.file) if args.file else None,
            use_clipboard=args.clipboard,
            model=args.model,
            encoding_name=args.encoding,
            show_details=args.details,
            chunk_size=parse_chunk_size(args.chunks),
            json_output=args.json,
            verbose=args.verbose,
        )


def parse_cli_args(args: Optional[List[str]] = None) -> InvocationOptions:
    """Parse CLI arguments and return configuration.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Parsed and validated configuration

    Raises:
        SystemExit: On --help, --version or argument syntax errors
        InvalidChunkSizeError: If --chunks is not a positive integer
    """
    parser = CLIArgumentParser()
    return parser.parse_args(args)
