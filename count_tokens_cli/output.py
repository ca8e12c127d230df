"""Output formatting for token counter CLI."""

import json
import os
import sys
from typing import List, Optional, TextIO

from .counting import TokenReport
from .errors import TokenCounterError


class OutputFormatter:
    """Handles output formatting for both human-readable and JSON formats."""

    def __init__(self, stream: Optional[TextIO] = None):
        """Initialize the output formatter.

        Args:
            stream: Stream the output is destined for, used to decide
                whether colors are enabled (defaults to sys.stdout)
        """
        self._stream = stream if stream is not None else sys.stdout
        self._colors_enabled = self._should_enable_colors()

    def format_human_readable(self, report: TokenReport) -> str:
        """Generate line-oriented output.

        Lines appear in a fixed order: source, model/encoding, token count,
        then details and the chunk breakdown when requested.

        Args:
            report: Token report to format

        Returns:
            Human-readable report as string
        """
        lines = []

        source_key = "Source:" if report.is_clipboard else "File:"
        lines.append(f"{self._colorize(source_key, 'cyan')} {report.source_label}")
        lines.append(
            f"{self._colorize('Model/Encoding:', 'cyan')} {report.model_or_encoding}"
        )
        lines.append(
            f"{self._colorize('Token count:', 'green')} "
            f"{self._colorize(f'{report.count:,}', 'bold')}"
        )

        if report.show_details:
            lines.append(
                f"{self._colorize('Character count:', 'cyan')} {report.char_count:,}"
            )
            lines.append(
                f"{self._colorize('Chars per token:', 'cyan')} "
                f"{self.format_ratio(report.chars_per_token)}"
            )
            if report.cost_estimate is not None:
                cost = report.cost_estimate
                lines.append(
                    f"{self._colorize('Estimated cost:', 'cyan')} "
                    f"${cost.input_cost:.4f} (input) / ${cost.output_cost:.4f} (output)"
                )

        if report.chunks is not None:
            lines.append("")
            lines.append(self._colorize("Chunk breakdown:", "cyan"))
            num_chunks = len(report.chunks)
            for chunk in report.chunks:
                lines.append(
                    self._colorize(
                        f"  Chunk {chunk.index + 1}/{num_chunks}: "
                        f"{chunk.start_token}-{chunk.end_token} tokens "
                        f"({chunk.percentage_of_total:.1f}%)",
                        "gray",
                    )
                )

        return "\n".join(lines)

    def format_json(self, report: TokenReport) -> str:
        """Generate JSON object output.

        Args:
            report: Token report to format

        Returns:
            JSON string; optional sections appear only when requested
        """
        json_result = {
            "source": report.source_label,
            "model_or_encoding": report.model_or_encoding,
            "token_count": report.count,
        }

        if report.show_details:
            ratio = report.chars_per_token
            json_result["character_count"] = report.char_count
            json_result["chars_per_token"] = (
                round(ratio, 2) if ratio is not None else None
            )
            if report.cost_estimate is not None:
                json_result["estimated_cost"] = {
                    "input": round(report.cost_estimate.input_cost, 4),
                    "output": round(report.cost_estimate.output_cost, 4),
                }
            else:
                json_result["estimated_cost"] = None

        if report.chunks is not None:
            json_result["chunks"] = [
                {
                    "index": chunk.index,
                    "start": chunk.start_token,
                    "end": chunk.end_token,
                    "percentage": chunk.percentage_of_total,
                }
                for chunk in report.chunks
            ]

        return json.dumps(json_result, indent=2)

    def format_error(self, error: BaseException) -> List[str]:
        """Format an error as lines for the error stream.

        Args:
            error: Error to report; TokenCounterError hints get their own line

        Returns:
            Lines to print
        """
        if isinstance(error, TokenCounterError):
            lines = [self._colorize(f"Error: {error.message}", "red")]
            if error.hint:
                lines.append(self._colorize(error.hint, "yellow"))
            return lines
        return [f"{self._colorize('Error:', 'red')} {error}"]

    @staticmethod
    def format_ratio(ratio: Optional[float]) -> str:
        """Format chars-per-token with two decimals, or N/A if undefined."""
        if ratio is None:
            return "N/A"
        return f"{ratio:.2f}"

    def _should_enable_colors(self) -> bool:
        """Determine if colors should be enabled.

        Returns:
            True if colors should be enabled, False otherwise
        """
        # Check NO_COLOR environment variable
        if os.environ.get("NO_COLOR"):
            return False

        isatty = getattr(self._stream, "isatty", None)
        if isatty is None or not isatty():
            return False

        return True

    def _colorize(self, text: str, color: str) -> str:
        """Apply ANSI color codes to text if colors are enabled.

        Args:
            text: Text to colorize
            color: Color name ("red", "yellow", "cyan", "green", "gray", "bold")

        Returns:
            Colorized text or original text if colors disabled
        """
        if not self._colors_enabled:
            return text

        color_codes = {
            "red": "\033[31m",
            "green": "\033[32m",
            "yellow": "\033[33m",
            "cyan": "\033[36m",
            "gray": "\033[90m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        if color not in color_codes:
            return text

        return f"{color_codes[color]}{text}{color_codes['reset']}"


def format_human_readable(report: TokenReport) -> str:
    """Generate line-oriented output.

    This is a convenience function that creates an OutputFormatter instance
    and calls the format_human_readable method.

    Args:
        report: Token report to format

    Returns:
        Human-readable report as string
    """
    formatter = OutputFormatter()
    return formatter.format_human_readable(report)


def format_json(report: TokenReport) -> str:
    """Generate JSON object output.

    This is a convenience function that creates an OutputFormatter instance
    and calls the format_json method.

    Args:
        report: Token report to format

    Returns:
        JSON string
    """
    formatter = OutputFormatter()
    return formatter.format_json(report)
