"""Input handling for the token counter CLI."""

import logging
from dataclasses import dataclass
from pathlib import Path

import pyperclip

from .cli import InvocationOptions
from .errors import EmptyInputError, MissingArgumentError, SourceFileNotFoundError

logger = logging.getLogger(__name__)

CLIPBOARD_LABEL = "Clipboard"


@dataclass(frozen=True)
class TextSource:
    """Text content with a label describing where it came from."""

    content: str
    label: str  # absolute path or "Clipboard"
    is_clipboard: bool = False


class InputHandler:
    """Handles reading input from a file or the clipboard."""

    def read_input(self, options: InvocationOptions) -> TextSource:
        """Read input based on configuration.

        Args:
            options: Invocation options specifying the input source

        Returns:
            TextSource containing content and its label

        Raises:
            MissingArgumentError: If no file was given and clipboard is off
            SourceFileNotFoundError: If the file doesn't exist
            EmptyInputError: If the clipboard is empty or unavailable
            PermissionError: If file cannot be read
            UnicodeDecodeError: If file cannot be decoded as UTF-8
        """
        if options.use_clipboard:
            if options.source_path is not None:
                logger.debug(
                    "Ignoring file argument %s in favour of --clipboard",
                    options.source_path,
                )
            return self._read_clipboard()
        if options.source_path is None:
            raise MissingArgumentError()
        return self._read_text_file(options.source_path)

    def _read_clipboard(self) -> TextSource:
        """Read text content from the system clipboard.

        Raises:
            EmptyInputError: If the clipboard is empty or cannot be accessed
        """
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise EmptyInputError(str(e)) from e

        if not content:
            raise EmptyInputError()

        logger.debug("Read %d characters from clipboard", len(content))
        return TextSource(content=content, label=CLIPBOARD_LABEL, is_clipboard=True)

    def _read_text_file(self, file_path: Path) -> TextSource:
        """Read text content from a file.

        Args:
            file_path: Path to the text file, relative or absolute

        Returns:
            TextSource labelled with the absolute path

        Raises:
            SourceFileNotFoundError: If file doesn't exist
            PermissionError: If file cannot be read
            UnicodeDecodeError: If file cannot be decoded as UTF-8
        """
        resolved = file_path.resolve()
        if not resolved.exists():
            raise SourceFileNotFoundError(str(resolved))

        try:
            content = resolved.read_text(encoding="utf-8")
        except PermissionError:
            raise PermissionError(f"Permission denied reading file: {resolved}")
        except UnicodeDecodeError as e:
            raise UnicodeDecodeError(
                e.encoding,
                e.object,
                e.start,
                e.end,
                f"Failed to decode file {resolved} as UTF-8: {e.reason}",
            )

        logger.debug("Read %d characters from %s", len(content), resolved)
        return TextSource(content=content, label=str(resolved))


def read_input(options: InvocationOptions) -> TextSource:
    """Read input based on configuration.

    This is a convenience function that creates an InputHandler instance
    and calls the read_input method.
    """
    handler = InputHandler()
    return handler.read_input(options)
