"""Error types raised by the token counter CLI."""

from typing import Iterable, Optional


class TokenCounterError(Exception):
    """Base class for errors reported to the user with exit code 1."""

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class MissingArgumentError(TokenCounterError):
    """No file argument was given and --clipboard was not set."""

    def __init__(self) -> None:
        super().__init__(
            "No file specified",
            hint="Provide a file path or use --clipboard",
        )


class SourceFileNotFoundError(TokenCounterError, FileNotFoundError):
    """The resolved input path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f'File "{path}" does not exist')
        self.path = path


class EmptyInputError(TokenCounterError):
    """The clipboard was empty or could not be read."""

    def __init__(self, reason: Optional[str] = None) -> None:
        message = "Clipboard is empty"
        if reason:
            message = f"Clipboard is empty or unavailable: {reason}"
        super().__init__(message)


class InvalidEncodingError(TokenCounterError):
    """Unknown --encoding value."""

    def __init__(self, name: str, valid: Iterable[str]) -> None:
        super().__init__(
            f'Invalid encoding "{name}"',
            hint=f"Available encodings: {', '.join(valid)}",
        )
        self.name = name


class InvalidModelError(TokenCounterError):
    """Unknown --model value with no encoding override."""

    def __init__(self, model: str, examples: Iterable[str]) -> None:
        super().__init__(
            f'Invalid model "{model}"',
            hint=f"Common models: {', '.join(examples)}",
        )
        self.model = model


class InvalidChunkSizeError(TokenCounterError, ValueError):
    """--chunks was not a positive integer."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f'Invalid chunk size "{value}": must be a positive integer'
        )
        self.value = value
