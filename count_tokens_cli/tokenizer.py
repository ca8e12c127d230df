"""Tokenizer resolution and lifecycle."""

import logging
from typing import List, Optional

import tiktoken

from .cli import InvocationOptions
from .models import ModelRegistry

logger = logging.getLogger(__name__)


class Tokenizer:
    """Scoped handle around a tiktoken encoding.

    Use as a context manager; the handle is released on exit and cannot
    encode afterwards.
    """

    def __init__(self, encoding: tiktoken.Encoding) -> None:
        self._encoding: Optional[tiktoken.Encoding] = encoding
        self.name = encoding.name

    @property
    def closed(self) -> bool:
        return self._encoding is None

    def encode(self, text: str) -> List[int]:
        """Encode text into token IDs.

        Special-token markers in the text are encoded as ordinary text
        rather than rejected.
        """
        if self._encoding is None:
            raise RuntimeError(f"Tokenizer {self.name} has been released")
        return self._encoding.encode(text, disallowed_special=())

    def close(self) -> None:
        """Release the underlying encoding. Safe to call more than once."""
        if self._encoding is not None:
            logger.debug("Releasing tokenizer %s", self.name)
            self._encoding = None

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TokenizerResolver:
    """Resolves a Tokenizer from invocation options."""

    def __init__(self, registry: Optional[ModelRegistry] = None) -> None:
        self.registry = registry or ModelRegistry()

    def resolve(self, options: InvocationOptions) -> Tokenizer:
        """Build a tokenizer for the requested encoding or model.

        Args:
            options: Resolved invocation options

        Returns:
            Tokenizer ready for encoding

        Raises:
            InvalidEncodingError: If the encoding name is unknown
            InvalidModelError: If the model alias is unknown
        """
        encoding_name = self.registry.resolve_encoding_name(
            options.model, options.encoding_name
        )
        logger.debug("Loading tiktoken encoding %s", encoding_name)
        return Tokenizer(tiktoken.get_encoding(encoding_name))


def resolve_tokenizer(options: InvocationOptions) -> Tokenizer:
    """Resolve a tokenizer for the given options.

    This is a convenience function that creates a TokenizerResolver
    instance and calls the resolve method.
    """
    return TokenizerResolver().resolve(options)
