"""Encoding and model registry for the token counter CLI."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import tiktoken

from .errors import InvalidEncodingError, InvalidModelError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"

VALID_ENCODINGS: Tuple[str, ...] = (
    "gpt2",
    "cl100k_base",
    "o200k_base",
    "p50k_base",
    "p50k_edit",
    "r50k_base",
)

COMMON_MODELS: Tuple[str, ...] = (
    "gpt-4",
    "gpt-3.5-turbo",
    "text-davinci-003",
    "text-embedding-ada-002",
)


@dataclass(frozen=True)
class ModelPricing:
    """Price in USD per 1000 tokens."""

    input: float
    output: float


class ModelRegistry:
    """Registry of known encodings, model aliases and prices."""

    def __init__(self):
        """Initialize with hardcoded pricing definitions."""
        self._pricing: Dict[str, ModelPricing] = {
            "gpt-4": ModelPricing(input=0.03, output=0.06),
            "gpt-4-32k": ModelPricing(input=0.06, output=0.12),
            "gpt-3.5-turbo": ModelPricing(input=0.0005, output=0.0015),
            "gpt-4o": ModelPricing(input=0.005, output=0.015),
            "gpt-4o-mini": ModelPricing(input=0.00015, output=0.0006),
        }

    def resolve_encoding_name(
        self, model: str, encoding_name: Optional[str] = None
    ) -> str:
        """Pick the encoding to use for a model, or an explicit override.

        Args:
            model: Model alias such as "gpt-4"
            encoding_name: Explicit encoding; takes precedence over model
                when non-empty

        Returns:
            Canonical encoding name

        Raises:
            InvalidEncodingError: If encoding_name is not a known encoding
            InvalidModelError: If model has no known encoding
        """
        if encoding_name:
            if encoding_name not in VALID_ENCODINGS:
                raise InvalidEncodingError(encoding_name, VALID_ENCODINGS)
            return encoding_name

        try:
            resolved = tiktoken.encoding_name_for_model(model)
        except KeyError:
            raise InvalidModelError(model, COMMON_MODELS) from None

        logger.debug("Model %s maps to encoding %s", model, resolved)
        return resolved

    def get_pricing(self, model: str) -> Optional[ModelPricing]:
        """Get pricing for a model, or None if the model has no price."""
        return self._pricing.get(model)
