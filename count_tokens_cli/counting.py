"""Token counting and derived statistics."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from .cli import InvocationOptions
from .input import TextSource
from .models import ModelRegistry
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkInfo:
    """A contiguous window of the token sequence."""

    index: int  # 0-based
    start_token: int
    end_token: int
    percentage_of_total: float  # rounded to 1 decimal


@dataclass(frozen=True)
class CostEstimate:
    """Estimated USD cost if the tokens were sent as input or output."""

    input_cost: float
    output_cost: float


@dataclass(frozen=True)
class TokenReport:
    """Read-only view over a counted token sequence."""

    source_label: str
    model_or_encoding: str
    count: int
    char_count: int
    show_details: bool = False
    cost_estimate: Optional[CostEstimate] = None
    chunks: Optional[List[ChunkInfo]] = None
    is_clipboard: bool = False

    @property
    def chars_per_token(self) -> Optional[float]:
        """Characters per token, or None when there are no tokens."""
        if self.count == 0:
            return None
        return self.char_count / self.count


def split_chunks(count: int, chunk_size: int) -> List[ChunkInfo]:
    """Partition the token range [0, count) into windows of chunk_size.

    The last window is truncated to the remaining tokens. Windows are
    returned in ascending order.

    Raises:
        ValueError: If chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    num_chunks = math.ceil(count / chunk_size)
    chunks = []
    for i in range(num_chunks):
        start = i * chunk_size
        end = min((i + 1) * chunk_size, count)
        chunks.append(
            ChunkInfo(
                index=i,
                start_token=start,
                end_token=end,
                percentage_of_total=round((end - start) / count * 100, 1),
            )
        )
    return chunks


class TokenCounter:
    """Runs a tokenizer over a source and builds the report."""

    def __init__(self, registry: Optional[ModelRegistry] = None) -> None:
        self.registry = registry or ModelRegistry()

    def count_tokens(
        self,
        source: TextSource,
        tokenizer: Tokenizer,
        options: InvocationOptions,
    ) -> TokenReport:
        """Encode the source text and derive statistics.

        Args:
            source: Text to count
            tokenizer: Tokenizer to encode with
            options: Invocation options selecting details and chunks

        Returns:
            TokenReport for the encoded text
        """
        tokens = tokenizer.encode(source.content)
        count = len(tokens)
        logger.debug(
            "Encoded %s into %d tokens with %s", source.label, count, tokenizer.name
        )

        cost_estimate = None
        if options.show_details:
            cost_estimate = self.estimate_cost(count, options.model)

        chunks = None
        if options.chunk_size is not None:
            chunks = split_chunks(count, options.chunk_size)

        return TokenReport(
            source_label=source.label,
            model_or_encoding=options.encoding_name or options.model,
            count=count,
            char_count=len(source.content),
            show_details=options.show_details,
            cost_estimate=cost_estimate,
            chunks=chunks,
            is_clipboard=source.is_clipboard,
        )

    def estimate_cost(self, count: int, model: str) -> Optional[CostEstimate]:
        """Estimate input and output cost for a token count.

        Returns:
            CostEstimate, or None if the model has no known price
        """
        pricing = self.registry.get_pricing(model)
        if pricing is None:
            logger.debug("No pricing for model %s", model)
            return None
        return CostEstimate(
            input_cost=count / 1000 * pricing.input,
            output_cost=count / 1000 * pricing.output,
        )


def count_tokens(
    source: TextSource, tokenizer: Tokenizer, options: InvocationOptions
) -> TokenReport:
    """Encode the source text and derive statistics.

    This is a convenience function that creates a TokenCounter instance
    and calls the count_tokens method.
    """
    counter = TokenCounter()
    return counter.count_tokens(source, tokenizer, options)
