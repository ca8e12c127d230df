"""Tests for token counting functionality."""

import math

import pytest
import tiktoken

from count_tokens_cli.cli import InvocationOptions
from count_tokens_cli.counting import (
    ChunkInfo,
    CostEstimate,
    TokenCounter,
    TokenReport,
    count_tokens,
    split_chunks,
)
from count_tokens_cli.input import TextSource
from count_tokens_cli.tokenizer import Tokenizer

SAMPLE_TEXT = (
    "Tokenizers split text into sub-word units. "
    "This sentence exists so the counter has something to chew on."
)


class TestSplitChunks:
    """Test cases for the chunk breakdown."""

    def test_even_split(self):
        chunks = split_chunks(100, 25)

        assert len(chunks) == 4
        assert [(c.start_token, c.end_token) for c in chunks] == [
            (0, 25),
            (25, 50),
            (50, 75),
            (75, 100),
        ]
        assert all(c.percentage_of_total == 25.0 for c in chunks)

    def test_last_chunk_truncated(self):
        chunks = split_chunks(35, 10)

        assert len(chunks) == 4
        assert chunks[-1] == ChunkInfo(
            index=3, start_token=30, end_token=35, percentage_of_total=14.3
        )
        assert chunks[0].percentage_of_total == 28.6

    def test_chunk_larger_than_count(self):
        chunks = split_chunks(7, 1000)

        assert chunks == [
            ChunkInfo(index=0, start_token=0, end_token=7, percentage_of_total=100.0)
        ]

    def test_zero_tokens(self):
        """Test that an empty token sequence has no chunks."""
        assert split_chunks(0, 10) == []

    @pytest.mark.parametrize(
        "count,size", [(1, 1), (10, 3), (99, 10), (1000, 7), (12345, 1000)]
    )
    def test_windows_cover_range(self, count, size):
        """Test that windows are contiguous, ordered and cover [0, count)."""
        chunks = split_chunks(count, size)

        assert len(chunks) == math.ceil(count / size)
        assert chunks[0].start_token == 0
        assert chunks[-1].end_token == count
        for i, chunk in enumerate(chunks):
            assert chunk.index == i
            assert chunk.end_token - chunk.start_token <= size
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.end_token == nxt.start_token

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            split_chunks(10, 0)


class TestTokenReport:
    """Test cases for TokenReport derived values."""

    def test_chars_per_token(self):
        report = TokenReport(
            source_label="f", model_or_encoding="gpt-4", count=4, char_count=10
        )
        assert report.chars_per_token == 2.5

    def test_chars_per_token_zero_count(self):
        """Test that zero tokens yields an undefined ratio, not a crash."""
        report = TokenReport(
            source_label="f", model_or_encoding="gpt-4", count=0, char_count=0
        )
        assert report.chars_per_token is None


class TestTokenCounter:
    """Test cases for TokenCounter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.counter = TokenCounter()
        self.source = TextSource(content=SAMPLE_TEXT, label="/tmp/sample.txt")

    def _tokenizer(self, name="cl100k_base"):
        return Tokenizer(tiktoken.get_encoding(name))

    def test_count_plain_text(self):
        """Test counting tokens for plain text with the default model."""
        options = InvocationOptions(source_path=None)

        with self._tokenizer() as tokenizer:
            report = self.counter.count_tokens(self.source, tokenizer, options)

        expected = len(tiktoken.get_encoding("cl100k_base").encode(SAMPLE_TEXT))
        assert report.count == expected
        assert report.source_label == "/tmp/sample.txt"
        assert report.model_or_encoding == "gpt-4"
        assert report.cost_estimate is None
        assert report.chunks is None

    def test_count_empty_text(self):
        """Test counting tokens for empty text."""
        source = TextSource(content="", label="empty")
        options = InvocationOptions(source_path=None, show_details=True, chunk_size=5)

        with self._tokenizer() as tokenizer:
            report = self.counter.count_tokens(source, tokenizer, options)

        assert report.count == 0
        assert report.chars_per_token is None
        assert report.chunks == []

    def test_details(self):
        """Test character count, ratio and cost in detail mode."""
        options = InvocationOptions(source_path=None, show_details=True)

        with self._tokenizer() as tokenizer:
            report = self.counter.count_tokens(self.source, tokenizer, options)

        assert report.char_count == len(SAMPLE_TEXT)
        assert round(report.chars_per_token, 2) == round(
            len(SAMPLE_TEXT) / report.count, 2
        )
        assert report.cost_estimate.input_cost == pytest.approx(
            report.count / 1000 * 0.03
        )
        assert report.cost_estimate.output_cost == pytest.approx(
            report.count / 1000 * 0.06
        )

    def test_encoding_label(self):
        """Test that the encoding name is reported when it overrides the model."""
        options = InvocationOptions(source_path=None, encoding_name="o200k_base")

        with self._tokenizer("o200k_base") as tokenizer:
            report = self.counter.count_tokens(self.source, tokenizer, options)

        assert report.model_or_encoding == "o200k_base"

    def test_chunks(self):
        options = InvocationOptions(source_path=None, chunk_size=5)

        with self._tokenizer() as tokenizer:
            report = self.counter.count_tokens(self.source, tokenizer, options)

        assert len(report.chunks) == math.ceil(report.count / 5)
        assert report.chunks[-1].end_token == report.count

    def test_clipboard_source_flag(self):
        source = TextSource(content="hi", label="Clipboard", is_clipboard=True)
        options = InvocationOptions(source_path=None, use_clipboard=True)

        with self._tokenizer() as tokenizer:
            report = self.counter.count_tokens(source, tokenizer, options)

        assert report.is_clipboard is True
        assert report.source_label == "Clipboard"


class TestEstimateCost:
    """Test cases for cost estimation."""

    def setup_method(self):
        self.counter = TokenCounter()

    def test_known_model(self):
        estimate = self.counter.estimate_cost(2000, "gpt-4o")
        assert isinstance(estimate, CostEstimate)
        assert estimate.input_cost == pytest.approx(0.01)
        assert estimate.output_cost == pytest.approx(0.03)

    def test_unknown_model(self):
        """Test that unpriced models produce no estimate rather than an error."""
        assert self.counter.estimate_cost(2000, "text-embedding-ada-002") is None


class TestCountTokensFunction:
    """Test the convenience function count_tokens."""

    def test_count_tokens_function(self):
        source = TextSource(content="Hello, world!", label="x")
        with Tokenizer(tiktoken.get_encoding("cl100k_base")) as tokenizer:
            report = count_tokens(source, tokenizer, InvocationOptions(source_path=None))

        assert report.count == len(
            tiktoken.get_encoding("cl100k_base").encode("Hello, world!")
        )
