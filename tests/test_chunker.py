"""Tests for the sliding window chunker."""

import math

import pytest

from lesson_rag.config import ChunkingConfig
from lesson_rag.errors import ConfigurationError
from lesson_rag.ingestion.chunker import TextChunker, split_text

FOX = "The quick brown fox jumps over the lazy dog"

LESSON_TEXT = (
    "Photosynthesis converts light energy into chemical energy. "
    "Chlorophyll absorbs mostly blue and red light.\n\n"
    "The Calvin cycle fixes carbon dioxide into sugars, "
    "using ATP and NADPH produced by the light reactions."
)


def _reconstruct(chunks: list[str], overlap: int) -> str:
    return chunks[0] + "".join(c[overlap:] for c in chunks[1:])


@pytest.fixture
def chunker() -> TextChunker:
    return TextChunker(ChunkingConfig(chunk_size=20, overlap=5))


# ── Boundaries ───────────────────────────────────────────────────────────────


class TestSplitTextBoundaries:
    def test_fox_sentence(self) -> None:
        chunks = split_text(FOX, chunk_size=20, overlap=5)
        assert chunks == ["The quick brown fox ", " fox jumps over the ", " the lazy dog"]

    def test_fox_offsets(self) -> None:
        chunks = split_text(FOX, chunk_size=20, overlap=5)
        offsets = [FOX.index(c) for c in chunks]
        assert offsets == [0, 15, 30]

    def test_consecutive_chunks_share_overlap(self) -> None:
        chunks = split_text(LESSON_TEXT, chunk_size=40, overlap=10)
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev[-10:] == nxt[:10]

    def test_only_last_chunk_is_shorter(self) -> None:
        chunks = split_text(LESSON_TEXT, chunk_size=40, overlap=10)
        assert all(len(c) == 40 for c in chunks[:-1])
        assert 0 < len(chunks[-1]) <= 40

    def test_text_shorter_than_chunk_size(self) -> None:
        assert split_text("short", chunk_size=20, overlap=5) == ["short"]

    def test_text_exactly_chunk_size(self) -> None:
        text = "a" * 20
        assert split_text(text, chunk_size=20, overlap=5) == [text]

    def test_stops_when_window_reaches_end(self) -> None:
        text = "x" * 35
        chunks = split_text(text, chunk_size=20, overlap=5)
        assert len(chunks) == 2
        assert len(chunks[1]) == 20

    def test_default_parameters(self) -> None:
        text = "".join(chr(ord("a") + i % 26) for i in range(1000))
        chunks = split_text(text)
        assert [len(c) for c in chunks] == [500, 500, 100]
        assert chunks[1] == text[450:950]

    def test_zero_overlap(self) -> None:
        assert split_text("abcdefgh", chunk_size=3, overlap=0) == ["abc", "def", "gh"]

    def test_whitespace_is_preserved(self) -> None:
        chunks = split_text("  a  \n\n  b  ", chunk_size=4, overlap=1)
        assert "".join([chunks[0]] + [c[1:] for c in chunks[1:]]) == "  a  \n\n  b  "


# ── Properties ───────────────────────────────────────────────────────────────


class TestSplitTextProperties:
    @pytest.mark.parametrize(
        ("chunk_size", "overlap"),
        [(20, 5), (7, 6), (500, 50), (1, 0)],
    )
    def test_chunks_reconstruct_text(self, chunk_size: int, overlap: int) -> None:
        chunks = split_text(LESSON_TEXT, chunk_size=chunk_size, overlap=overlap)
        assert _reconstruct(chunks, overlap) == LESSON_TEXT

    @pytest.mark.parametrize(("chunk_size", "overlap"), [(20, 5), (7, 6), (1, 0)])
    def test_chunk_count_bound(self, chunk_size: int, overlap: int) -> None:
        chunks = split_text(LESSON_TEXT, chunk_size=chunk_size, overlap=overlap)
        assert len(chunks) <= math.ceil(len(LESSON_TEXT) / (chunk_size - overlap))

    def test_every_chunk_is_substring(self) -> None:
        for chunk in split_text(LESSON_TEXT, chunk_size=33, overlap=8):
            assert chunk in LESSON_TEXT

    def test_deterministic(self) -> None:
        first = split_text(LESSON_TEXT, chunk_size=30, overlap=10)
        second = split_text(LESSON_TEXT, chunk_size=30, overlap=10)
        assert first == second


# ── Empty input and validation ───────────────────────────────────────────────


class TestSplitTextValidation:
    def test_empty_text(self) -> None:
        assert split_text("", chunk_size=20, overlap=5) == []

    def test_none_text(self) -> None:
        assert split_text(None, chunk_size=20, overlap=5) == []

    def test_overlap_equal_to_chunk_size(self) -> None:
        with pytest.raises(ConfigurationError):
            split_text(FOX, chunk_size=10, overlap=10)

    def test_overlap_larger_than_chunk_size(self) -> None:
        with pytest.raises(ConfigurationError):
            split_text(FOX, chunk_size=10, overlap=11)

    def test_non_positive_chunk_size(self) -> None:
        with pytest.raises(ConfigurationError):
            split_text(FOX, chunk_size=0, overlap=0)

    def test_negative_overlap(self) -> None:
        with pytest.raises(ConfigurationError):
            split_text(FOX, chunk_size=10, overlap=-1)

    def test_invalid_parameters_rejected_for_empty_text(self) -> None:
        with pytest.raises(ConfigurationError):
            split_text("", chunk_size=5, overlap=5)


class TestTextChunker:
    def test_split_uses_config(self, chunker: TextChunker) -> None:
        assert chunker.split(FOX) == split_text(FOX, chunk_size=20, overlap=5)

    def test_invalid_config_rejected_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            TextChunker(ChunkingConfig(chunk_size=50, overlap=50))

    def test_max_chunks(self, chunker: TextChunker) -> None:
        assert chunker.max_chunks(len(FOX)) == 3
        assert chunker.max_chunks(0) == 0

    def test_properties(self, chunker: TextChunker) -> None:
        assert chunker.chunk_size == 20
        assert chunker.overlap == 5
