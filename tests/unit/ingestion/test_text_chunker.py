"""
Tests for paragraph-aware text chunking.
"""

import pytest

from ragdocs.ingestion.text_chunker import chunk_text, normalize_text


class TestNormalizeText:

    def test_collapses_whitespace(self):
        assert normalize_text("  a   b \n\n\n\n c\t\td  ") == "a b\n\nc d"


class TestChunkText:

    def test_empty_text(self):
        assert chunk_text("   \n\n ") == []

    def test_short_text_is_single_chunk(self):
        chunks = chunk_text("Hello world.\n\nSecond paragraph.", chunk_size=100)

        assert len(chunks) == 1
        assert chunks[0].index == 0
        assert chunks[0].content == "Hello world.\n\nSecond paragraph."

    def test_paragraphs_are_packed_up_to_limit(self):
        text = "\n\n".join(["x" * 40] * 5)

        chunks = chunk_text(text, chunk_size=100)

        assert [c.index for c in chunks] == [0, 1, 2]
        assert all(c.char_count <= 100 for c in chunks)
        assert chunks[0].content == "x" * 40 + "\n\n" + "x" * 40

    def test_long_paragraph_split_on_words(self):
        text = " ".join(["word"] * 100)

        chunks = chunk_text(text, chunk_size=50)

        assert all(c.char_count <= 50 for c in chunks)
        assert " ".join(c.content for c in chunks).split() == ["word"] * 100

    def test_oversized_word_is_hard_split(self):
        chunks = chunk_text("a" * 25, chunk_size=10)

        assert [c.content for c in chunks] == ["a" * 10, "a" * 10, "a" * 5]

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            chunk_text("text", chunk_size=0)
