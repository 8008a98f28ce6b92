"""
Paragraph-aware text chunking for page content.
"""

import re
from dataclasses import dataclass
from typing import List

_WHITESPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")


@dataclass
class TextChunk:
    """A piece of page text small enough to embed."""

    index: int
    content: str

    @property
    def char_count(self) -> int:
        return len(self.content)


def normalize_text(text: str) -> str:
    """Collapse runs of spaces and blank lines."""
    lines = [_WHITESPACE.sub(" ", line).strip() for line in text.splitlines()]
    return _BLANK_LINES.sub("\n\n", "\n".join(lines)).strip()


def chunk_text(text: str, chunk_size: int = 1500) -> List[TextChunk]:
    """
    Split text into chunks of at most ``chunk_size`` characters.

    Paragraphs are packed together while they fit; a paragraph longer than
    ``chunk_size`` is cut on word boundaries, and a single word longer than
    ``chunk_size`` is hard-split.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    pieces: List[str] = []
    current = ""

    for paragraph in normalize_text(text).split("\n\n"):
        if not paragraph:
            continue

        candidate = f"{current}\n\n{paragraph}" if current else paragraph
        if len(candidate) <= chunk_size:
            current = candidate
            continue

        if current:
            pieces.append(current)
            current = ""

        if len(paragraph) <= chunk_size:
            current = paragraph
            continue

        for word in paragraph.split():
            while len(word) > chunk_size:
                if current:
                    pieces.append(current)
                    current = ""
                pieces.append(word[:chunk_size])
                word = word[chunk_size:]
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= chunk_size:
                current = candidate
            else:
                pieces.append(current)
                current = word

    if current:
        pieces.append(current)

    return [TextChunk(index=i, content=piece) for i, piece in enumerate(pieces)]
