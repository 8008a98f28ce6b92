"""
Page ingestion: fetch, extract, chunk, embed and store documentation pages.
"""

from .page_ingestor import PageIngestor, extract_page, point_id
from .text_chunker import TextChunk, chunk_text, normalize_text

__all__ = [
    "PageIngestor",
    "extract_page",
    "point_id",
    "TextChunk",
    "chunk_text",
    "normalize_text",
]
