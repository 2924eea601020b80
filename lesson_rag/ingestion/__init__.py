"""Document ingestion: loading, chunking and the ingestion pipeline."""

from lesson_rag.ingestion.chunker import TextChunker, split_text
from lesson_rag.ingestion.loader import DocumentLoader
from lesson_rag.ingestion.pipeline import IngestionPipeline, IngestionStage

__all__ = ["DocumentLoader", "IngestionPipeline", "IngestionStage", "TextChunker", "split_text"]
