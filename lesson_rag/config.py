"""Configuration loader for the lesson RAG core."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Lesson RAG"
    version: str = "0.1.0"
    language: str = "en"


class EmbeddingConfig(BaseModel):
    """Embedding provider configuration."""

    provider_url: str = "https://router.huggingface.co/hf-inference/models"
    model: str = "sentence-transformers/all-MiniLM-L6-v2"
    dimensions: int = 384
    max_workers: int = 8
    timeout_seconds: float = 30.0


class ChunkingConfig(BaseModel):
    """Text chunking configuration (characters)."""

    chunk_size: int = 500
    overlap: int = 50


class RetrievalConfig(BaseModel):
    """Retrieval configuration."""

    top_k: int = 3
    search_limit: int = 5
    context_header: str = "Relevant context from the lesson:"


class StorageConfig(BaseModel):
    """Chunk store configuration."""

    sqlite_path: str = "./db/lesson_rag.db"
    timeout_seconds: float = 5.0


class IngestionConfig(BaseModel):
    """Ingestion pipeline configuration."""

    # Wrap all chunk inserts for a document in one transaction
    transactional: bool = False


class LoggingConfig(BaseModel):
    """Root logger configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # API key loaded from environment
    huggingface_api_key: str | None = None


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Override API key from environment
    config.huggingface_api_key = os.getenv("HUGGINGFACE_API_KEY")

    return config
