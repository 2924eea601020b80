"""Entry point: ingest lesson files into the chunk store."""

import logging
import sys

from lesson_rag.config import load_config
from lesson_rag.ingestion.loader import DocumentLoader
from lesson_rag.service import build_service

logger = logging.getLogger("lesson_rag.run")


def main(argv: list[str] | None = None) -> int:
    """Initialize the chunk store and ingest every lesson file given.

    Returns:
        0 when every file was ingested, 1 when any file failed, 2 when
        no files were given.
    """
    config = load_config()
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    paths = sys.argv[1:] if argv is None else argv
    if not paths:
        logger.error("Usage: python run.py LESSON_FILE [LESSON_FILE ...]")
        return 2

    loader = DocumentLoader()
    service = build_service(config)
    failures = 0
    try:
        for path in paths:
            try:
                document = loader.load(path)
            except (OSError, ValueError) as e:
                failures += 1
                logger.error("Could not load %s: %s", path, e)
                continue

            result = service.on_document_created(document)
            if result.succeeded:
                logger.info("Ingested %s: %d chunks", document.id, result.chunk_count)
            else:
                failures += 1
                logger.error("Ingestion of %s failed: %s", document.id, result.error)
    finally:
        service.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
