"""Lesson document loader for plain text and Markdown files."""

import logging
from pathlib import Path

import chardet

from lesson_rag.models.document import Document

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".txt", ".md")


class DocumentLoader:
    """Reads lesson files from disk into Document objects."""

    def load(self, file_path: str | Path, document_id: str | None = None) -> Document:
        """Load a lesson file.

        Args:
            file_path: Path to a .txt or .md file.
            document_id: Identifier for the document. Defaults to the file stem.

        Returns:
            A Document with the decoded text and a best-guess title.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the file extension is not supported.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        ext = path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )

        text = self._read_text(path)
        return Document(
            id=document_id or path.stem,
            text=text,
            title=self._extract_title(text, path),
        )

    def _read_text(self, file_path: Path) -> str:
        """Read a text file, detecting the encoding when it is not UTF-8."""
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence", 0)

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.error("Failed to decode file with %s: %s", encoding, file_path)
            return raw_bytes.decode("utf-8", errors="replace")

    def _extract_title(self, text: str, file_path: Path) -> str:
        """First short non-empty line (Markdown heading marks stripped), else the file stem."""
        for line in text.strip().splitlines()[:5]:
            stripped = line.strip().lstrip("#").strip()
            if stripped and len(stripped) <= 100:
                return stripped
        return file_path.stem
