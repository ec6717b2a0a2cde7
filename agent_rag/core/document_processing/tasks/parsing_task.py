"""
Document parsing task for local text documents.

Reads a UTF-8 text file and normalizes its whitespace before chunking.

Dependencies: None
System role: Optional first stage of document ingestion pipeline
"""

import re
from pathlib import Path

SUPPORTED_SUFFIXES = (".txt", ".md", ".markdown", ".csv", ".json", ".html", ".htm")


class ParsingError(Exception):
    """Raised when document parsing fails."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        super().__init__(message)


def normalize_text(text: str) -> str:
    """Collapse whitespace runs into single spaces and trim the ends."""
    return re.sub(r"\s+", " ", text).strip()


class ParsingTask:
    """Load local text documents."""

    def parse(self, file_path: str) -> str:
        """
        Read and normalize a text document.

        Args:
            file_path: Path to a text document

        Returns:
            str: Normalized document text

        Raises:
            ParsingError: When the file is missing, unsupported or unreadable
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", file_path)

        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise ParsingError(
                f"Unsupported file format: {path.suffix}. "
                f"Supported: {', '.join(SUPPORTED_SUFFIXES)}",
                file_path,
            )

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Failed to read document: {e}", file_path) from e

        return normalize_text(content)
