"""Corpus model: the single text document submitted for inference."""

from dataclasses import dataclass, replace
from typing import Any

MAX_CORPUS_CHARS = 2_000_000
MAX_PROMPT_CHARS = 1_000_000
MIN_CORPUS_CHARS = 50

FILE_MARKER = "\n--- FILE: {path} ---\n"
ASSEMBLY_TRUNCATION_MARKER = "\n--- TRUNCATED: PROJECT TOO LARGE ---\n"
PROMPT_TRUNCATION_MARKER = "\n...[Truncated]"


@dataclass(frozen=True)
class Corpus:
    """Concatenated project text with per-file markers.

    Attributes:
        text: Corpus text, each file prefixed with a "--- FILE: <path> ---" line
        file_count: Number of files included
        skipped_count: Number of filtered, binary or unreadable entries
        truncated: Whether any size ceiling cut the text
    """

    text: str
    file_count: int = 0
    skipped_count: int = 0
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.text)

    def truncate(self, limit: int, marker: str = PROMPT_TRUNCATION_MARKER) -> "Corpus":
        """Return a copy capped to limit characters.

        The marker is appended only when the text was actually cut.

        Args:
            limit: Maximum number of characters kept from the text
            marker: Text appended after the cut

        Returns:
            The same corpus if it fits, otherwise a truncated copy
        """
        if len(self.text) <= limit:
            return self
        return replace(self, text=self.text[:limit] + marker, truncated=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert bookkeeping to a dictionary (text omitted)."""
        return {
            "chars": len(self.text),
            "file_count": self.file_count,
            "skipped_count": self.skipped_count,
            "truncated": self.truncated,
        }
