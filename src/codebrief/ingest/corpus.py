"""Corpus assembly from a zip archive.

Walks archive members in archive order, keeps the ones the path filter
accepts, drops anything that decodes to text containing NUL, and concatenates
the rest into one bounded document with a marker line per file.
"""

import io
import logging
import zipfile
import zlib
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from codebrief.errors import InvalidArchiveError
from codebrief.ingest.filters import DEFAULT_RULES, FilterRuleSet, split_path
from codebrief.models.corpus import (
    ASSEMBLY_TRUNCATION_MARKER,
    FILE_MARKER,
    MAX_CORPUS_CHARS,
    Corpus,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an opened archive.

    Attributes:
        name: Member name as stored in the archive
        path: Ordered path segments
        is_dir: Whether the member is a directory
        read: Lazy accessor returning the member bytes
    """

    name: str
    path: tuple[str, ...]
    is_dir: bool
    read: Callable[[], bytes]


def decode_text(data: bytes) -> str | None:
    """Decode member bytes as UTF-8 text.

    Invalid sequences are replaced rather than rejected; only a NUL character
    marks the content as binary.

    Returns:
        Decoded text, or None for binary-looking content
    """
    text = data.decode("utf-8", errors="replace")
    if "\0" in text:
        return None
    return text


class CorpusAssembler:
    """Builds a Corpus from zip archive bytes.

    Usage:
        assembler = CorpusAssembler()
        corpus = assembler.assemble(archive_bytes)
    """

    def __init__(
        self,
        rules: FilterRuleSet = DEFAULT_RULES,
        max_chars: int = MAX_CORPUS_CHARS,
    ) -> None:
        """Initialize the assembler.

        Args:
            rules: Path exclusion rules
            max_chars: Ceiling on corpus length, the truncation marker excluded
        """
        self.rules = rules
        self.max_chars = max_chars

    def iter_entries(self, archive: bytes) -> Iterator[ArchiveEntry]:
        """Yield archive members in archive order.

        Raises:
            InvalidArchiveError: If the bytes are not a readable zip archive
        """
        try:
            zf = zipfile.ZipFile(io.BytesIO(archive))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise InvalidArchiveError(f"Not a valid zip archive: {e}") from e

        with zf:
            for info in zf.infolist():
                yield ArchiveEntry(
                    name=info.filename,
                    path=split_path(info.filename),
                    is_dir=info.is_dir(),
                    read=lambda info=info: zf.read(info),
                )

    def assemble(self, archive: bytes) -> Corpus:
        """Assemble the corpus for an archive.

        After each appended file the buffer length is checked; once it exceeds
        max_chars the buffer is cut to max_chars, the truncation marker is
        appended and the remaining members are dropped.

        Args:
            archive: Zip archive bytes

        Returns:
            Frozen Corpus

        Raises:
            InvalidArchiveError: If the bytes are not a readable zip archive
        """
        parts: list[str] = []
        length = 0
        file_count = 0
        skipped = 0
        truncated = False

        for entry in self.iter_entries(archive):
            if entry.is_dir:
                continue

            if not self.rules.should_include(entry.path):
                skipped += 1
                continue

            try:
                data = entry.read()
            except (zipfile.BadZipFile, RuntimeError, OSError, zlib.error, EOFError) as e:
                logger.warning("Failed to read file %s: %s", entry.name, e)
                skipped += 1
                continue

            text = decode_text(data)
            if text is None:
                logger.debug("Skipping binary file %s", entry.name)
                skipped += 1
                continue

            block = FILE_MARKER.format(path=entry.name) + text + "\n"
            parts.append(block)
            length += len(block)
            file_count += 1

            if length > self.max_chars:
                truncated = True
                break

        buffer = "".join(parts)
        if truncated:
            buffer = buffer[: self.max_chars] + ASSEMBLY_TRUNCATION_MARKER
            logger.warning(
                "Project too large: corpus truncated to %d chars after %d files",
                self.max_chars,
                file_count,
            )

        logger.info(
            "Assembled corpus: %d files, %d skipped, %d chars",
            file_count,
            skipped,
            len(buffer),
        )

        return Corpus(
            text=buffer,
            file_count=file_count,
            skipped_count=skipped,
            truncated=truncated,
        )
