"""Project ingestion: archive acquisition, path filtering, corpus assembly."""

from codebrief.ingest.corpus import ArchiveEntry, CorpusAssembler, decode_text
from codebrief.ingest.fetcher import ArchiveFetcher
from codebrief.ingest.filters import (
    DEFAULT_RULES,
    IGNORED_DIRS,
    IGNORED_EXTENSIONS,
    IGNORED_FILES,
    FilterRuleSet,
    should_include,
    split_path,
)

__all__ = [
    "ArchiveEntry",
    "ArchiveFetcher",
    "CorpusAssembler",
    "DEFAULT_RULES",
    "FilterRuleSet",
    "IGNORED_DIRS",
    "IGNORED_EXTENSIONS",
    "IGNORED_FILES",
    "decode_text",
    "should_include",
    "split_path",
]
