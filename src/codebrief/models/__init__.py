"""codebrief data models.

This module exports the core entities used throughout the application:
- RepositoryReference: Validated host/owner/name locator
- ProjectSource: Ingress value (URL or uploaded archive)
- Corpus: Bounded project text submitted for inference
- AnalysisRecord: Structured brief recovered from the model reply
- AnalysisRun: Record plus provenance
- LLMConfig: Provider settings and model tiers
"""

from codebrief.models.analysis import (
    AnalysisRecord,
    AnalysisRun,
    InterviewQuestion,
    TechChoice,
)
from codebrief.models.corpus import Corpus
from codebrief.models.llm_config import LLMConfig
from codebrief.models.repository import ProjectSource, RepositoryReference, SourceKind

__all__ = [
    "AnalysisRecord",
    "AnalysisRun",
    "Corpus",
    "InterviewQuestion",
    "LLMConfig",
    "ProjectSource",
    "RepositoryReference",
    "SourceKind",
    "TechChoice",
]
