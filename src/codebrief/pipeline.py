"""Analysis pipeline: Fetch -> Assemble -> Cap -> Infer -> Coerce -> Persist.

Each stage either produces its output or raises a CodebriefError that stops
the run. Only the final persistence step is allowed to fail quietly.
"""

import logging
from datetime import UTC, datetime

from codebrief.config import CodebriefConfig
from codebrief.errors import EmptyCorpusError
from codebrief.ingest.corpus import CorpusAssembler
from codebrief.ingest.fetcher import ArchiveFetcher
from codebrief.llm.client import create_backends
from codebrief.llm.orchestrator import InferenceOrchestrator
from codebrief.llm.prompts import ANALYSIS_SYSTEM_PROMPT
from codebrief.llm.response import coerce_response
from codebrief.models.analysis import AnalysisRun
from codebrief.models.corpus import PROMPT_TRUNCATION_MARKER, Corpus
from codebrief.models.repository import ProjectSource, SourceKind
from codebrief.storage import JsonlResultStore, NullResultStore, ResultStore

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Runs one project through the ingestion and inference stages.

    Holds only configuration and collaborators, so one instance can serve
    concurrent runs.

    Usage:
        pipeline = AnalysisPipeline(config)
        run = pipeline.run(ProjectSource.from_url("https://github.com/user/repo"))
    """

    def __init__(
        self,
        config: CodebriefConfig | None = None,
        fetcher: ArchiveFetcher | None = None,
        assembler: CorpusAssembler | None = None,
        orchestrator: InferenceOrchestrator | None = None,
        store: ResultStore | None = None,
        instruction: str = ANALYSIS_SYSTEM_PROMPT,
    ) -> None:
        """Initialize the pipeline.

        Collaborators not supplied are built from config.

        Args:
            config: codebrief configuration (uses defaults if None)
            fetcher: Archive fetcher
            assembler: Corpus assembler
            orchestrator: Inference orchestrator
            store: Result store
            instruction: Instruction prompt sent ahead of the corpus
        """
        self.config = config or CodebriefConfig()
        self.fetcher = fetcher or ArchiveFetcher(
            self.config.github,
            max_upload_bytes=self.config.ingest.max_upload_bytes,
        )
        self.assembler = assembler or CorpusAssembler(
            max_chars=self.config.ingest.max_corpus_chars,
        )
        self.orchestrator = orchestrator or InferenceOrchestrator(
            create_backends(self.config.llm)
        )
        if store is None:
            store = (
                JsonlResultStore(self.config.storage.path)
                if self.config.storage.enabled
                else NullResultStore()
            )
        self.store = store
        self.instruction = instruction

    def run(self, source: ProjectSource) -> AnalysisRun:
        """Execute the full pipeline for one source.

        Args:
            source: Repository URL or uploaded archive

        Returns:
            AnalysisRun with the record and its provenance

        Raises:
            CodebriefError: From whichever stage failed
        """
        logger.info("Starting analysis of %s", source.title)

        archive = self._acquire(source)
        corpus = self.assembler.assemble(archive)
        corpus = self.prepare_prompt_corpus(corpus)

        result = self.orchestrator.run(self.instruction, corpus.text)
        record = coerce_response(result.text)

        run = AnalysisRun(
            record=record,
            source_kind=source.kind.value,
            identifier=source.identifier,
            title=source.title,
            model=result.model,
            corpus_stats=corpus.to_dict(),
            created_at=datetime.now(UTC),
        )
        self._persist(run)

        logger.info(
            "Analysis of %s complete (score %.0f, model %s)",
            run.title,
            run.score,
            run.model,
        )
        return run

    def prepare_prompt_corpus(self, corpus: Corpus) -> Corpus:
        """Check the corpus is usable and cap it for the model call.

        Raises:
            EmptyCorpusError: If the corpus is below min_corpus_chars
        """
        minimum = self.config.ingest.min_corpus_chars
        if len(corpus.text) < minimum:
            raise EmptyCorpusError(len(corpus.text), minimum)

        limit = self.config.ingest.max_prompt_chars
        capped = corpus.truncate(limit, PROMPT_TRUNCATION_MARKER)
        if capped is not corpus:
            logger.warning(
                "Corpus of %d chars capped to %d chars before inference",
                len(corpus.text),
                limit,
            )
        return capped

    def _acquire(self, source: ProjectSource) -> bytes:
        """Return archive bytes for a source."""
        if source.kind == SourceKind.GITHUB:
            return self.fetcher.fetch(source.url or "")
        return self.fetcher.accept_upload(source.archive or b"", source.filename)

    def _persist(self, run: AnalysisRun) -> None:
        """Hand the run to the store; failures are logged, never raised."""
        try:
            self.store.save(run)
        except Exception as e:
            logger.error("Failed to save analysis of %s: %s", run.title, e)
