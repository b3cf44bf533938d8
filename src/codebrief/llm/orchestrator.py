"""Cascading inference across model tiers.

Tiers are tried strictly in configured order, one attempt each. The first
successful reply is returned; when every tier fails the per-tier causes are
aggregated into AllTiersExhaustedError.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from codebrief.errors import AllTiersExhaustedError, BackendError
from codebrief.llm.client import TextBackend
from codebrief.llm.prompts import build_prompt_parts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InferenceAttempt:
    """Outcome of one tier.

    Attributes:
        tier: Backend name
        text: Reply text on success
        error: Failure message on failure
    """

    tier: str
    text: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class InferenceResult:
    """Successful inference with the attempts that led to it."""

    text: str
    model: str
    attempts: tuple[InferenceAttempt, ...] = ()


class InferenceOrchestrator:
    """Walks an ordered list of backends until one answers.

    Usage:
        orchestrator = InferenceOrchestrator(create_backends(config.llm))
        raw = orchestrator.infer(ANALYSIS_SYSTEM_PROMPT, corpus.text)
    """

    def __init__(self, backends: Sequence[TextBackend]) -> None:
        """Initialize with backends in decreasing preference.

        Raises:
            ValueError: If no backend is given
        """
        if not backends:
            raise ValueError("At least one model backend is required")
        self.backends = tuple(backends)

    @property
    def tiers(self) -> list[str]:
        """Backend names in try order."""
        return [b.name for b in self.backends]

    def infer(self, instruction: str, corpus_text: str) -> str:
        """Return the first successful raw reply.

        Raises:
            AllTiersExhaustedError: If every tier failed
        """
        return self.run(instruction, corpus_text).text

    def run(self, instruction: str, corpus_text: str) -> InferenceResult:
        """Try each tier once, in order, and report which one answered.

        Args:
            instruction: Instruction prompt
            corpus_text: Code context

        Returns:
            InferenceResult from the first tier that succeeded

        Raises:
            AllTiersExhaustedError: If every tier failed
        """
        parts = build_prompt_parts(instruction, corpus_text)
        attempts: list[InferenceAttempt] = []

        for index, backend in enumerate(self.backends):
            try:
                text = backend.generate(parts)
            except BackendError as e:
                attempts.append(InferenceAttempt(tier=backend.name, error=e.message))
                if index + 1 < len(self.backends):
                    logger.warning(
                        "%s failed, retrying with %s: %s",
                        backend.name,
                        self.backends[index + 1].name,
                        e.message,
                    )
                else:
                    logger.error("%s also failed: %s", backend.name, e.message)
                continue

            attempts.append(InferenceAttempt(tier=backend.name, text=text))
            logger.info("Model %s answered (%d chars)", backend.name, len(text))
            return InferenceResult(text=text, model=backend.name, attempts=tuple(attempts))

        raise AllTiersExhaustedError(attempts)
