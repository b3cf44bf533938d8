"""Analysis result entities.

This module contains entities related to analysis results:
- TechChoice: One technology choice with its justification and trade-off
- InterviewQuestion: One interview question with a model answer
- AnalysisRecord: Structured brief recovered from the model reply
- AnalysisRun: A record plus provenance, handed to the result store
"""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def _as_text(value: Any) -> str:
    """Coerce a JSON value to a string ("" for null)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_list(value: Any) -> list[Any]:
    """Coerce a JSON value to a list (empty for null or scalars)."""
    if isinstance(value, list):
        return value
    return []


def normalize_score(value: Any) -> float:
    """Coerce a complexity score to a finite number within 0-100.

    Numeric strings are parsed. Missing, non-numeric and non-finite values
    become 0.

    Args:
        value: Raw score from the model reply

    Returns:
        Finite score clamped to the 0-100 range
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(score):
        return 0.0
    return min(max(score, SCORE_MIN), SCORE_MAX)


@dataclass(frozen=True)
class TechChoice:
    """A technology choice found in the project.

    Attributes:
        choice: Technology name
        justification: Why the project uses it
        trade_off: What the choice costs
    """

    choice: str
    justification: str = ""
    trade_off: str = ""

    @classmethod
    def from_value(cls, value: Any) -> "TechChoice":
        """Build from a JSON object (or a bare value used as the choice)."""
        if isinstance(value, dict):
            return cls(
                choice=_as_text(value.get("choice")),
                justification=_as_text(value.get("justification")),
                trade_off=_as_text(value.get("trade_off")),
            )
        return cls(choice=_as_text(value))

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {
            "choice": self.choice,
            "justification": self.justification,
            "trade_off": self.trade_off,
        }


@dataclass(frozen=True)
class InterviewQuestion:
    """An interview question and its expected answer."""

    question: str
    answer: str = ""

    @classmethod
    def from_value(cls, value: Any) -> "InterviewQuestion":
        """Build from a JSON object (or a bare value used as the question)."""
        if isinstance(value, dict):
            return cls(
                question=_as_text(value.get("question")),
                answer=_as_text(value.get("answer")),
            )
        return cls(question=_as_text(value))

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"question": self.question, "answer": self.answer}


@dataclass(frozen=True)
class AnalysisRecord:
    """Structured interview brief for one project.

    Immutable once built. Every list field defaults to an empty tuple and the
    complexity score to 0 when the model omits them.

    Attributes:
        star_intro: Situation/Task/Action/Result introduction
        tech_stack_analysis: Technology choices with trade-offs
        interview_questions: Questions with model answers
        red_flags: Bad practices spotted in the code
        mermaid_diagram: Mermaid graph source
        complexity_score: Finite score in the 0-100 range
        resume_bullets: Resume lines about the project
        project_type: Classification label (Frontend, Backend, ...)
    """

    star_intro: str = ""
    tech_stack_analysis: tuple[TechChoice, ...] = ()
    interview_questions: tuple[InterviewQuestion, ...] = ()
    red_flags: tuple[str, ...] = ()
    mermaid_diagram: str = ""
    complexity_score: float = 0.0
    resume_bullets: tuple[str, ...] = ()
    project_type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisRecord":
        """Normalize a parsed JSON object into a record.

        Missing or mistyped fields fall back to their defaults; the record is
        never rejected for missing optional fields.

        Args:
            data: Parsed JSON object from the model reply

        Returns:
            AnalysisRecord with every field populated
        """
        return cls(
            star_intro=_as_text(data.get("star_intro")),
            tech_stack_analysis=tuple(
                TechChoice.from_value(item) for item in _as_list(data.get("tech_stack_analysis"))
            ),
            interview_questions=tuple(
                InterviewQuestion.from_value(item)
                for item in _as_list(data.get("interview_questions"))
            ),
            red_flags=tuple(_as_text(item) for item in _as_list(data.get("red_flags"))),
            mermaid_diagram=_as_text(data.get("mermaid_diagram")),
            complexity_score=normalize_score(data.get("complexity_score")),
            resume_bullets=tuple(_as_text(item) for item in _as_list(data.get("resume_bullets"))),
            project_type=_as_text(data.get("project_type")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the external JSON shape."""
        return {
            "star_intro": self.star_intro,
            "tech_stack_analysis": [t.to_dict() for t in self.tech_stack_analysis],
            "interview_questions": [q.to_dict() for q in self.interview_questions],
            "red_flags": list(self.red_flags),
            "mermaid_diagram": self.mermaid_diagram,
            "complexity_score": self.complexity_score,
            "resume_bullets": list(self.resume_bullets),
            "project_type": self.project_type,
        }


@dataclass(frozen=True)
class AnalysisRun:
    """A finished analysis with provenance.

    Attributes:
        record: Structured analysis result
        source_kind: "github" or "zip"
        identifier: Repository URL or "Zip File"
        title: Display title ("owner/name" or upload filename)
        model: Model tier that produced the reply
        corpus_stats: Corpus bookkeeping (chars, file counts, truncation)
        created_at: Completion time in UTC
    """

    record: AnalysisRecord
    source_kind: str
    identifier: str
    title: str
    model: str = ""
    corpus_stats: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def score(self) -> float:
        """Complexity score of the record."""
        return self.record.complexity_score

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_kind": self.source_kind,
            "identifier": self.identifier,
            "title": self.title,
            "score": self.score,
            "model": self.model,
            "corpus": self.corpus_stats,
            "created_at": self.created_at.isoformat(),
            "data": self.record.to_dict(),
        }
