"""Test fixtures for codebrief.

Helpers for building in-memory zip archives shaped like GitHub zipballs,
fake model backends, and canned model replies.
"""

import io
import json
import zipfile
from collections.abc import Mapping, Sequence
from unittest.mock import MagicMock

from codebrief.errors import BackendError

# GitHub zipballs wrap everything in "<owner>-<repo>-<sha>/"
ZIPBALL_ROOT = "user-repo-abc1234/"

SAMPLE_RECORD = {
    "star_intro": "Built a task tracker to help a small team ship faster.",
    "tech_stack_analysis": [
        {
            "choice": "Flask",
            "justification": "Small API surface",
            "trade_off": "No async request handling",
        }
    ],
    "interview_questions": [
        {"question": "How are tasks persisted?", "answer": "SQLite through SQLAlchemy."}
    ],
    "red_flags": ["Secrets committed in config.py"],
    "mermaid_diagram": "graph TD; A[Client] --> B[API]; B --> C[Database];",
    "complexity_score": 42,
    "resume_bullets": ["Designed a REST API serving 3 clients"],
    "project_type": "Backend",
}

SAMPLE_REPLY = json.dumps(SAMPLE_RECORD)


def build_zip(
    files: Mapping[str, bytes | str],
    dirs: Sequence[str] = (),
    root: str = ZIPBALL_ROOT,
) -> bytes:
    """Build zip archive bytes.

    Args:
        files: Member path (relative to root) -> content
        dirs: Directory members to add explicitly
        root: Prefix applied to every member

    Returns:
        Zip archive bytes
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        if root:
            zf.writestr(root, "")
        for directory in dirs:
            zf.writestr(f"{root}{directory.rstrip('/')}/", "")
        for path, content in files.items():
            zf.writestr(f"{root}{path}", content)
    return buf.getvalue()


class FakeBackend:
    """Backend double that records calls and replies or fails on demand."""

    def __init__(self, name: str, reply: str | None = None, error: str | None = None) -> None:
        self.name = name
        self.reply = reply
        self.error = error
        self.calls: list[list[str]] = []

    def generate(self, parts: Sequence[str]) -> str:
        self.calls.append(list(parts))
        if self.error is not None:
            raise BackendError(self.name, self.error)
        return self.reply or ""


class FailingStore:
    """Result store whose writes always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def save(self, run: object) -> None:
        self.attempts += 1
        raise OSError("database is unavailable")


class MemoryStore:
    """Result store keeping runs in a list."""

    def __init__(self) -> None:
        self.runs: list[object] = []

    def save(self, run: object) -> None:
        self.runs.append(run)


def make_litellm_response(content: str | None, model: str = "gemini/tier-a") -> MagicMock:
    """Create a mock LiteLLM completion response."""
    mock_response = MagicMock()
    mock_response.choices = [
        MagicMock(message=MagicMock(content=content), finish_reason="stop")
    ]
    mock_response.model = model
    mock_response.usage = MagicMock(prompt_tokens=10, completion_tokens=5, total_tokens=15)
    return mock_response
