"""Result stores for finished analyses.

The pipeline hands every AnalysisRun to a ResultStore. A store failure never
invalidates the analysis: the pipeline logs it and returns the result anyway.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol

from codebrief.models.analysis import AnalysisRun

logger = logging.getLogger(__name__)


class ResultStore(Protocol):
    """Persistence collaborator contract."""

    def save(self, run: AnalysisRun) -> None:
        """Persist one run; raise on failure."""
        ...


class NullResultStore:
    """Store that discards results (used with --no-save)."""

    def save(self, run: AnalysisRun) -> None:
        logger.debug("Result store disabled; not saving %s", run.title)


class JsonlResultStore:
    """Appends one JSON object per analysis to a JSON-lines file.

    Usage:
        store = JsonlResultStore(Path(".codebrief/analyses.jsonl"))
        store.save(run)
        history = store.load()
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: JSON-lines file (parent directories are created on save)
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def save(self, run: AnalysisRun) -> None:
        """Append a run to the file.

        Raises:
            OSError: If the file cannot be written
        """
        line = json.dumps(run.to_dict(), ensure_ascii=False)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.info("Saved analysis of %s to %s", run.title, self.path)

    def load(self) -> list[dict[str, Any]]:
        """Read every stored run.

        Lines that are not valid JSON are skipped with a warning.

        Returns:
            Stored runs, oldest first
        """
        if not self.path.exists():
            return []

        entries: list[dict[str, Any]] = []
        for lineno, line in enumerate(self.path.read_text(encoding="utf-8").splitlines(), 1):
            if not line.strip():
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError as e:
                logger.warning("Skipping corrupt line %d in %s: %s", lineno, self.path, e)
        return entries
