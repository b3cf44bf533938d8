"""Shared pytest fixtures for codebrief tests.

Fixtures are organized by category:
- Archive fixtures: In-memory zipballs
- Configuration fixtures: Test configs for various scenarios
- LLM fixtures: Mock LiteLLM responses
"""

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from codebrief.config import CodebriefConfig, GitHubConfig, IngestConfig, StorageConfig
from codebrief.models.llm_config import LLMConfig
from codebrief.utils.logging import ROOT_LOGGER
from tests.fixtures import SAMPLE_REPLY, build_zip, make_litellm_response


@pytest.fixture(autouse=True)
def reset_codebrief_logger():
    """Drop handlers the CLI attaches to streams that close after each test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

# =============================================================================
# Archive Fixtures
# =============================================================================


@pytest.fixture
def app_source() -> str:
    """Return 200 characters of plain Python source."""
    source = 'def main():\n    print("hello from app")\n\n\nif __name__ == "__main__":\n    main()\n'
    return (source + "#" * 200)[:200]


@pytest.fixture
def sample_archive(app_source: str) -> bytes:
    """Archive with one source file and one dependency file."""
    return build_zip(
        {
            "src/app.py": app_source,
            "node_modules/x/index.js": "module.exports = function x() { return 1; };\n",
        },
        dirs=["src", "node_modules", "node_modules/x"],
    )


@pytest.fixture
def mixed_archive() -> bytes:
    """Archive exercising every exclusion rule."""
    return build_zip(
        {
            "README.md": "# Sample project\n\nA tiny service used in tests.\n",
            "src/app.py": "import os\n\nprint(os.getcwd())\n",
            ".git/config": "[core]\n",
            "dist/bundle.js": "var a=1;",
            "package-lock.json": "{}",
            "assets/logo.PNG": b"\x89PNG\r\n\x1a\n",
            "data/blob.dat": b"abc\x00def",
            "src/util.js": "export const add = (a, b) => a + b;\n",
        }
    )


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def llm_config() -> LLMConfig:
    """Gemini config with three tiers and a fake key."""
    return LLMConfig(
        provider="gemini",
        tiers=("tier-a", "tier-b", "tier-c"),
        api_key="test-api-key",
    )


@pytest.fixture
def test_config(tmp_path, llm_config: LLMConfig) -> CodebriefConfig:
    """Configuration writing results under tmp_path."""
    return CodebriefConfig(
        github=GitHubConfig(token=None),
        ingest=IngestConfig(),
        llm=llm_config,
        storage=StorageConfig(enabled=True, path=str(tmp_path / "analyses.jsonl")),
    )


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete configuration dictionary with all options."""
    return {
        "github": {
            "token": "ghp_test",
            "host": "github.com",
            "api_host": "api.github.com",
            "timeout": 30,
            "max_download_bytes": 1024,
        },
        "ingest": {
            "max_upload_bytes": 2048,
            "max_corpus_chars": 5000,
            "max_prompt_chars": 1000,
            "min_corpus_chars": 10,
        },
        "llm": {
            "provider": "claude",
            "tiers": ["claude-sonnet-4-20250514", "claude-3-5-haiku-latest"],
            "api_key": "sk-test",
            "temperature": 0,
            "max_tokens": 4096,
            "timeout": 60,
        },
        "storage": {
            "enabled": False,
            "path": "results.jsonl",
        },
    }


# =============================================================================
# LLM Fixtures
# =============================================================================


@pytest.fixture
def mock_litellm_response() -> MagicMock:
    """Mock LiteLLM response carrying a valid analysis reply."""
    return make_litellm_response(SAMPLE_REPLY)
