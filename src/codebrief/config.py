"""codebrief configuration system.

Configuration is YAML-based with a handful of CLI overrides.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.codebrief/config.yaml
3. ./codebrief.yaml

When no GitHub token or LLM API key is configured, GITHUB_TOKEN and
GEMINI_API_KEY are read from the environment at load time. Core classes only
ever receive these values through the config objects.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from codebrief.models.corpus import MAX_CORPUS_CHARS, MAX_PROMPT_CHARS, MIN_CORPUS_CHARS
from codebrief.models.llm_config import DEFAULT_TIERS, LLMConfig

MIB = 1024 * 1024

# Environment fallbacks for credentials
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
LLM_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class GitHubConfig:
    """Archive download configuration.

    Attributes:
        token: Bearer token sent with archive requests (optional)
        host: Code host accepted in repository URLs
        api_host: API host serving zipball downloads
        timeout: Download timeout in seconds
        max_download_bytes: Ceiling for remote archives (0 disables it)
    """

    token: str | None = None
    host: str = "github.com"
    api_host: str = "api.github.com"
    timeout: int = 120
    max_download_bytes: int = 100 * MIB

    def __post_init__(self) -> None:
        """Validate GitHub configuration."""
        if self.timeout <= 0:
            raise ValueError(f"github.timeout must be positive (got {self.timeout})")
        if self.max_download_bytes < 0:
            raise ValueError(
                f"github.max_download_bytes cannot be negative (got {self.max_download_bytes})"
            )


@dataclass
class IngestConfig:
    """Corpus size limits.

    The assembly ceiling bounds memory while the prompt ceiling bounds the
    cost of the model call; they are tuned independently.

    Attributes:
        max_upload_bytes: Largest accepted uploaded archive
        max_corpus_chars: Assembly-time ceiling
        max_prompt_chars: Pre-inference ceiling
        min_corpus_chars: Smallest corpus worth sending
    """

    max_upload_bytes: int = 50 * MIB
    max_corpus_chars: int = MAX_CORPUS_CHARS
    max_prompt_chars: int = MAX_PROMPT_CHARS
    min_corpus_chars: int = MIN_CORPUS_CHARS

    def __post_init__(self) -> None:
        """Validate ingest limits."""
        for name in ("max_upload_bytes", "max_corpus_chars", "max_prompt_chars"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"ingest.{name} must be positive (got {value})")
        if self.min_corpus_chars < 0:
            raise ValueError(
                f"ingest.min_corpus_chars cannot be negative (got {self.min_corpus_chars})"
            )


@dataclass
class StorageConfig:
    """Result store configuration.

    Attributes:
        enabled: Whether finished analyses are persisted
        path: JSON-lines file receiving one line per analysis
    """

    enabled: bool = True
    path: str = ".codebrief/analyses.jsonl"


@dataclass
class CodebriefConfig:
    """Top-level codebrief configuration.

    Attributes:
        github: Archive download settings
        ingest: Corpus size limits
        llm: Provider and model tiers
        storage: Result store settings
    """

    github: GitHubConfig = field(default_factory=GitHubConfig)
    ingest: IngestConfig = field(default_factory=IngestConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${GEMINI_API_KEY} -> value of GEMINI_API_KEY

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.codebrief/config.yaml
    2. ./codebrief.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".codebrief" / "config.yaml",
        start_path / "codebrief.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> CodebriefConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        CodebriefConfig instance
    """
    data = substitute_env_vars(data)

    config = CodebriefConfig()

    if "github" in data:
        github_data = data["github"] or {}
        defaults = GitHubConfig()
        config.github = GitHubConfig(
            token=github_data.get("token") or None,
            host=github_data.get("host", defaults.host),
            api_host=github_data.get("api_host", defaults.api_host),
            timeout=int(github_data.get("timeout", defaults.timeout)),
            max_download_bytes=int(
                github_data.get("max_download_bytes", defaults.max_download_bytes) or 0
            ),
        )

    if "ingest" in data:
        ingest_data = data["ingest"] or {}
        defaults_ingest = IngestConfig()
        config.ingest = IngestConfig(
            max_upload_bytes=int(
                ingest_data.get("max_upload_bytes", defaults_ingest.max_upload_bytes)
            ),
            max_corpus_chars=int(
                ingest_data.get("max_corpus_chars", defaults_ingest.max_corpus_chars)
            ),
            max_prompt_chars=int(
                ingest_data.get("max_prompt_chars", defaults_ingest.max_prompt_chars)
            ),
            min_corpus_chars=int(
                ingest_data.get("min_corpus_chars", defaults_ingest.min_corpus_chars)
            ),
        )

    if "llm" in data:
        llm_data = data["llm"] or {}
        config.llm = LLMConfig(
            provider=llm_data.get("provider", "gemini"),
            tiers=tuple(llm_data.get("tiers") or DEFAULT_TIERS),
            api_key=llm_data.get("api_key") or None,
            api_base=llm_data.get("api_base"),
            temperature=float(llm_data.get("temperature", 0.0)),
            max_tokens=int(llm_data.get("max_tokens", 8192)),
            timeout=int(llm_data.get("timeout", 600)),
        )

    if "storage" in data:
        storage_data = data["storage"] or {}
        config.storage = StorageConfig(
            enabled=bool(storage_data.get("enabled", True)),
            path=str(storage_data.get("path", StorageConfig().path)),
        )

    return config


def apply_env_defaults(config: CodebriefConfig) -> CodebriefConfig:
    """Fill unset credentials from the environment.

    Args:
        config: Loaded configuration (modified in place)

    Returns:
        The same configuration instance
    """
    if not config.github.token:
        config.github.token = os.environ.get(GITHUB_TOKEN_ENV) or None

    env_name = LLM_KEY_ENV.get(config.llm.provider)
    if env_name and not config.llm.api_key:
        config.llm.api_key = os.environ.get(env_name) or None

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> CodebriefConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        CodebriefConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = CodebriefConfig()

    return apply_env_defaults(config)


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# codebrief configuration

# Archive download
github:
  # token: "${GITHUB_TOKEN}"   # Raises the GitHub API rate limit
  host: "github.com"
  api_host: "api.github.com"
  timeout: 120
  max_download_bytes: 104857600  # 0 disables the ceiling

# Corpus limits
ingest:
  max_upload_bytes: 52428800
  max_corpus_chars: 2000000    # Assembly ceiling
  max_prompt_chars: 1000000    # Ceiling applied right before inference
  min_corpus_chars: 50

# Model tiers are tried in order; the first success wins
llm:
  provider: "gemini"           # gemini, claude, ollama, bedrock
  tiers:
    - "gemini-2.0-flash"
    - "gemini-flash-latest"
    - "gemini-pro-latest"
  # api_key: "${GEMINI_API_KEY}"
  temperature: 0
  max_tokens: 8192
  timeout: 600

# Finished analyses
storage:
  enabled: true
  path: ".codebrief/analyses.jsonl"
'''
