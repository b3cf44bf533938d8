"""LLM configuration entity for codebrief.

Defines the provider settings and the ordered model tier list used by the
inference fallback chain. Supports multiple providers through LiteLLM:
Gemini, Claude, Ollama and Bedrock.
"""

from dataclasses import dataclass, field

# Valid LLM providers
VALID_PROVIDERS = frozenset({"claude", "gemini", "ollama", "bedrock"})

# Cloud providers authenticate with an API key
KEYED_PROVIDERS = frozenset({"claude", "gemini"})

# Newest/cheapest first, most broadly compatible last
DEFAULT_TIERS: tuple[str, ...] = (
    "gemini-2.0-flash",
    "gemini-flash-latest",
    "gemini-pro-latest",
)


@dataclass
class LLMConfig:
    """Configuration for the model backends.

    Attributes:
        provider: LLM provider (gemini, claude, ollama, bedrock)
        tiers: Model identifiers in decreasing preference
        api_key: API key (not required for Ollama or Bedrock)
        api_base: API base URL (required for Ollama)
        temperature: Sampling temperature
        max_tokens: Maximum response tokens
        timeout: Per-call timeout in seconds
    """

    provider: str = "gemini"
    tiers: tuple[str, ...] = DEFAULT_TIERS
    api_key: str | None = None
    api_base: str | None = None
    temperature: float = field(default=0.0)
    max_tokens: int = field(default=8192)
    timeout: int = field(default=600)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.provider = self.provider.lower().strip()

        if self.provider not in VALID_PROVIDERS:
            raise ValueError(
                f"Invalid provider '{self.provider}'. "
                f"Must be one of: {sorted(VALID_PROVIDERS)}"
            )

        if isinstance(self.tiers, str):
            self.tiers = (self.tiers,)
        tiers = tuple(str(t).strip() for t in self.tiers)
        if not tiers or any(not t for t in tiers):
            raise ValueError("At least one non-empty model tier is required")
        self.tiers = tiers

        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be between 0 and 2. Got: {self.temperature}")

        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive. Got: {self.max_tokens}")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive. Got: {self.timeout}")

        # API base defaults for Ollama
        if self.provider == "ollama" and not self.api_base:
            self.api_base = "http://localhost:11434"

    @property
    def requires_api_key(self) -> bool:
        """Return True if the provider authenticates with an API key."""
        return self.provider in KEYED_PROVIDERS

    @property
    def has_credentials(self) -> bool:
        """Return True if the provider can be called as configured."""
        return bool(self.api_key) or not self.requires_api_key

    def validate(self) -> list[str]:
        """Validate configuration and return warnings.

        Returns:
            List of warning messages (empty if no warnings)
        """
        warnings: list[str] = []

        if len(set(self.tiers)) != len(self.tiers):
            warnings.append("model tiers contain duplicates; a failing model is retried")

        if self.max_tokens < 1000:
            warnings.append(
                f"max_tokens is set to {self.max_tokens}, which may truncate the JSON reply"
            )

        return warnings

    def get_litellm_model_name(self, model: str) -> str:
        """Get a tier's model name in LiteLLM format.

        Args:
            model: Model identifier from the tier list

        Returns:
            Model name formatted for LiteLLM
        """
        prefixes = {
            "ollama": "ollama/",
            "bedrock": "bedrock/",
            "gemini": "gemini/",
            "claude": "anthropic/",
        }
        prefix = prefixes[self.provider]
        if model.startswith(prefix):
            return model
        return f"{prefix}{model}"

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary (API key masked)."""
        return {
            "provider": self.provider,
            "tiers": list(self.tiers),
            "api_key": "***" if self.api_key else None,
            "api_base": self.api_base,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
        }
