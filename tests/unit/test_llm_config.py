"""Unit tests for LLM configuration."""

import pytest

from codebrief.models.llm_config import DEFAULT_TIERS, LLMConfig


class TestLLMConfig:
    """Tests for LLMConfig validation."""

    def test_defaults(self) -> None:
        config = LLMConfig()

        assert config.provider == "gemini"
        assert config.tiers == DEFAULT_TIERS
        assert config.tiers[0] == "gemini-2.0-flash"
        assert config.temperature == 0.0

    def test_provider_normalized(self) -> None:
        assert LLMConfig(provider="  Claude ").provider == "claude"

    def test_invalid_provider(self) -> None:
        with pytest.raises(ValueError, match="Invalid provider"):
            LLMConfig(provider="openai")

    def test_single_tier_string(self) -> None:
        assert LLMConfig(tiers="gemini-pro-latest").tiers == ("gemini-pro-latest",)

    def test_list_tiers_become_tuple(self) -> None:
        assert LLMConfig(tiers=["a", " b "]).tiers == ("a", "b")

    @pytest.mark.parametrize("tiers", [(), ("a", "")])
    def test_empty_tiers_rejected(self, tiers) -> None:
        with pytest.raises(ValueError, match="non-empty model tier"):
            LLMConfig(tiers=tiers)

    def test_temperature_range(self) -> None:
        with pytest.raises(ValueError, match="temperature"):
            LLMConfig(temperature=3.0)

    def test_max_tokens_positive(self) -> None:
        with pytest.raises(ValueError, match="max_tokens"):
            LLMConfig(max_tokens=0)

    def test_ollama_defaults_api_base(self) -> None:
        """Test that Ollama gets a local API base and needs no key."""
        config = LLMConfig(provider="ollama", tiers=("llama3",))

        assert config.api_base == "http://localhost:11434"
        assert config.requires_api_key is False
        assert config.has_credentials is True

    def test_keyed_provider_credentials(self) -> None:
        assert LLMConfig(provider="gemini").has_credentials is False
        assert LLMConfig(provider="gemini", api_key="k").has_credentials is True

    def test_validate_warnings(self) -> None:
        config = LLMConfig(tiers=("a", "a"), max_tokens=500, api_key="k")

        warnings = config.validate()

        assert any("duplicates" in w for w in warnings)
        assert any("max_tokens" in w for w in warnings)

    def test_validate_clean(self) -> None:
        assert LLMConfig(api_key="k").validate() == []


class TestLiteLLMModelName:
    """Tests for provider prefixes."""

    @pytest.mark.parametrize(
        ("provider", "model", "expected"),
        [
            ("gemini", "gemini-2.0-flash", "gemini/gemini-2.0-flash"),
            ("claude", "claude-sonnet-4-20250514", "anthropic/claude-sonnet-4-20250514"),
            ("ollama", "llama3", "ollama/llama3"),
            ("bedrock", "anthropic.claude-v2", "bedrock/anthropic.claude-v2"),
            ("gemini", "gemini/gemini-pro-latest", "gemini/gemini-pro-latest"),
        ],
    )
    def test_prefix(self, provider: str, model: str, expected: str) -> None:
        config = LLMConfig(provider=provider, tiers=(model,))
        assert config.get_litellm_model_name(model) == expected

    def test_to_dict_masks_key(self) -> None:
        data = LLMConfig(api_key="secret").to_dict()

        assert data["api_key"] == "***"
        assert data["tiers"] == list(DEFAULT_TIERS)
