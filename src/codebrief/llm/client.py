"""Model backends built on LiteLLM.

Each backend wraps exactly one model identifier and exposes the call contract
the orchestrator relies on: generate(parts) -> text, raising BackendError.
"""

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import litellm

from codebrief.errors import BackendError
from codebrief.models.llm_config import LLMConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class TextBackend(Protocol):
    """Capability interface for one model tier."""

    name: str

    def generate(self, parts: Sequence[str]) -> str:
        """Return the model's text reply or raise BackendError."""
        ...


class LiteLLMBackend:
    """One model tier served through LiteLLM.

    Supports multiple providers through a single interface:
    - Gemini (Google)
    - Claude (Anthropic)
    - Ollama (local)
    - Bedrock (AWS)
    """

    def __init__(self, config: LLMConfig, model: str) -> None:
        """Initialize the backend.

        Args:
            config: Provider settings shared by every tier
            model: Model identifier for this tier
        """
        self.config = config
        self.name = model

    @property
    def litellm_model(self) -> str:
        """Model name in LiteLLM provider/model form."""
        return self.config.get_litellm_model_name(self.name)

    def build_messages(self, parts: Sequence[str]) -> list[dict[str, object]]:
        """Build a single user message carrying the ordered text parts."""
        return [
            {
                "role": "user",
                "content": [{"type": "text", "text": part} for part in parts],
            }
        ]

    def generate(self, parts: Sequence[str]) -> str:
        """Generate a reply for the given message parts.

        Args:
            parts: Ordered text parts (instruction, then code context)

        Returns:
            Reply text

        Raises:
            BackendError: If the call fails or returns no text
        """
        completion_kwargs: dict = {
            "model": self.litellm_model,
            "messages": self.build_messages(parts),
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "timeout": self.config.timeout,
        }
        if self.config.api_key:
            completion_kwargs["api_key"] = self.config.api_key
        if self.config.api_base:
            completion_kwargs["api_base"] = self.config.api_base

        logger.debug("Calling %s (%d parts)", self.litellm_model, len(parts))

        try:
            response = litellm.completion(**completion_kwargs)
        except litellm.exceptions.AuthenticationError as e:
            raise BackendError(self.name, f"Authentication failed: {e}") from e
        except litellm.exceptions.RateLimitError as e:
            raise BackendError(self.name, f"Rate limit exceeded: {e}") from e
        except litellm.exceptions.ContentPolicyViolationError as e:
            raise BackendError(self.name, f"Input rejected by content policy: {e}") from e
        except litellm.exceptions.NotFoundError as e:
            raise BackendError(self.name, f"Model not found: {e}") from e
        except litellm.exceptions.APIConnectionError as e:
            raise BackendError(self.name, f"Connection failed: {e}") from e
        except Exception as e:
            raise BackendError(self.name, f"Completion failed: {e}") from e

        try:
            content = response.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            raise BackendError(self.name, f"Unexpected response shape: {e}") from e

        if not content.strip():
            raise BackendError(self.name, "Empty response")

        if response.usage:
            logger.debug(
                "%s usage: %s prompt / %s completion tokens",
                self.name,
                response.usage.prompt_tokens,
                response.usage.completion_tokens,
            )

        return content


def create_backends(config: LLMConfig) -> list[LiteLLMBackend]:
    """Create one backend per configured tier, in tier order."""
    return [LiteLLMBackend(config, model) for model in config.tiers]
