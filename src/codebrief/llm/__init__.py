"""LLM integration module for codebrief.

Provides LiteLLM-backed model tiers, the cascading orchestrator that walks
them, the instruction prompt, and recovery of the structured record from the
model's reply.
"""

from codebrief.llm.client import LiteLLMBackend, TextBackend, create_backends
from codebrief.llm.orchestrator import InferenceAttempt, InferenceOrchestrator, InferenceResult
from codebrief.llm.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    CODE_CONTEXT_PREFIX,
    RECORD_KEYS,
    build_prompt_parts,
)
from codebrief.llm.response import coerce_response, extract_json_candidate
from codebrief.models.llm_config import VALID_PROVIDERS, LLMConfig

__all__ = [
    "ANALYSIS_SYSTEM_PROMPT",
    "CODE_CONTEXT_PREFIX",
    "InferenceAttempt",
    "InferenceOrchestrator",
    "InferenceResult",
    "LLMConfig",
    "LiteLLMBackend",
    "RECORD_KEYS",
    "TextBackend",
    "VALID_PROVIDERS",
    "build_prompt_parts",
    "coerce_response",
    "create_backends",
    "extract_json_candidate",
]
