"""Unit tests for tiered inference."""

import logging

import pytest

from codebrief.errors import AllTiersExhaustedError
from codebrief.llm.orchestrator import InferenceAttempt, InferenceOrchestrator
from codebrief.llm.prompts import build_prompt_parts
from tests.fixtures import SAMPLE_REPLY, FakeBackend


class TestInferenceOrchestrator:
    """Tests for InferenceOrchestrator."""

    def test_requires_a_backend(self) -> None:
        with pytest.raises(ValueError, match="At least one"):
            InferenceOrchestrator([])

    def test_first_tier_answers(self) -> None:
        a = FakeBackend("tier-a", reply=SAMPLE_REPLY)
        b = FakeBackend("tier-b", reply="unused")

        result = InferenceOrchestrator([a, b]).run("instruction", "corpus")

        assert result.text == SAMPLE_REPLY
        assert result.model == "tier-a"
        assert len(a.calls) == 1
        assert b.calls == []

    def test_falls_through_to_next_tier(self) -> None:
        a = FakeBackend("tier-a", error="Rate limit exceeded")
        b = FakeBackend("tier-b", reply="{}")
        c = FakeBackend("tier-c", reply="unused")

        result = InferenceOrchestrator([a, b, c]).run("instruction", "corpus")

        assert result.text == "{}"
        assert result.model == "tier-b"
        assert len(a.calls) == 1
        assert len(b.calls) == 1
        assert c.calls == []
        assert [attempt.succeeded for attempt in result.attempts] == [False, True]

    def test_every_tier_receives_same_parts(self) -> None:
        a = FakeBackend("tier-a", error="boom")
        b = FakeBackend("tier-b", reply="ok")

        InferenceOrchestrator([a, b]).run("Analyze this.", "--- FILE: x ---")

        expected = build_prompt_parts("Analyze this.", "--- FILE: x ---")
        assert a.calls == [expected]
        assert b.calls == [expected]
        assert expected[1].startswith("CODE CONTEXT:\n")

    def test_all_tiers_fail(self) -> None:
        backends = [
            FakeBackend("tier-a", error="quota exhausted"),
            FakeBackend("tier-b", error="model not found"),
            FakeBackend("tier-c", error="connection reset"),
        ]

        with pytest.raises(AllTiersExhaustedError) as exc_info:
            InferenceOrchestrator(backends).infer("instruction", "corpus")

        error = exc_info.value
        assert [a.tier for a in error.attempts] == ["tier-a", "tier-b", "tier-c"]
        assert "AI model error" in error.message
        for cause in ("quota exhausted", "model not found", "connection reset"):
            assert cause in error.message
        assert all(len(b.calls) == 1 for b in backends)

    def test_single_tier(self) -> None:
        only = FakeBackend("solo", error="down")

        with pytest.raises(AllTiersExhaustedError, match="solo: down"):
            InferenceOrchestrator([only]).run("instruction", "corpus")

    def test_non_backend_error_propagates(self) -> None:
        """Only BackendError counts as a tier failure."""

        class Broken:
            name = "broken"

            def generate(self, parts):
                raise KeyError("programming error")

        fallback = FakeBackend("tier-b", reply="ok")

        with pytest.raises(KeyError):
            InferenceOrchestrator([Broken(), fallback]).run("instruction", "corpus")

        assert fallback.calls == []

    def test_fallback_logged(self, caplog) -> None:
        a = FakeBackend("tier-a", error="quota exhausted")
        b = FakeBackend("tier-b", reply="ok")

        with caplog.at_level(logging.WARNING, logger="codebrief.llm.orchestrator"):
            InferenceOrchestrator([a, b]).run("instruction", "corpus")

        messages = [r.getMessage() for r in caplog.records]
        assert any("tier-a failed, retrying with tier-b" in m for m in messages)

    def test_tiers_property(self) -> None:
        orchestrator = InferenceOrchestrator([FakeBackend("x"), FakeBackend("y")])
        assert orchestrator.tiers == ["x", "y"]


class TestInferenceAttempt:
    """Tests for InferenceAttempt."""

    def test_succeeded(self) -> None:
        assert InferenceAttempt(tier="a", text="ok").succeeded is True
        assert InferenceAttempt(tier="a", error="nope").succeeded is False
