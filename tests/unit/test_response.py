"""Unit tests for model reply coercion."""

import logging

import pytest

from codebrief.errors import MalformedResponseError
from codebrief.llm.response import coerce_response, extract_json_candidate
from tests.fixtures import SAMPLE_RECORD, SAMPLE_REPLY


class TestExtractJsonCandidate:
    """Tests for extract_json_candidate."""

    def test_strips_prose_and_fences(self) -> None:
        raw = 'Sure!\n```json\n{"a": {"b": 1}}\n```\nHope this helps'
        assert extract_json_candidate(raw) == '{"a": {"b": 1}}'

    def test_no_braces_returns_input(self) -> None:
        assert extract_json_candidate("no json here") == "no json here"

    def test_close_before_open_returns_input(self) -> None:
        assert extract_json_candidate("} oops {") == "} oops {"

    def test_uses_outermost_pair(self) -> None:
        """Two objects yield one slice spanning both; parsing then fails."""
        raw = '{"a": 1} and {"b": 2}'
        assert extract_json_candidate(raw) == raw


class TestCoerceResponse:
    """Tests for coerce_response."""

    def test_fenced_reply(self) -> None:
        raw = 'here is your answer:\n```json\n{"complexity_score":42}\n```\nthanks'

        record = coerce_response(raw)

        assert record.complexity_score == 42
        assert record.tech_stack_analysis == ()
        assert record.interview_questions == ()
        assert record.red_flags == ()
        assert record.resume_bullets == ()
        assert record.star_intro == ""

    def test_full_reply(self) -> None:
        record = coerce_response(SAMPLE_REPLY)

        assert record.to_dict() == SAMPLE_RECORD

    def test_no_braces_is_malformed(self) -> None:
        raw = "I could not analyze this project."

        with pytest.raises(MalformedResponseError) as exc_info:
            coerce_response(raw)

        assert exc_info.value.raw_text == raw
        assert exc_info.value.parse_error
        assert "Failed to parse AI response" in exc_info.value.message

    def test_invalid_json_between_braces(self) -> None:
        raw = "{star_intro: unquoted}"

        with pytest.raises(MalformedResponseError) as exc_info:
            coerce_response(raw)

        assert exc_info.value.raw_text == raw

    def test_two_objects_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError):
            coerce_response('{"a": 1} and {"b": 2}')

    def test_non_object_json_is_malformed(self) -> None:
        with pytest.raises(MalformedResponseError, match="expected a JSON object"):
            coerce_response("42")

    def test_empty_object_gets_defaults(self) -> None:
        record = coerce_response("{}")

        assert record.complexity_score == 0
        assert record.project_type == ""
        assert record.mermaid_diagram == ""

    def test_missing_keys_logged_at_debug(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="codebrief.llm.response"):
            coerce_response('{"complexity_score": 10, "project_type": "Script"}')

        messages = [r.getMessage() for r in caplog.records]
        assert any("red_flags" in m and "resume_bullets" in m for m in messages)
        assert not any("complexity_score" in m for m in messages)

    def test_complete_reply_logs_nothing_missing(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="codebrief.llm.response"):
            coerce_response(SAMPLE_REPLY)

        assert not any("missing" in r.getMessage() for r in caplog.records)
