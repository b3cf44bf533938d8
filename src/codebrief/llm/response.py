"""Recovery of the structured record from a free-form model reply.

Models wrap JSON in prose or code fences despite instructions, so the
candidate object is the slice from the first "{" to the last "}". Anything
that does not parse as a JSON object is reported with the raw reply attached.
"""

import json
import logging

from codebrief.errors import MalformedResponseError
from codebrief.llm.prompts import RECORD_KEYS
from codebrief.models.analysis import AnalysisRecord

logger = logging.getLogger(__name__)


def extract_json_candidate(raw_text: str) -> str:
    """Slice the candidate JSON object out of a reply.

    Args:
        raw_text: Model reply

    Returns:
        Text from the first "{" to the last "}" inclusive, or the reply
        unchanged when no such pair exists
    """
    first_open = raw_text.find("{")
    last_close = raw_text.rfind("}")
    if first_open == -1 or last_close == -1 or last_close < first_open:
        return raw_text
    return raw_text[first_open : last_close + 1]


def coerce_response(raw_text: str) -> AnalysisRecord:
    """Parse a model reply into an AnalysisRecord.

    Args:
        raw_text: Model reply

    Returns:
        Normalized AnalysisRecord

    Raises:
        MalformedResponseError: If no JSON object can be parsed
    """
    candidate = extract_json_candidate(raw_text)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("JSON parse error: %s", e)
        raise MalformedResponseError(raw_text, str(e)) from e

    if not isinstance(data, dict):
        logger.error("Model reply is JSON but not an object: %s", type(data).__name__)
        raise MalformedResponseError(raw_text, f"expected a JSON object, got {type(data).__name__}")

    missing = [key for key in RECORD_KEYS if key not in data]
    if missing:
        logger.debug("Model reply is missing %s; using defaults", ", ".join(missing))

    return AnalysisRecord.from_dict(data)
