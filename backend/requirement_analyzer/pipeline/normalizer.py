"""
Response normalizer (LLM trust boundary).

Model output is cleaned by an ordered list of pure text transforms, then
parsed and validated into an AnalysisIR. Each transform targets one kind of
noise models commonly add around otherwise valid JSON.
"""

import json
import logging
import re
from typing import Callable, List

from pydantic import ValidationError

from requirement_analyzer.errors import (
    IncompleteResponseError,
    InvalidStructureError,
    MalformedJSONError,
)
from requirement_analyzer.ir.analysis_ir import AnalysisIR

logger = logging.getLogger(__name__)

_TRAILING_FENCE = re.compile(r"(?:\s*```)+\s*$")
_FENCE_OPENER = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


# ============================================================
# TEXT TRANSFORMS
# ============================================================

def strip_whitespace(text: str) -> str:
    """Leading/trailing blank lines and spaces."""
    return text.strip()


def ensure_complete(text: str) -> str:
    """
    Truncated output (max_tokens reached mid-object).
    The text must end with `}`, ignoring a closing code fence.
    Raises IncompleteResponseError; never attempts a parse.
    """
    if not _TRAILING_FENCE.sub("", text).endswith("}"):
        logger.error("[Normalizer] Truncated response detected. Last 100 chars: %r", text[-100:])
        raise IncompleteResponseError()
    return text


def strip_code_fences(text: str) -> str:
    """```json ... ``` wrappers, anywhere in the text."""
    if "```" not in text:
        return text
    return _FENCE.sub("", _FENCE_OPENER.sub("", text))


def bound_to_braces(text: str) -> str:
    """Commentary before the first `{` or after the last `}`."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and first < last:
        return text[first:last + 1]
    return text


def remove_trailing_commas(text: str) -> str:
    """`[{"a": 1},]` and `{"a": 1,}`."""
    return _TRAILING_COMMA.sub(r"\1", text)


CLEANUP_STEPS: List[Callable[[str], str]] = [
    strip_whitespace,
    ensure_complete,
    strip_code_fences,
    bound_to_braces,
    remove_trailing_commas,
]


def clean_response(text: str) -> str:
    for step in CLEANUP_STEPS:
        text = step(text)
    return text


# ============================================================
# PARSER
# ============================================================

def parse_analysis(content: str) -> AnalysisIR:
    """
    Clean, parse and validate raw model output.

    Raises:
    - IncompleteResponseError: output does not end with `}`
    - MalformedJSONError: cleaned text is not JSON
    - InvalidStructureError: no `procesos` array, or malformed items
    """
    logger.info("[Normalizer] Parsing AI response (%d chars)", len(content))

    cleaned = clean_response(content)
    logger.info("[Normalizer] Cleaned content length: %d chars", len(cleaned))

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("procesos"), list):
        raise InvalidStructureError(
            "The model did not return the expected structure (missing processes array)"
        )

    try:
        analysis = AnalysisIR.model_validate(data)
    except ValidationError as e:
        raise InvalidStructureError(
            f"The model returned malformed process items: {e.error_count()} error(s)\n{e}"
        ) from e

    logger.info(
        "[Normalizer] Parsed successfully: %d processes, %d subprocesses, %d use cases",
        len(analysis.processes),
        analysis.subprocess_count,
        analysis.use_case_count,
    )
    return analysis
