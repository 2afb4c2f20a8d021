"""
Parsing and validation of the model's answer/solution output.

Hard validation (parse_solution_response) decides whether a response is
usable. The markup check (check_answer_markup) is advisory: it only logs.
"""

import json
import logging
import re

from database.schemas import GeneratedSolution
from generation.errors import ResponseParseFailure

log = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_CLOSE_FENCE = re.compile(r"\n?[ \t]*```$")

REQUIRED_KEYS = ("answer", "solution")


def strip_code_fence(text: str) -> str:
    """Trim whitespace and drop a surrounding ``` / ```json fence if present."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _OPEN_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSE_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_solution_response(raw: str) -> GeneratedSolution:
    """
    Parse raw model text into a validated answer/solution pair.

    Raises:
        ResponseParseFailure: not JSON, not an object, or a required key is
                              missing, non-string or blank
    """
    cleaned = strip_code_fence(raw)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseFailure(
            "Failed to parse AI response. Please try again.", raw=raw, details=f"Invalid JSON: {e}"
        )

    if not isinstance(data, dict):
        raise ResponseParseFailure(
            "Failed to parse AI response. Please try again.",
            raw=raw,
            details=f"Expected a JSON object, got {type(data).__name__}",
        )

    for key in REQUIRED_KEYS:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ResponseParseFailure(
                "Failed to parse AI response. Please try again.",
                raw=raw,
                details=f"Invalid response structure: missing or empty '{key}'",
            )

    return GeneratedSolution(answer=data["answer"], solution=data["solution"])


def check_answer_markup(answer: str) -> bool:
    """
    Advisory check that the answer uses the \\text{...} wrapper.
    Logs a warning when it doesn't; never raises.
    """
    ok = "\\text{" in answer and "}" in answer
    if not ok:
        log.warning(f"Answer format may be incorrect: {answer!r}")
    return ok
