"""
Failure taxonomy for solution generation.

Every failure is local to one generation request. Routers map the
`category` to an HTTP status; nothing here retries.
"""

from typing import Optional


class SolutionGenerationError(Exception):
    """Base class for all solution generation failures."""

    category = "internal"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class QuestionNotFound(SolutionGenerationError):
    """Question id does not resolve in the store. No remote call is made."""

    category = "not_found"

    def __init__(self, question_id: str):
        super().__init__(f"Question {question_id} not found")
        self.question_id = question_id


class UpstreamCallFailure(SolutionGenerationError):
    """The generative answer service call itself failed."""

    category = "upstream_call_failure"


class ResponseParseFailure(SolutionGenerationError):
    """Model output was not a JSON object with non-empty answer + solution."""

    category = "response_parse_failure"

    def __init__(self, message: str, raw: str, details: Optional[str] = None):
        super().__init__(message, details)
        self.raw = raw


class PersistenceFailure(SolutionGenerationError):
    """A validated pair could not be written back. The pair is dropped."""

    category = "persistence_failure"
