"""
Solution Generator

fetch question → compose prompt → call model → parse/validate → persist

One question per call, run to completion or failure. Two calls for the same
question are not serialised: whichever write lands last wins.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import crud
from database.models import Question
from generation.answer_client import AnswerClient
from generation.errors import PersistenceFailure, QuestionNotFound, ResponseParseFailure
from generation.prompt_builder import build_solution_prompt
from generation.response_parser import check_answer_markup, parse_solution_response

log = logging.getLogger("generation.solutions")

REFERENCE_EXAMPLE_LIMIT = int(os.getenv("REFERENCE_EXAMPLE_LIMIT", "3"))
PROMPT_INCLUDE_GROUPING = os.getenv("PROMPT_INCLUDE_GROUPING", "true").lower() in {"1", "true", "yes", "on"}


@dataclass
class SolutionResult:
    question: Question
    generated_at: datetime


class SolutionGenerator:
    """Generates and stores the answer + solution for a single question."""

    def __init__(
        self,
        db: Session,
        client: AnswerClient,
        reference_limit: int = REFERENCE_EXAMPLE_LIMIT,
        include_grouping: bool = PROMPT_INCLUDE_GROUPING,
    ):
        self.db = db
        self.client = client
        self.reference_limit = reference_limit
        self.include_grouping = include_grouping

    def compose_prompt(self, question_id: str) -> str:
        """Fetch the question + worked examples and build its prompt."""
        question = crud.get_question(self.db, question_id)
        if question is None:
            raise QuestionNotFound(question_id)
        return self._compose(question)

    def _compose(self, question: Question) -> str:
        examples = crud.get_reference_questions(
            self.db,
            topic_id=question.topic_id,
            part_id=question.part_id,
            exclude_id=question.id,
            limit=self.reference_limit,
        )
        notes_available = bool(question.topic and question.topic.notes and question.topic.notes.strip())
        log.info(
            f"[SOLUTION] {question.id}: topic notes available={notes_available}, "
            f"reference examples={len(examples)}"
        )
        return build_solution_prompt(question, examples, include_grouping=self.include_grouping)

    async def generate(self, question_id: str) -> SolutionResult:
        """
        Generate, validate and persist a solution for one question.

        Raises:
            QuestionNotFound:     id does not resolve (no model call made)
            UpstreamCallFailure:  model call failed
            ResponseParseFailure: model output unusable (nothing written)
            PersistenceFailure:   write-back failed (generated pair dropped)
        """
        question = crud.get_question(self.db, question_id)
        if question is None:
            raise QuestionNotFound(question_id)

        log.info(f"[SOLUTION] Generating solution for question {question_id}")
        prompt = self._compose(question)
        # release the read transaction; nothing stays open across the model call
        self.db.rollback()

        raw = await self.client.complete(prompt)
        log.debug(f"[SOLUTION] Raw model response for {question_id}: {raw}")

        try:
            generated = parse_solution_response(raw)
        except ResponseParseFailure as e:
            log.error(f"[SOLUTION] Failed to parse model response for {question_id}: {e} | raw={raw[:500]!r}")
            raise

        check_answer_markup(generated.answer)

        try:
            saved = crud.save_question_solution(
                self.db, question_id, generated.answer, generated.solution
            )
        except SQLAlchemyError as e:
            log.error(f"[SOLUTION] Error saving solution for {question_id}: {e}")
            raise PersistenceFailure("Failed to save solution to database", details=str(e)) from e

        if not saved:
            log.error(f"[SOLUTION] Question {question_id} disappeared before the solution was saved")
            raise PersistenceFailure(
                "Failed to save solution to database",
                details=f"Question {question_id} no longer exists",
            )

        log.info(f"[SOLUTION] Solution saved for question {question_id}")

        # the write is committed; a failure from here on is not a persistence failure
        self.db.expire_all()
        updated = crud.get_question(self.db, question_id)
        return SolutionResult(question=updated, generated_at=datetime.now(timezone.utc))
