"""
CRUD operations for the question store
All database operations go through these functions
"""

from datetime import datetime, timezone
from sqlalchemy import and_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional, Tuple
from database import models


def _with_context(query):
    return query.options(
        joinedload(models.Question.topic),
        joinedload(models.Question.part),
        joinedload(models.Question.slot),
    )


# ==========================================
# QUESTION READS
# ==========================================

def get_question(db: Session, question_id: str) -> Optional[models.Question]:
    """Get question by ID with topic, part and slot loaded"""
    return _with_context(db.query(models.Question)).filter(
        models.Question.id == question_id
    ).first()


def get_reference_questions(
    db: Session,
    topic_id: str,
    part_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
    limit: int = 3,
) -> List[models.Question]:
    """
    Already-solved questions from the same topic (and part, when the question
    has one) to show the model as worked examples.
    """
    if limit <= 0:
        return []

    query = db.query(models.Question).filter(
        models.Question.topic_id == topic_id,
        _solved_clause(),
    )
    if part_id:
        query = query.filter(models.Question.part_id == part_id)
    if exclude_id:
        query = query.filter(models.Question.id != exclude_id)

    return query.order_by(models.Question.updated_at.desc()).limit(limit).all()


def _solved_clause():
    # empty strings count as unsolved, same as NULL
    return and_(
        models.Question.answer.isnot(None),
        models.Question.answer != "",
        models.Question.solution.isnot(None),
        models.Question.solution != "",
    )


def _status_filter(query, status: str):
    solved = _solved_clause()
    if status == "solved":
        return query.filter(solved)
    if status == "unsolved":
        return query.filter(~solved)
    return query


def list_questions(
    db: Session,
    status: str = "all",
    topic_id: Optional[str] = None,
    part_id: Optional[str] = None,
    slot_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> Tuple[List[models.Question], int, int, int]:
    """
    List questions newest first.

    Returns (page, total matching status, solved count, unsolved count); the
    counters honour the topic/part/slot filters but not the status filter.
    """
    base = db.query(models.Question)
    if topic_id:
        base = base.filter(models.Question.topic_id == topic_id)
    if part_id:
        base = base.filter(models.Question.part_id == part_id)
    if slot_id:
        base = base.filter(models.Question.slot_id == slot_id)

    solved = _status_filter(base, "solved").count()
    unsolved = _status_filter(base, "unsolved").count()

    filtered = _status_filter(base, status)
    total = filtered.count()
    page = _with_context(filtered).order_by(
        models.Question.created_at.desc(), models.Question.id
    ).offset(skip).limit(limit).all()

    return page, total, solved, unsolved


# ==========================================
# QUESTION WRITES
# ==========================================

def save_question_solution(
    db: Session,
    question_id: str,
    answer: str,
    solution: str,
) -> bool:
    """
    Overwrite answer + solution + updated_at in a single-row UPDATE.

    Returns False when the id no longer resolves. Backend errors roll the
    session back and propagate.
    """
    try:
        updated = db.query(models.Question).filter(
            models.Question.id == question_id
        ).update(
            {
                models.Question.answer: answer,
                models.Question.solution: solution,
                models.Question.updated_at: datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    return bool(updated)


def update_question_solution(
    db: Session,
    question_id: str,
    answer: str,
    solution: str,
) -> Optional[models.Question]:
    """Save the pair and return the refreshed record (None if the id is gone)."""
    if not save_question_solution(db, question_id, answer, solution):
        return None

    db.expire_all()
    return get_question(db, question_id)


# ==========================================
# REFERENCE DATA
# ==========================================

def get_topics(db: Session, skip: int = 0, limit: int = 100) -> List[models.Topic]:
    """Get all topics with pagination"""
    return db.query(models.Topic).order_by(models.Topic.name).offset(skip).limit(limit).all()


def get_parts(db: Session) -> List[models.Part]:
    """Get all parts"""
    return db.query(models.Part).order_by(models.Part.name).all()


def get_slots(db: Session) -> List[models.Slot]:
    """Get all slots"""
    return db.query(models.Slot).order_by(models.Slot.name).all()
