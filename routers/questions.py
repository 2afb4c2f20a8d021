"""
Question bank read endpoints.
Lists questions (solved / unsolved / all) with their topic notes and part/slot
names, plus the topic, part and slot reference lists used for filtering.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import crud
from database.database import get_db
from database.schemas import (
    PartResponse,
    QuestionListResponse,
    QuestionResponse,
    SlotResponse,
    TopicResponse,
)

router = APIRouter(prefix="/api", tags=["questions"])


@router.get("/questions", response_model=QuestionListResponse)
def list_questions(
    status: Literal["all", "solved", "unsolved"] = "unsolved",
    topic_id: Optional[str] = None,
    part_id: Optional[str] = None,
    slot_id: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """List questions newest first, filtered by solution status and grouping."""
    questions, total, solved, unsolved = crud.list_questions(
        db,
        status=status,
        topic_id=topic_id,
        part_id=part_id,
        slot_id=slot_id,
        skip=offset,
        limit=limit,
    )
    return QuestionListResponse(
        total=total,
        solved=solved,
        unsolved=unsolved,
        questions=[QuestionResponse.model_validate(q) for q in questions],
    )


@router.get("/questions/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, db: Session = Depends(get_db)):
    """Get a single question with its stored answer/solution."""
    q = crud.get_question(db, question_id)
    if not q:
        raise HTTPException(status_code=404, detail="Question not found")
    return q


@router.get("/topics", response_model=List[TopicResponse])
def list_topics(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return crud.get_topics(db, skip=offset, limit=limit)


@router.get("/parts", response_model=List[PartResponse])
def list_parts(db: Session = Depends(get_db)):
    return crud.get_parts(db)


@router.get("/slots", response_model=List[SlotResponse])
def list_slots(db: Session = Depends(get_db)):
    return crud.get_slots(db)
