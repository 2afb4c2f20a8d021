"""
Pydantic schemas for request/response validation
Separate from SQLAlchemy models for clean API contracts
"""

from pydantic import BaseModel, Field, ConfigDict, AliasChoices
from typing import Optional, List
from datetime import datetime


# ==========================================
# REFERENCE DATA SCHEMAS
# ==========================================

class TopicResponse(BaseModel):
    """Schema for Topic response"""
    id: str
    name: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PartResponse(BaseModel):
    """Schema for Part response"""
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class SlotResponse(BaseModel):
    """Schema for Slot response"""
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


# ==========================================
# QUESTION SCHEMAS
# ==========================================

class OptionSchema(BaseModel):
    id: str = Field(..., description="Option label (A, B, C, D)")
    text: str = Field(..., description="Option text")


class QuestionResponse(BaseModel):
    """Question with its reference data resolved"""
    id: str
    topic_id: str
    part_id: Optional[str] = None
    slot_id: Optional[str] = None
    question_text: str
    options: List[OptionSchema]
    correct_option_ids: Optional[List[str]] = None
    answer: Optional[str] = None
    solution: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    topic: Optional[TopicResponse] = None
    part: Optional[PartResponse] = None
    slot: Optional[SlotResponse] = None

    model_config = ConfigDict(from_attributes=True)


class QuestionListResponse(BaseModel):
    """Paginated question listing plus solved/unsolved counters"""
    total: int = Field(..., description="Questions matching the status filter")
    solved: int
    unsolved: int
    questions: List[QuestionResponse]


# ==========================================
# SOLUTION GENERATION SCHEMAS
# ==========================================

class GenerateSolutionRequest(BaseModel):
    """Trigger AI solution generation for one question"""
    question_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("questionId", "question_id"),
        description="Identifier of the question to solve",
    )


class GeneratedSolution(BaseModel):
    """Validated answer/solution pair returned by the model"""
    answer: str = Field(..., description="Correct option id(s) wrapped as \\text{...}")
    solution: str = Field(..., description="Step-by-step explanation")


class GenerateSolutionResponse(BaseModel):
    """Successful generation: refreshed record + generation timestamp"""
    message: str
    question: QuestionResponse
    generated_at: datetime = Field(..., serialization_alias="generatedAt")
