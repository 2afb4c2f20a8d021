"""
SQLAlchemy models for the question store
Topic / Part / Slot reference data → Question

Questions carry their options inline as JSON and hold the AI-generated
answer + solution pair once one has been produced.
"""

from sqlalchemy import Column, String, ForeignKey, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from database.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


# ==========================================
# REFERENCE DATA: TOPIC, PART, SLOT
# ==========================================

class Topic(Base):
    """
    Syllabus topic. Free-text notes are fed to the model as reference material
    when answering any question filed under this topic.
    """
    __tablename__ = "topics"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    questions = relationship("Question", back_populates="topic")

    def __repr__(self):
        return f"<Topic(id='{self.id}', name='{self.name}')>"


class Part(Base):
    """Exam part a question belongs to (e.g. 'Part A')."""
    __tablename__ = "parts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    questions = relationship("Question", back_populates="part")

    def __repr__(self):
        return f"<Part(id='{self.id}', name='{self.name}')>"


class Slot(Base):
    """Exam slot / sitting a question was asked in."""
    __tablename__ = "slots"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    questions = relationship("Question", back_populates="slot")

    def __repr__(self):
        return f"<Slot(id='{self.id}', name='{self.name}')>"


# ==========================================
# QUESTIONS
# ==========================================

class Question(Base):
    """
    Multiple-choice question filed topic-wise.
    answer + solution are written together by the solution generator and are
    both NULL until the first generation.
    """
    __tablename__ = "questions_topic_wise"

    id = Column(String(36), primary_key=True, default=_new_id)
    topic_id = Column(String(36), ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True)
    part_id = Column(String(36), ForeignKey("parts.id", ondelete="SET NULL"), nullable=True, index=True)
    slot_id = Column(String(36), ForeignKey("slots.id", ondelete="SET NULL"), nullable=True, index=True)
    question_text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # [{"id":"A","text":"..."},{"id":"B","text":"..."},...]
    correct_option_ids = Column(JSON, nullable=True)  # ["A", "C"]
    answer = Column(Text, nullable=True)  # "\text{A, C}"
    solution = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    topic = relationship("Topic", back_populates="questions")
    part = relationship("Part", back_populates="questions")
    slot = relationship("Slot", back_populates="questions")

    @property
    def is_solved(self) -> bool:
        return bool(self.answer) and bool(self.solution)

    def __repr__(self):
        return f"<Question(id='{self.id}', topic_id='{self.topic_id}', solved={self.is_solved})>"
