"""
Shared test fixtures for the test suite.

Provides an in-memory SQLite question store, a seeded question bank, a fake
answer client standing in for the remote model, and a FastAPI TestClient
wired to both.
"""

import os

# Point the app at SQLite BEFORE anything imports database.database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.database import Base, get_db
from database.models import Part, Question, Slot, Topic
from generation.solution_generator import SolutionGenerator


class FakeAnswerClient:
    """
    Stand-in for AnswerClient.

    Returns `response` for every prompt (or raises `error` if set) and records
    each prompt it was given.
    """

    def __init__(self, response: str = "", error: Exception = None):
        self.response = response
        self.error = error
        self.prompts = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


OLD_TIMESTAMP = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared across threads."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """
    Question bank used across tests.

    - Q1: the worked scenario (options 2/4/6, notes on even-number sums), unsolved
    - Q2, Q3: solved siblings of Q1 (same topic + part)
    - Q4: solved, same topic but a different part
    - Q5: unsolved, topic without notes, no part/slot
    """
    even = Topic(id="T1", name="Series", notes="sum of first n even numbers")
    bare = Topic(id="T2", name="Misc", notes=None)
    part_a = Part(id="P1", name="Part A")
    part_b = Part(id="P2", name="Part B")
    slot = Slot(id="S1", name="Morning Slot")

    questions = [
        Question(
            id="Q1",
            topic_id="T1",
            part_id="P1",
            slot_id="S1",
            question_text="If the sum of the first n even numbers is 6, what is 2n?",
            options=[{"id": "A", "text": "2"}, {"id": "B", "text": "4"}, {"id": "C", "text": "6"}],
            correct_option_ids=["B"],
            created_at=datetime(2024, 1, 5),
            updated_at=OLD_TIMESTAMP,
        ),
        Question(
            id="Q2",
            topic_id="T1",
            part_id="P1",
            question_text="What is the sum of the first 3 even numbers?",
            options=[{"id": "A", "text": "12"}, {"id": "B", "text": "6"}],
            answer="\\text{A}",
            solution="2 + 4 + 6 = 12",
            created_at=datetime(2024, 1, 4),
            updated_at=OLD_TIMESTAMP,
        ),
        Question(
            id="Q3",
            topic_id="T1",
            part_id="P1",
            question_text="Sum of first n even numbers equals?",
            options=[{"id": "A", "text": "n^2"}, {"id": "B", "text": "n(n+1)"}],
            answer="\\text{B}",
            solution="2(1 + ... + n) = n(n+1)",
            created_at=datetime(2024, 1, 3),
            updated_at=OLD_TIMESTAMP,
        ),
        Question(
            id="Q4",
            topic_id="T1",
            part_id="P2",
            question_text="Which numbers are even?",
            options=[{"id": "A", "text": "3"}, {"id": "B", "text": "8"}],
            answer="\\text{B}",
            solution="8 is divisible by 2",
            created_at=datetime(2024, 1, 2),
            updated_at=OLD_TIMESTAMP,
        ),
        Question(
            id="Q5",
            topic_id="T2",
            question_text="Pick the prime numbers.",
            options=[{"id": "A", "text": "2"}, {"id": "B", "text": "9"}, {"id": "C", "text": "11"}],
            created_at=datetime(2024, 1, 1),
            updated_at=OLD_TIMESTAMP,
        ),
    ]

    db.add_all([even, bare, part_a, part_b, slot, *questions])
    db.commit()
    return {q.id: q for q in questions}


@pytest.fixture
def fake_client():
    return FakeAnswerClient(
        response='{"answer": "\\\\text{B}", "solution": "Step 1: 2 + 4 = 6 so n = 2. Step 2: therefore B"}'
    )


@pytest.fixture
def client(session_factory, fake_client, seeded):
    """
    TestClient with the database and the answer client swapped for test doubles.
    The lifespan (create_all on the real engine) is not triggered.
    """
    from solution_api import app
    from routers.solutions import get_solution_generator

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    def override_generator(db: Session = Depends(get_db)):
        return SolutionGenerator(db, fake_client)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_solution_generator] = override_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_client():
    """Factory for one-off fake answer clients."""
    return FakeAnswerClient
