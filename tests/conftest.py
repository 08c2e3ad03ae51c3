"""테스트 공통 픽스처"""
import json
import os
from datetime import datetime, timezone

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gelora_quiz.data.sample_quizzes import CATEGORIES, SAMPLE_QUIZZES
from gelora_quiz.main import app
from gelora_quiz.models import Base, Category, Question, Quiz, QuizSession, get_db


@pytest.fixture
async def test_engine(tmp_path):
    """테스트용 SQLite 엔진 (파일 DB, TestClient 스레드와 공유)"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_session_maker(test_engine):
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
async def test_db_session(test_session_maker):
    async with test_session_maker() as session:
        yield session


@pytest.fixture
def client(test_session_maker):
    """get_db를 테스트 DB로 대체한 TestClient"""
    async def override_get_db():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.rate_limiter.reset()


async def _add_sample_quiz(session, quiz_id: str = "crypto-basics", is_active: bool = True) -> Quiz:
    """샘플 퀴즈 한 개를 카테고리, 문항과 함께 저장"""
    data = next(q for q in SAMPLE_QUIZZES if q["id"] == quiz_id)
    category = next(c for c in CATEGORIES if c["id"] == data["category_id"])
    session.add(Category(**category))

    quiz = Quiz(
        id=data["id"],
        title=data["title"],
        description=data["description"],
        category_id=data["category_id"],
        difficulty=data["difficulty"],
        time_limit=data["time_limit"],
        total_questions=len(data["questions"]),
        image_url=data["image_url"],
        is_active=is_active,
    )
    session.add(quiz)
    for order_index, question in enumerate(data["questions"]):
        session.add(Question(
            id=question["id"],
            quiz_id=data["id"],
            text=question["text"],
            options=json.dumps(question["options"]),
            correct_answer=question["correct_answer"],
            explanation=question["explanation"],
            order_index=order_index,
        ))
    await session.commit()
    return quiz


async def _add_completed_session(
    session,
    quiz_id: str,
    fid: int,
    score: int,
    time_spent: float,
    completed_at: datetime | None = None,
    username: str | None = None,
) -> QuizSession:
    record = QuizSession(
        quiz_id=quiz_id,
        fid=fid,
        username=username,
        score=score,
        correct_answers=0,
        total_questions=5,
        time_spent=time_spent,
        completed_at=completed_at or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
        is_completed=True,
    )
    session.add(record)
    await session.commit()
    return record


@pytest.fixture
async def sample_quiz(test_db_session):
    """Crypto Basics (5문항) 저장"""
    return await _add_sample_quiz(test_db_session)


@pytest.fixture
def add_quiz(test_db_session):
    """샘플 퀴즈 저장 헬퍼: await add_quiz("web3-advanced", is_active=False)"""
    async def _add(quiz_id: str = "crypto-basics", is_active: bool = True) -> Quiz:
        return await _add_sample_quiz(test_db_session, quiz_id, is_active)
    return _add


@pytest.fixture
def add_completed_session(test_db_session):
    """완료 기록 저장 헬퍼"""
    async def _add(quiz_id: str, fid: int, score: int, time_spent: float, **kwargs) -> QuizSession:
        return await _add_completed_session(test_db_session, quiz_id, fid, score, time_spent, **kwargs)
    return _add
