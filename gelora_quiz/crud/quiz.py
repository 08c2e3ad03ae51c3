from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gelora_quiz.models.quiz import Quiz


async def get_quiz_by_id(
    session: AsyncSession,
    quiz_id: str,
    include_inactive: bool = False,
) -> Quiz | None:
    """ID로 퀴즈 조회 (문항, 카테고리 eager load)

    Args:
        session: 데이터베이스 세션
        quiz_id: 퀴즈 ID
        include_inactive: 비활성 퀴즈도 조회할지 여부
    """
    stmt = (
        select(Quiz)
        .where(Quiz.id == quiz_id)
        .options(selectinload(Quiz.questions), selectinload(Quiz.category))
    )
    if not include_inactive:
        stmt = stmt.where(Quiz.is_active.is_(True))

    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_active_quizzes(session: AsyncSession) -> Sequence[Quiz]:
    """활성 퀴즈 목록 (최신순)"""
    stmt = (
        select(Quiz)
        .where(Quiz.is_active.is_(True))
        .options(selectinload(Quiz.questions), selectinload(Quiz.category))
        .order_by(Quiz.created_at.desc(), Quiz.id)
    )
    result = await session.execute(stmt)
    return result.scalars().all()
