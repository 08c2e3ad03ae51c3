from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gelora_quiz.models.quiz_session import QuizSession
from gelora_quiz.models.user_answer import UserAnswer
from gelora_quiz.schemas.submission import QuizResult, UserIdentity


async def create_quiz_session(
    session: AsyncSession,
    result: QuizResult,
    user: UserIdentity,
) -> QuizSession:
    """완료 기록과 문항별 답안을 한 트랜잭션으로 저장"""
    quiz_session = QuizSession(
        quiz_id=result.quiz_id,
        fid=user.fid,
        username=user.username,
        display_name=user.display_name,
        profile_image=user.profile_image,
        score=result.score,
        correct_answers=result.correct_answers,
        total_questions=result.total_questions,
        time_spent=result.time_spent,
        completed_at=result.completed_at,
        is_completed=True,
    )
    quiz_session.answers = [
        UserAnswer(
            question_id=answer.question_id,
            selected_option=answer.selected_option,
            is_correct=answer.is_correct,
            time_spent=answer.time_spent,
        )
        for answer in result.answers
    ]
    session.add(quiz_session)
    await session.commit()
    return quiz_session


async def get_completed_sessions_by_quiz(
    session: AsyncSession,
    quiz_id: str,
) -> Sequence[QuizSession]:
    """퀴즈의 완료 기록 전체 조회 (순위는 호출 측에서 계산)"""
    stmt = select(QuizSession).where(
        QuizSession.quiz_id == quiz_id,
        QuizSession.is_completed.is_(True),
    ).order_by(
        QuizSession.score.desc(),
        QuizSession.time_spent,
        QuizSession.completed_at,
        QuizSession.id,
    )
    result = await session.execute(stmt)
    return result.scalars().all()
