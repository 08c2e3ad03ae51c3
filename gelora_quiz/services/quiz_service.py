import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from gelora_quiz.core.config import settings
from gelora_quiz.crud import quiz as quiz_crud, quiz_session as quiz_session_crud
from gelora_quiz.exceptions import InvalidSubmissionError, QuizNotFoundError
from gelora_quiz.models.quiz import Quiz
from gelora_quiz.models.quiz_session import QuizSession
from gelora_quiz.schemas import leaderboard as leaderboard_schema, quiz as quiz_schema, submission as submission_schema
from gelora_quiz.services import scoring

logger = logging.getLogger(__name__)


def _to_quiz_response(quiz: Quiz) -> quiz_schema.QuizResponse:
    """풀이용 퀴즈 응답 (정답/해설 제거)"""
    response = quiz_schema.QuizResponse.model_validate(quiz)
    for question in response.questions:
        question.correct_answer = None
        question.explanation = None
    return response


def _to_rows(sessions: Sequence[QuizSession]) -> list[leaderboard_schema.LeaderboardRow]:
    return [
        leaderboard_schema.LeaderboardRow(
            session_id=s.id,
            user_id=s.fid,
            username=s.username,
            display_name=s.display_name,
            profile_image=s.profile_image,
            score=s.score,
            time_spent=s.time_spent,
            completed_at=s.completed_at,
        )
        for s in sessions
    ]


async def _load_leaderboard_rows(
    session: AsyncSession,
    quiz_id: str,
) -> list[leaderboard_schema.LeaderboardRow]:
    sessions = await quiz_session_crud.get_completed_sessions_by_quiz(session, quiz_id)
    return _to_rows(sessions)


async def list_quizzes(session: AsyncSession) -> quiz_schema.QuizListResponse:
    """활성 퀴즈 목록"""
    quizzes = await quiz_crud.get_active_quizzes(session)
    responses = [_to_quiz_response(q) for q in quizzes]
    logger.info(f"퀴즈 목록 조회: count={len(responses)}")
    return quiz_schema.QuizListResponse(quizzes=responses, count=len(responses))


async def get_quiz_detail(
    session: AsyncSession,
    quiz_id: str,
) -> quiz_schema.QuizDetailResponse:
    """퀴즈 상세 + 리더보드"""
    quiz = await quiz_crud.get_quiz_by_id(session, quiz_id)
    if not quiz:
        raise QuizNotFoundError(quiz_id)

    rows = await _load_leaderboard_rows(session, quiz_id)
    leaderboard = scoring.build_leaderboard(
        rows,
        limit=settings.leaderboard_limit,
        tie_break=settings.completion_tie_break,
    )
    quiz_response = _to_quiz_response(quiz)

    return quiz_schema.QuizDetailResponse(
        quiz=quiz_response,
        leaderboard=leaderboard,
        meta=quiz_schema.QuizDetailMeta(
            questions_count=len(quiz_response.questions),
            leaderboard_count=len(leaderboard),
        ),
    )


async def get_leaderboard(
    session: AsyncSession,
    quiz_id: str,
    limit: int | None = None,
) -> leaderboard_schema.LeaderboardResponse:
    """퀴즈 리더보드 (조회 시마다 순위 재계산)"""
    quiz = await quiz_crud.get_quiz_by_id(session, quiz_id)
    if not quiz:
        raise QuizNotFoundError(quiz_id)

    rows = await _load_leaderboard_rows(session, quiz_id)
    leaderboard = scoring.build_leaderboard(
        rows,
        limit=limit or settings.leaderboard_limit,
        tie_break=settings.completion_tie_break,
    )
    return leaderboard_schema.LeaderboardResponse(
        quiz_id=quiz_id,
        leaderboard=leaderboard,
        total=len(rows),
    )


async def submit_quiz(
    session: AsyncSession,
    request: submission_schema.QuizSubmitRequest,
) -> submission_schema.QuizSubmitResponse:
    """퀴즈 제출: 채점 → 저장 → 순위 산정"""
    quiz_id = request.quiz_id.strip()
    if not quiz_id:
        raise InvalidSubmissionError("quizId is required")

    quiz = await quiz_crud.get_quiz_by_id(session, quiz_id)
    if not quiz:
        raise QuizNotFoundError(quiz_id)

    definition = quiz_schema.QuizDefinition.model_validate(quiz)
    result = scoring.grade_submission(
        definition,
        request.answers,
        request.time_spent,
        user_id=request.user.fid,
    )

    try:
        quiz_session = await quiz_session_crud.create_quiz_session(session, result, request.user)
    except Exception as e:
        logger.error(f"퀴즈 결과 저장 실패: {e}, quiz_id={quiz_id}, fid={request.user.fid}", exc_info=True)
        await session.rollback()
        raise

    rows = await _load_leaderboard_rows(session, quiz_id)
    existing = [row for row in rows if row.session_id != quiz_session.id]
    position = scoring.rank_submission(result, existing, tie_break=settings.completion_tie_break)
    result.rank = position.rank
    result.percentile = position.percentile

    leaderboard = scoring.build_leaderboard(
        rows,
        limit=settings.leaderboard_limit,
        tie_break=settings.completion_tie_break,
    )

    logger.info(
        f"퀴즈 제출 완료: quiz_id={quiz_id}, fid={request.user.fid}, score={result.score}, "
        f"rank={position.rank}/{position.participants}, percentile={position.percentile}"
    )
    return submission_schema.QuizSubmitResponse(
        session_id=quiz_session.id,
        result=result,
        leaderboard=leaderboard,
    )
