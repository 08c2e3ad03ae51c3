"""Quiz Service 테스트"""
import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gelora_quiz.crud import quiz as quiz_crud, quiz_session as quiz_session_crud
from gelora_quiz.exceptions import InvalidQuizDefinitionError, InvalidSubmissionError, QuizNotFoundError
from gelora_quiz.models import Question, Quiz, QuizSession
from gelora_quiz.schemas import submission as submission_schema
from gelora_quiz.services import quiz_service


@pytest.fixture
def mock_db_session():
    """모킹된 DB 세션"""
    session = AsyncMock(spec=AsyncSession)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


def _question(question_id: str, correct_answer: int):
    question = MagicMock(spec=Question)
    question.id = question_id
    question.text = f"{question_id}?"
    question.options = json.dumps(["a", "b", "c", "d"])
    question.correct_answer = correct_answer
    question.explanation = "설명"
    question.image_url = None
    return question


@pytest.fixture
def mock_quiz():
    """모킹된 퀴즈 (3문항, 정답 0/1/2)"""
    quiz = MagicMock(spec=Quiz)
    quiz.id = "quiz-1"
    quiz.title = "테스트 퀴즈"
    quiz.description = "설명"
    quiz.category = None
    quiz.difficulty = "easy"
    quiz.time_limit = 60
    quiz.total_questions = 3
    quiz.image_url = None
    quiz.questions = [_question("q1", 0), _question("q2", 1), _question("q3", 2)]
    return quiz


def _stored_session(session_id: str, fid: int, score: int, time_spent: float, completed_at: datetime):
    record = MagicMock(spec=QuizSession)
    record.id = session_id
    record.fid = fid
    record.username = None
    record.display_name = None
    record.profile_image = None
    record.score = score
    record.time_spent = time_spent
    record.completed_at = completed_at
    return record


def _submit_request(quiz_id: str = "quiz-1", answers=None, time_spent: float = 30, fid: int = 7):
    return submission_schema.QuizSubmitRequest(
        quiz_id=quiz_id,
        answers=answers if answers is not None else [],
        time_spent=time_spent,
        user=submission_schema.UserIdentity(fid=fid),
    )


@pytest.mark.asyncio
async def test_submit_quiz_not_found(mock_db_session):
    """퀴즈를 찾을 수 없을 때 예외 발생"""
    with patch.object(quiz_crud, "get_quiz_by_id", return_value=None):
        with pytest.raises(QuizNotFoundError):
            await quiz_service.submit_quiz(mock_db_session, _submit_request(quiz_id="missing"))


@pytest.mark.asyncio
async def test_submit_blank_quiz_id(mock_db_session):
    """빈 quiz_id는 잘못된 제출"""
    with pytest.raises(InvalidSubmissionError):
        await quiz_service.submit_quiz(mock_db_session, _submit_request(quiz_id="   "))


@pytest.mark.asyncio
async def test_submit_quiz_without_questions(mock_db_session, mock_quiz):
    """문항 없는 퀴즈는 저장 전에 실패"""
    mock_quiz.questions = []
    create = AsyncMock()

    with patch.object(quiz_crud, "get_quiz_by_id", return_value=mock_quiz):
        with patch.object(quiz_session_crud, "create_quiz_session", create):
            with pytest.raises(InvalidQuizDefinitionError):
                await quiz_service.submit_quiz(mock_db_session, _submit_request())

    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_submit_quiz_grades_saves_and_ranks(mock_db_session, mock_quiz):
    """채점 → 저장 → 저장된 기록 기준 순위 산정"""
    earlier = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    saved = MagicMock(spec=QuizSession)
    saved.id = "new-session"
    existing = [
        _stored_session("s1", 1, 100, 20, earlier),
        _stored_session("s2", 2, 33, 10, earlier),
    ]

    async def create_session(session, result, user):
        existing.append(_stored_session("new-session", user.fid, result.score, result.time_spent, result.completed_at))
        return saved

    answers = [
        submission_schema.SubmittedAnswer(question_id="q1", selected_option=0),
        submission_schema.SubmittedAnswer(question_id="q2", selected_option=1),
        submission_schema.SubmittedAnswer(question_id="q3", selected_option=0),
    ]

    with patch.object(quiz_crud, "get_quiz_by_id", return_value=mock_quiz):
        with patch.object(quiz_session_crud, "create_quiz_session", side_effect=create_session) as create:
            with patch.object(quiz_session_crud, "get_completed_sessions_by_quiz", return_value=existing):
                response = await quiz_service.submit_quiz(
                    mock_db_session, _submit_request(answers=answers, time_spent=30)
                )

    create.assert_awaited_once()
    result = response.result
    assert response.session_id == "new-session"
    assert result.score == 67
    assert result.correct_answers == 2
    assert result.total_questions == 3
    assert result.rank == 2
    assert result.percentile == 67
    assert [entry.rank for entry in response.leaderboard] == [1, 2, 3]
    assert response.leaderboard[1].user_id == "7"


@pytest.mark.asyncio
async def test_submit_quiz_rolls_back_on_save_failure(mock_db_session, mock_quiz):
    """저장 실패 시 롤백 후 예외 전파"""
    with patch.object(quiz_crud, "get_quiz_by_id", return_value=mock_quiz):
        with patch.object(quiz_session_crud, "create_quiz_session", side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                await quiz_service.submit_quiz(mock_db_session, _submit_request())

    mock_db_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_quiz_detail_hides_answers(mock_db_session, mock_quiz):
    """상세 조회 시 정답/해설 비공개, 리더보드 포함"""
    completed = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    sessions = [_stored_session("s1", 1, 50, 30, completed)]

    with patch.object(quiz_crud, "get_quiz_by_id", return_value=mock_quiz):
        with patch.object(quiz_session_crud, "get_completed_sessions_by_quiz", return_value=sessions):
            detail = await quiz_service.get_quiz_detail(mock_db_session, "quiz-1")

    assert detail.quiz.category == "Unknown"
    assert detail.quiz.time_limit == 60
    assert detail.quiz.image_url is None
    assert all(q.correct_answer is None for q in detail.quiz.questions)
    assert all(q.explanation is None for q in detail.quiz.questions)
    assert detail.quiz.questions[0].options == ["a", "b", "c", "d"]
    assert detail.meta.questions_count == 3
    assert detail.meta.leaderboard_count == 1
    assert detail.leaderboard[0].username == "user_1"


@pytest.mark.asyncio
async def test_get_quiz_detail_not_found(mock_db_session):
    with patch.object(quiz_crud, "get_quiz_by_id", return_value=None):
        with pytest.raises(QuizNotFoundError):
            await quiz_service.get_quiz_detail(mock_db_session, "missing")


@pytest.mark.asyncio
async def test_get_leaderboard_not_found(mock_db_session):
    with patch.object(quiz_crud, "get_quiz_by_id", return_value=None):
        with pytest.raises(QuizNotFoundError):
            await quiz_service.get_leaderboard(mock_db_session, "missing")


@pytest.mark.asyncio
async def test_list_quizzes(mock_db_session, mock_quiz):
    with patch.object(quiz_crud, "get_active_quizzes", return_value=[mock_quiz]):
        response = await quiz_service.list_quizzes(mock_db_session)

    assert response.count == 1
    assert response.quizzes[0].id == "quiz-1"
    assert response.quizzes[0].questions[0].correct_answer is None
