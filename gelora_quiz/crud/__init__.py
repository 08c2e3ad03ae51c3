from gelora_quiz.crud.quiz import (
    get_active_quizzes,
    get_quiz_by_id,
)
from gelora_quiz.crud.quiz_session import (
    create_quiz_session,
    get_completed_sessions_by_quiz,
)

__all__ = [
    "get_quiz_by_id",
    "get_active_quizzes",
    "create_quiz_session",
    "get_completed_sessions_by_quiz",
]
