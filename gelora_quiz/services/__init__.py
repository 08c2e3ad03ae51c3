from gelora_quiz.services.quiz_service import (
    get_leaderboard,
    get_quiz_detail,
    list_quizzes,
    submit_quiz,
)
from gelora_quiz.services.scoring import (
    build_leaderboard,
    calculate_percentile,
    grade_submission,
    rank_submission,
)

__all__ = [
    "grade_submission",
    "rank_submission",
    "calculate_percentile",
    "build_leaderboard",
    "list_quizzes",
    "get_quiz_detail",
    "get_leaderboard",
    "submit_quiz",
]
