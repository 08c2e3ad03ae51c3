from gelora_quiz.schemas.leaderboard import (
    LeaderboardEntry,
    LeaderboardResponse,
    LeaderboardRow,
    RankedPosition,
)
from gelora_quiz.schemas.quiz import (
    QuestionDefinition,
    QuestionResponse,
    QuizDefinition,
    QuizDetailResponse,
    QuizListResponse,
    QuizResponse,
)
from gelora_quiz.schemas.submission import (
    GradedAnswer,
    QuizResult,
    QuizSubmitRequest,
    QuizSubmitResponse,
    SubmittedAnswer,
    UserIdentity,
)

__all__ = [
    "QuestionDefinition",
    "QuizDefinition",
    "QuestionResponse",
    "QuizResponse",
    "QuizListResponse",
    "QuizDetailResponse",
    "LeaderboardRow",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "RankedPosition",
    "UserIdentity",
    "SubmittedAnswer",
    "QuizSubmitRequest",
    "GradedAnswer",
    "QuizResult",
    "QuizSubmitResponse",
]
