from datetime import datetime

from pydantic import Field

from gelora_quiz.schemas.base import CamelModel
from gelora_quiz.schemas.leaderboard import LeaderboardEntry


class UserIdentity(CamelModel):
    """제출자 정보 (Farcaster 프로필)"""
    fid: int = Field(..., ge=0, description="Farcaster ID")
    username: str | None = None
    display_name: str | None = None
    profile_image: str | None = None


class SubmittedAnswer(CamelModel):
    """제출 답안"""
    question_id: str
    selected_option: int | None = Field(None, description="선택지 인덱스 (미응답 시 None)")
    time_spent: float | None = Field(None, ge=0, description="문항별 소요 시간 (초, 없으면 균등 분배)")


class QuizSubmitRequest(CamelModel):
    """퀴즈 제출 요청 스키마"""
    quiz_id: str
    answers: list[SubmittedAnswer] = Field(default_factory=list)
    time_spent: float = Field(0, ge=0, description="총 소요 시간 (초)")
    user: UserIdentity


class GradedAnswer(CamelModel):
    """채점된 답안"""
    question_id: str
    selected_option: int | None
    is_correct: bool
    time_spent: float


class QuizResult(CamelModel):
    """채점 결과 (rank/percentile은 순위 산정 후 채워짐)"""
    quiz_id: str
    user_id: int
    score: int = Field(..., ge=0, le=100)
    total_questions: int
    correct_answers: int
    time_spent: float
    answers: list[GradedAnswer]
    completed_at: datetime
    rank: int | None = None
    percentile: int | None = None


class QuizSubmitResponse(CamelModel):
    """퀴즈 제출 응답 스키마"""
    success: bool = True
    session_id: str | None = None
    result: QuizResult
    leaderboard: list[LeaderboardEntry]
