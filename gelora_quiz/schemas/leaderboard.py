from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gelora_quiz.schemas.base import CamelModel


class LeaderboardRow(BaseModel):
    """저장된 완료 기록 한 건 (순위 산정 입력)"""
    session_id: str | None = None
    user_id: int
    username: str | None = None
    display_name: str | None = None
    profile_image: str | None = None
    score: int
    time_spent: float
    completed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LeaderboardEntry(CamelModel):
    """리더보드 응답 항목 (rank는 조회 시마다 재계산)"""
    user_id: str
    username: str
    display_name: str
    profile_image: str | None = None
    score: int
    time_spent: float
    completed_at: datetime
    rank: int = Field(..., ge=1)


class RankedPosition(BaseModel):
    """신규 제출의 순위"""
    rank: int = Field(..., ge=1)
    percentile: int = Field(..., ge=0, le=100)
    participants: int


class LeaderboardResponse(CamelModel):
    """리더보드 응답 스키마"""
    success: bool = True
    quiz_id: str
    leaderboard: list[LeaderboardEntry]
    total: int
