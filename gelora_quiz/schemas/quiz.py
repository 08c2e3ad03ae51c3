import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gelora_quiz.schemas.base import CamelModel
from gelora_quiz.schemas.leaderboard import LeaderboardEntry


def _parse_options(value: Any) -> Any:
    """DB의 JSON 문자열 options를 리스트로 변환"""
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return []
        return parsed if isinstance(parsed, list) else []
    return value


class QuestionDefinition(BaseModel):
    """채점용 문항 정의 (정답 포함, 외부 응답에 사용하지 않음)"""
    id: str
    options: list[str] = Field(default_factory=list)
    correct_answer: int

    model_config = ConfigDict(from_attributes=True)

    @field_validator("options", mode="before")
    @classmethod
    def parse_options(cls, v: Any) -> Any:
        return _parse_options(v)


class QuizDefinition(BaseModel):
    """채점용 퀴즈 정의 (읽기 전용 입력)"""
    id: str
    questions: list[QuestionDefinition] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @property
    def total_questions(self) -> int:
        return len(self.questions)


class QuestionResponse(CamelModel):
    """문항 응답 스키마 (풀이 중에는 정답/해설 비공개)"""
    id: str
    text: str
    options: list[str]
    correct_answer: int | None = Field(None, description="정답 인덱스 (풀이 중에는 None)")
    explanation: str | None = None
    image_url: str | None = None

    @field_validator("options", mode="before")
    @classmethod
    def parse_options(cls, v: Any) -> Any:
        return _parse_options(v)


class QuizResponse(CamelModel):
    """퀴즈 응답 스키마"""
    id: str
    title: str
    description: str
    category: str = "Unknown"
    difficulty: Literal["easy", "medium", "hard"]
    time_limit: int | None = Field(None, description="제한 시간 (초)")
    total_questions: int
    image_url: str | None = None
    questions: list[QuestionResponse] = Field(default_factory=list)

    @field_validator("category", mode="before")
    @classmethod
    def category_name(cls, v: Any) -> Any:
        """Category 관계 객체를 이름으로 변환"""
        if v is None:
            return "Unknown"
        if hasattr(v, "name"):
            return v.name
        return v


class QuizListResponse(CamelModel):
    """퀴즈 목록 응답 스키마"""
    success: bool = True
    quizzes: list[QuizResponse]
    count: int


class QuizDetailMeta(BaseModel):
    questions_count: int
    leaderboard_count: int


class QuizDetailResponse(CamelModel):
    """퀴즈 상세 응답 스키마 (리더보드 포함)"""
    success: bool = True
    quiz: QuizResponse
    leaderboard: list[LeaderboardEntry]
    meta: QuizDetailMeta
