import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, DateTime, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gelora_quiz.models.base import Base, TimestampMixin


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuizSession(Base, TimestampMixin):
    """퀴즈 완료 기록 (리더보드 원천 데이터)"""
    __tablename__ = "quiz_sessions"
    __table_args__ = (
        Index("ix_quiz_sessions_leaderboard", "quiz_id", "score", "time_spent", "completed_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    quiz_id: Mapped[str] = mapped_column(ForeignKey("quizzes.id"), nullable=False, index=True)
    fid: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    username: Mapped[str | None] = mapped_column(default=None)
    display_name: Mapped[str | None] = mapped_column(default=None)
    profile_image: Mapped[str | None] = mapped_column(default=None)
    score: Mapped[int] = mapped_column(nullable=False)
    correct_answers: Mapped[int] = mapped_column(nullable=False)
    total_questions: Mapped[int] = mapped_column(nullable=False)
    time_spent: Mapped[float] = mapped_column(Float, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="sessions")
    answers: Mapped[list["UserAnswer"]] = relationship(
        "UserAnswer",
        back_populates="session",
        cascade="all, delete-orphan",
    )
