from sqlalchemy import Boolean, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gelora_quiz.models.base import Base, TimestampMixin


class UserAnswer(Base, TimestampMixin):
    """문항별 답안 (분석용)"""
    __tablename__ = "user_answers"

    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[str] = mapped_column(ForeignKey("quiz_sessions.id"), nullable=False, index=True)
    question_id: Mapped[str] = mapped_column(String(64), nullable=False)
    selected_option: Mapped[int | None] = mapped_column(default=None)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    time_spent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    session: Mapped["QuizSession"] = relationship("QuizSession", back_populates="answers")
