from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gelora_quiz.models.base import Base, TimestampMixin


class Quiz(Base, TimestampMixin):
    __tablename__ = "quizzes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category_id: Mapped[int | None] = mapped_column(ForeignKey("categories.id"), nullable=True, index=True)
    difficulty: Mapped[str] = mapped_column(String(10), nullable=False)  # 'easy', 'medium', 'hard'
    time_limit: Mapped[int | None] = mapped_column(default=None)  # 초 단위
    total_questions: Mapped[int] = mapped_column(nullable=False, default=0)
    image_url: Mapped[str | None] = mapped_column(default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    category: Mapped["Category | None"] = relationship("Category", back_populates="quizzes")
    questions: Mapped[list["Question"]] = relationship(
        "Question",
        back_populates="quiz",
        order_by="Question.order_index",
    )
    sessions: Mapped[list["QuizSession"]] = relationship(
        "QuizSession",
        back_populates="quiz",
    )
