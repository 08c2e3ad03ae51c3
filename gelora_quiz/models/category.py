from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gelora_quiz.models.base import Base, TimestampMixin


class Category(Base, TimestampMixin):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    quizzes: Mapped[list["Quiz"]] = relationship("Quiz", back_populates="category")
