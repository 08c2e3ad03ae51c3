from gelora_quiz.models.base import Base, get_db
from gelora_quiz.models.category import Category
from gelora_quiz.models.question import Question
from gelora_quiz.models.quiz import Quiz
from gelora_quiz.models.quiz_session import QuizSession
from gelora_quiz.models.user_answer import UserAnswer

__all__ = ["Base", "Category", "Quiz", "Question", "QuizSession", "UserAnswer", "get_db"]
