"""add_sample_quizzes

Revision ID: 8b2d4f6a1c93
Revises: 3a7c1e9b2d40
Create Date: 2026-10-12 15:02:47.093318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from gelora_quiz.data.sample_quizzes import CATEGORIES, SAMPLE_QUIZZES, question_rows, quiz_rows


# revision identifiers, used by Alembic.
revision: str = '8b2d4f6a1c93'
down_revision: Union[str, Sequence[str], None] = '3a7c1e9b2d40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """샘플 카테고리/퀴즈/문항 데이터 추가"""
    categories_table = sa.table(
        'categories',
        sa.column('id', sa.Integer),
        sa.column('name', sa.String),
    )
    quizzes_table = sa.table(
        'quizzes',
        sa.column('id', sa.String),
        sa.column('title', sa.String),
        sa.column('description', sa.Text),
        sa.column('category_id', sa.Integer),
        sa.column('difficulty', sa.String),
        sa.column('time_limit', sa.Integer),
        sa.column('total_questions', sa.Integer),
        sa.column('image_url', sa.String),
        sa.column('is_active', sa.Boolean),
    )
    questions_table = sa.table(
        'questions',
        sa.column('id', sa.String),
        sa.column('quiz_id', sa.String),
        sa.column('text', sa.Text),
        sa.column('options', sa.Text),
        sa.column('correct_answer', sa.Integer),
        sa.column('explanation', sa.Text),
        sa.column('order_index', sa.Integer),
    )

    op.bulk_insert(categories_table, CATEGORIES)
    op.bulk_insert(quizzes_table, quiz_rows())
    op.bulk_insert(questions_table, question_rows())

    # 명시적 id 삽입 후 시퀀스 동기화
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            "SELECT setval(pg_get_serial_sequence('categories', 'id'), "
            "(SELECT MAX(id) FROM categories))"
        )


def downgrade() -> None:
    """샘플 데이터 삭제"""
    quiz_ids = ", ".join(f"'{quiz['id']}'" for quiz in SAMPLE_QUIZZES)
    category_ids = ", ".join(str(category["id"]) for category in CATEGORIES)
    sessions = f"SELECT id FROM quiz_sessions WHERE quiz_id IN ({quiz_ids})"
    op.execute(f"DELETE FROM user_answers WHERE session_id IN ({sessions})")
    op.execute(f"DELETE FROM quiz_sessions WHERE quiz_id IN ({quiz_ids})")
    op.execute(f"DELETE FROM questions WHERE quiz_id IN ({quiz_ids})")
    op.execute(f"DELETE FROM quizzes WHERE id IN ({quiz_ids})")
    op.execute(f"DELETE FROM categories WHERE id IN ({category_ids})")
