"""create_quiz_tables

Revision ID: 3a7c1e9b2d40
Revises:
Create Date: 2026-10-12 14:20:31.512904

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a7c1e9b2d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """퀴즈, 문항, 완료 기록, 답안 테이블 생성"""
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'quizzes',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.String(length=10), nullable=False),
        sa.Column('time_limit', sa.Integer(), nullable=True),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quizzes_category_id'), 'quizzes', ['category_id'], unique=False)
    op.create_index(op.f('ix_quizzes_is_active'), 'quizzes', ['is_active'], unique=False)

    op.create_table(
        'questions',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('quiz_id', sa.String(length=64), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('options', sa.Text(), nullable=False),
        sa.Column('correct_answer', sa.Integer(), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_questions_quiz_id'), 'questions', ['quiz_id'], unique=False)

    op.create_table(
        'quiz_sessions',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('quiz_id', sa.String(length=64), nullable=False),
        sa.Column('fid', sa.BigInteger(), nullable=False),
        sa.Column('username', sa.String(), nullable=True),
        sa.Column('display_name', sa.String(), nullable=True),
        sa.Column('profile_image', sa.String(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('correct_answers', sa.Integer(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('time_spent', sa.Float(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quiz_sessions_quiz_id'), 'quiz_sessions', ['quiz_id'], unique=False)
    op.create_index(op.f('ix_quiz_sessions_fid'), 'quiz_sessions', ['fid'], unique=False)
    op.create_index(op.f('ix_quiz_sessions_is_completed'), 'quiz_sessions', ['is_completed'], unique=False)
    # 리더보드 정렬용
    op.create_index(
        'ix_quiz_sessions_leaderboard',
        'quiz_sessions',
        ['quiz_id', 'score', 'time_spent', 'completed_at'],
        unique=False,
    )

    op.create_table(
        'user_answers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.String(length=36), nullable=False),
        sa.Column('question_id', sa.String(length=64), nullable=False),
        sa.Column('selected_option', sa.Integer(), nullable=True),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('time_spent', sa.Float(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['session_id'], ['quiz_sessions.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_answers_session_id'), 'user_answers', ['session_id'], unique=False)


def downgrade() -> None:
    """테이블 제거"""
    op.drop_index(op.f('ix_user_answers_session_id'), table_name='user_answers')
    op.drop_table('user_answers')
    op.drop_index('ix_quiz_sessions_leaderboard', table_name='quiz_sessions')
    op.drop_index(op.f('ix_quiz_sessions_is_completed'), table_name='quiz_sessions')
    op.drop_index(op.f('ix_quiz_sessions_fid'), table_name='quiz_sessions')
    op.drop_index(op.f('ix_quiz_sessions_quiz_id'), table_name='quiz_sessions')
    op.drop_table('quiz_sessions')
    op.drop_index(op.f('ix_questions_quiz_id'), table_name='questions')
    op.drop_table('questions')
    op.drop_index(op.f('ix_quizzes_is_active'), table_name='quizzes')
    op.drop_index(op.f('ix_quizzes_category_id'), table_name='quizzes')
    op.drop_table('quizzes')
    op.drop_table('categories')
