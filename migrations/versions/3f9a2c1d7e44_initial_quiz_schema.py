"""Initial quiz schema

Revision ID: 3f9a2c1d7e44
Revises:
Create Date: 2026-10-19 10:12:03.412775

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '3f9a2c1d7e44'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=50), nullable=False),
            sa.Column('username', sa.String(length=30), nullable=True),
            sa.Column('email', sa.String(length=255), nullable=True),
            sa.Column('password_hash', sa.String(length=255), nullable=False),
            sa.Column('role', sa.String(length=20), nullable=False),
            sa.Column('active', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.CheckConstraint('username IS NOT NULL OR email IS NOT NULL', name='ck_users_username_or_email'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_users_username', 'users', ['username'], unique=True)
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('time', sa.Float(), nullable=False),
            sa.Column('visibility', sa.String(length=10), nullable=False, server_default='private'),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.CheckConstraint('time > 0', name='ck_quizzes_time_positive'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_visibility', 'quizzes', ['visibility'], unique=False)
        op.create_index('ix_quizzes_user_id', 'quizzes', ['user_id'], unique=False)
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)
        op.create_index('ix_quizzes_user_visibility', 'quizzes', ['user_id', 'visibility'], unique=False)

    if 'questions' not in tables:
        op.create_table('questions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('correct_option', sa.Integer(), nullable=False),
            sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_questions_quiz_id', 'questions', ['quiz_id'], unique=False)
        op.create_index('ix_questions_quiz_order', 'questions', ['quiz_id', 'order_index'], unique=False)

    if 'question_options' not in tables:
        op.create_table('question_options',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=False),
            sa.Column('option_text', sa.Text(), nullable=False),
            sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_question_options_question_id', 'question_options', ['question_id'], unique=False)
        op.create_index('ix_question_options_question_order', 'question_options', ['question_id', 'order_index'], unique=False)

    if 'library_entries' not in tables:
        op.create_table('library_entries',
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('added_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('user_id', 'quiz_id')
        )
        op.create_index('ix_library_entries_quiz_id', 'library_entries', ['quiz_id'], unique=False)

    if 'scores' not in tables:
        op.create_table('scores',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('quiz_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('score', sa.Float(), nullable=False),
            sa.Column('total_questions', sa.Integer(), nullable=False),
            sa.Column('correct_answers', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('quiz_id', 'user_id', name='uq_score_quiz_user')
        )
        op.create_index('ix_scores_quiz_id', 'scores', ['quiz_id'], unique=False)
        op.create_index('ix_scores_user_id', 'scores', ['user_id'], unique=False)
        op.create_index('ix_scores_created_at', 'scores', ['created_at'], unique=False)

    if 'score_answers' not in tables:
        op.create_table('score_answers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('score_id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.Integer(), nullable=True),
            sa.Column('selected_option', sa.Integer(), nullable=True),
            sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['score_id'], ['scores.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_score_answers_score_id', 'score_answers', ['score_id'], unique=False)
        op.create_index('ix_score_answers_question_id', 'score_answers', ['question_id'], unique=False)
        op.create_index('ix_score_answers_score_order', 'score_answers', ['score_id', 'order_index'], unique=False)


def downgrade():
    op.drop_table('score_answers')
    op.drop_table('scores')
    op.drop_table('library_entries')
    op.drop_table('question_options')
    op.drop_table('questions')
    op.drop_table('quizzes')
    op.drop_table('users')
