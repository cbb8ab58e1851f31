"""workout days, exercises, sessions and sets

Revision ID: 4b1e0c7d2a91
Revises:
Create Date: 2026-10-19 10:12:44.180233

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e0c7d2a91'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) catalog
    op.create_table(
        'workout_days',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('subtitle', sa.String(length=255), nullable=False),
        sa.Column('day_label', sa.String(length=40), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, index=True),
    )
    op.create_table(
        'exercises',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('workout_day_id', sa.Uuid(), sa.ForeignKey('workout_days.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('alternative_name', sa.String(length=120), nullable=True),
        sa.Column('target_sets', sa.Integer(), nullable=False),
        sa.Column('target_reps_min', sa.Integer(), nullable=False),
        sa.Column('target_reps_max', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('default_weight', sa.Float(), nullable=False),
        sa.Column('sf_symbol', sa.String(length=80), nullable=False),
        sa.Column('image_name', sa.String(length=120), nullable=True),
        sa.CheckConstraint('target_sets >= 1', name='ck_exercises_target_sets'),
        sa.CheckConstraint('target_reps_min > 0 AND target_reps_min <= target_reps_max', name='ck_exercises_rep_range'),
    )

    # 2) sessions
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('workout_day_id', sa.Uuid(), sa.ForeignKey('workout_days.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, index=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, index=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )

    # 3) sets
    op.create_table(
        'exercise_sets',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('session_id', sa.Uuid(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Uuid(), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('session_id', 'exercise_id', 'set_number', name='uq_exercise_sets_position'),
        sa.CheckConstraint('set_number >= 1', name='ck_exercise_sets_set_number'),
        sa.CheckConstraint('weight >= 0', name='ck_exercise_sets_weight'),
        sa.CheckConstraint('reps >= 0', name='ck_exercise_sets_reps'),
        sa.CheckConstraint(
            '(is_completed AND completed_at IS NOT NULL) OR (NOT is_completed AND completed_at IS NULL)',
            name='ck_exercise_sets_completed_at',
        ),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('exercise_sets')
    op.drop_table('workout_sessions')
    op.drop_table('exercises')
    op.drop_table('workout_days')
