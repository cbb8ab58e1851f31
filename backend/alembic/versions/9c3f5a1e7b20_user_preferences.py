"""user preferences

Revision ID: 9c3f5a1e7b20
Revises: 4b1e0c7d2a91
Create Date: 2026-10-20 09:31:05.612847

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9c3f5a1e7b20'
down_revision: Union[str, None] = '4b1e0c7d2a91'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('rest_timer_duration', sa.Integer(), nullable=False),
        sa.Column('weight_increment', sa.Float(), nullable=False),
        sa.CheckConstraint('rest_timer_duration > 0', name='ck_user_preferences_rest_timer'),
        sa.CheckConstraint('weight_increment > 0', name='ck_user_preferences_weight_increment'),
    )


def downgrade() -> None:
    op.drop_table('user_preferences')
