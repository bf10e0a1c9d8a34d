"""Create netflix_shows table

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'netflix_shows',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('type', sa.String(7), nullable=False),
        sa.Column('title', sa.Text, nullable=False),
        sa.Column('director', sa.Text),
        sa.Column('cast_members', sa.Text),
        sa.Column('country', sa.String(60), nullable=False),
        sa.Column('date_added', sa.Date, nullable=False),
        sa.Column('release_year', sa.Integer, nullable=False),
        sa.Column('rating', sa.Integer),
        sa.Column('duration_in_minute', sa.Integer),
        sa.Column('listed_in', sa.Text),
        sa.Column('description', sa.Text),
    )


def downgrade() -> None:
    op.drop_table('netflix_shows')
