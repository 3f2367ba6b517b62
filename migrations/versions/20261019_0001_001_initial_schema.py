"""Initial schema - tournaments table

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the table for stored tournaments:
- tournaments: one row per tournament, full engine snapshot in state_json
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'tournaments',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, server_default=''),
        sa.Column('sport', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('champion_team_id', sa.Integer(), nullable=True),
        sa.Column('champion_name', sa.String(200), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('state_json', sa.Text(), nullable=False, server_default='{}'),
    )

    op.create_index('ix_tournaments_status', 'tournaments', ['status'])


def downgrade() -> None:
    op.drop_index('ix_tournaments_status', 'tournaments')
    op.drop_table('tournaments')
