"""create_surfer_profile_tables

Revision ID: 7c41d2e9a0b3
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '7c41d2e9a0b3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create surfer_profiles and surf_sessions tables."""
    op.create_table('surfer_profiles',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('nickname', sa.String(length=255), nullable=True),
        sa.Column('surf_level', sa.Integer(), nullable=True),
        sa.Column('min_wave_height', sa.Float(), nullable=True),
        sa.Column('max_wave_height', sa.Float(), nullable=True),
        sa.Column('document', postgresql.JSONB(astext_type=sa.Text()), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # Sessions reference users by id only (no FK): a session can be written
    # to the durable store while its profile only exists in the fallback.
    op.create_table('surf_sessions',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('session_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('spot_id', sa.String(length=255), nullable=True),
        sa.Column('board_id', sa.String(length=64), nullable=True),
        sa.Column('overall_rating', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('document', postgresql.JSONB(astext_type=sa.Text()), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_surf_sessions_user_id', 'surf_sessions', ['user_id'])
    op.create_index('ix_surf_sessions_session_date', 'surf_sessions', ['session_date'])


def downgrade() -> None:
    """Drop surf_sessions and surfer_profiles tables."""
    op.drop_index('ix_surf_sessions_session_date', table_name='surf_sessions')
    op.drop_index('ix_surf_sessions_user_id', table_name='surf_sessions')
    op.drop_table('surf_sessions')
    op.drop_table('surfer_profiles')
