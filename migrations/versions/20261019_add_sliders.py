"""add sliders table

Revision ID: add_sliders_20261019
Revises: initial_schema_20261019
Create Date: 2026-10-19 14:05:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'add_sliders_20261019'
down_revision: Union[str, None] = 'initial_schema_20261019'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'sliders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('public_id', sa.String(36), nullable=False, unique=True),
        sa.Column('unique_code', sa.BigInteger(), nullable=False),
        sa.Column('slider_image', sa.String(500), nullable=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('button_title', sa.String(100), nullable=False),
        sa.Column('button_link', sa.String(500), nullable=False),
        sa.Column('language_id', sa.String(36), sa.ForeignKey('languages.id'), nullable=False),
        sa.Column('custom_color', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('title_color', sa.String(7), nullable=False, server_default='#000000'),
        sa.Column('description_color', sa.String(7), nullable=False, server_default='#000000'),
        sa.Column('button_title_color', sa.String(7), nullable=False, server_default='#FFFFFF'),
        sa.Column('button_background', sa.String(7), nullable=False, server_default='#007BFF'),
        sa.Column('description_two', sa.Text(), nullable=True),
        sa.Column('button_title_two', sa.String(100), nullable=True),
        sa.Column('button_link_two', sa.String(500), nullable=True),
        sa.Column('description_two_color', sa.String(7), nullable=False, server_default='#666666'),
        sa.Column('button_two_color', sa.String(7), nullable=False, server_default='#FFFFFF'),
        sa.Column('button_background_two', sa.String(7), nullable=False, server_default='#28A745'),
        sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('unique_code', 'language_id', name='uq_sliders_unique_code_language'),
    )
    op.create_index('idx_sliders_unique_code', 'sliders', ['unique_code'])
    op.create_index('idx_sliders_language_status', 'sliders', ['language_id', 'status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_sliders_language_status', table_name='sliders')
    op.drop_index('idx_sliders_unique_code', table_name='sliders')
    op.drop_table('sliders')
