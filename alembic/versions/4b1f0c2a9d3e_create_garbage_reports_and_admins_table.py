"""create garbage_reports and admins table

Revision ID: 4b1f0c2a9d3e
Revises:
Create Date: 2025-08-14 10:12:40.118204
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b1f0c2a9d3e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'garbage_reports',
        sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
        sa.Column('image_url', sa.Text, nullable=False),
        sa.Column('location', sa.Text, nullable=False),
        sa.Column('latitude', sa.Float, nullable=True),
        sa.Column('longitude', sa.Float, nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('reporter_name', sa.Text, nullable=False),
        sa.Column('reporter_email', sa.Text, nullable=False),
        sa.Column(
            'status',
            sa.String(length=20),
            nullable=False,
            server_default='pending'
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'verified', 'in-progress', 'completed')",
            name='ck_garbage_reports_status'
        ),
    )
    op.create_index('ix_garbage_reports_id', 'garbage_reports', ['id'])
    op.create_index('ix_garbage_reports_created_at', 'garbage_reports', ['created_at'])

    op.create_table(
        'admins',
        sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_admins_id', 'admins', ['id'])
    op.create_index('ix_admins_email', 'admins', ['email'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_admins_email', table_name='admins')
    op.drop_index('ix_admins_id', table_name='admins')
    op.drop_table('admins')
    op.drop_index('ix_garbage_reports_created_at', table_name='garbage_reports')
    op.drop_index('ix_garbage_reports_id', table_name='garbage_reports')
    op.drop_table('garbage_reports')
