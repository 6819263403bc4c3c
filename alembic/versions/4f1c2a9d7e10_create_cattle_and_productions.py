"""Create cattle and productions tables

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

cattle_gender = sa.Enum('male', 'female', name='cattle_gender')
cattle_status = sa.Enum(
    'active', 'pregnant', 'dry', 'sick', 'sold', 'deceased', 'quarantine',
    name='cattle_status',
)
milking_session = sa.Enum('morning', 'evening', name='milking_session')
production_status = sa.Enum('recorded', 'verified', 'rejected', name='production_status')


def upgrade() -> None:
    """Create the registry and ledger tables with their live-row unique indexes."""

    # --- cattle ---
    op.create_table(
        'cattle',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tag_number', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('breed', sa.String(length=50), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('gender', cattle_gender, nullable=False),
        sa.Column('status', cattle_status, server_default='active', nullable=False),
        sa.Column('weight', sa.Numeric(precision=6, scale=2), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('parent_bull_id', sa.Uuid(), nullable=True),
        sa.Column('parent_cow_id', sa.Uuid(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['parent_bull_id'], ['cattle.id'], name='fk_cattle_parent_bull_id_cattle'
        ),
        sa.ForeignKeyConstraint(
            ['parent_cow_id'], ['cattle.id'], name='fk_cattle_parent_cow_id_cattle'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_cattle'),
    )
    op.create_index(
        'ux_cattle_tag_number_active',
        'cattle',
        ['tag_number'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
    )
    op.create_index('ix_cattle_status', 'cattle', ['status'])
    op.create_index('ix_cattle_breed', 'cattle', ['breed'])
    op.create_index('ix_cattle_parent_bull_id', 'cattle', ['parent_bull_id'])
    op.create_index('ix_cattle_parent_cow_id', 'cattle', ['parent_cow_id'])

    # --- productions ---
    op.create_table(
        'productions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('cattle_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('session', milking_session, nullable=False),
        sa.Column('quantity', sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column('fat_content', sa.Numeric(precision=4, scale=2), nullable=True),
        sa.Column('protein_content', sa.Numeric(precision=4, scale=2), nullable=True),
        sa.Column('temperature', sa.Numeric(precision=4, scale=1), nullable=True),
        sa.Column('status', production_status, server_default='recorded', nullable=False),
        sa.Column('quality_metrics', sa.JSON(), nullable=True),
        sa.Column('recorded_by_id', sa.Uuid(), nullable=True),
        sa.Column('verified_by_id', sa.Uuid(), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['cattle_id'], ['cattle.id'], name='fk_productions_cattle_id_cattle'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_productions'),
    )
    op.create_index(
        'ux_productions_cattle_date_session_active',
        'productions',
        ['cattle_id', 'date', 'session'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
    )
    op.create_index('ix_productions_date_session', 'productions', ['date', 'session'])
    op.create_index('ix_productions_cattle_date', 'productions', ['cattle_id', 'date'])


def downgrade() -> None:
    op.drop_index('ix_productions_cattle_date', table_name='productions')
    op.drop_index('ix_productions_date_session', table_name='productions')
    op.drop_index('ux_productions_cattle_date_session_active', table_name='productions')
    op.drop_table('productions')
    op.drop_index('ix_cattle_parent_cow_id', table_name='cattle')
    op.drop_index('ix_cattle_parent_bull_id', table_name='cattle')
    op.drop_index('ix_cattle_breed', table_name='cattle')
    op.drop_index('ix_cattle_status', table_name='cattle')
    op.drop_index('ux_cattle_tag_number_active', table_name='cattle')
    op.drop_table('cattle')
    production_status.drop(op.get_bind(), checkfirst=True)
    milking_session.drop(op.get_bind(), checkfirst=True)
    cattle_status.drop(op.get_bind(), checkfirst=True)
    cattle_gender.drop(op.get_bind(), checkfirst=True)
