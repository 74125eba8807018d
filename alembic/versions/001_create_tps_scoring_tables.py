"""Create TPS scoring tables

Revision ID: 001_tps_scoring
Revises:
Create Date: 2026-10-18

Creates tables for the scoring service:
- assessments - raw responses and the stored profile
- bulk_operations - progress of bulk recalculation runs
- scoring_audit_log - append-only audit trail
- user_roles - role grants
- scoring_config - versioned scoring overrides
and the has_role(user_id, role) lookup function.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic
revision = '001_tps_scoring'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create scoring tables and the role lookup function"""

    op.create_table(
        'assessments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=True),
        sa.Column('responses', postgresql.JSONB(), nullable=False, comment='108 answers on a 1-10 scale'),
        sa.Column('profile', postgresql.JSONB(), nullable=True, comment='Scored personality profile'),
        sa.Column('variant', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assessments_user_id', 'assessments', ['user_id'])
    op.create_index('idx_assessments_created_at', 'assessments', ['created_at'])
    op.create_index('idx_assessments_updated_at', 'assessments', ['updated_at'])
    op.create_index('idx_assessments_variant', 'assessments', ['variant'])

    op.create_table(
        'bulk_operations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('operation_type', sa.String(50), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('total_items', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('processed_items', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('success_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('error_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('parameters', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('error_details', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('created_by', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('dry_run', 'processing', 'completed', 'failed')",
            name='check_bulk_operation_status'
        ),
    )
    op.create_index('idx_bulk_operations_status', 'bulk_operations', ['status'])

    op.create_table(
        'scoring_audit_log',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('actor_id', sa.String(64), nullable=True),
        sa.Column('details', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_scoring_audit_action', 'scoring_audit_log', ['action'])
    op.create_index('idx_scoring_audit_created_at', 'scoring_audit_log', ['created_at'])

    op.create_table(
        'user_roles',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_user_roles_user_role', 'user_roles', ['user_id', 'role'], unique=True)

    op.create_table(
        'scoring_config',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('config', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_by', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_scoring_config_active', 'scoring_config', ['is_active'])

    op.execute("""
        CREATE OR REPLACE FUNCTION has_role(_user_id TEXT, _role TEXT)
        RETURNS BOOLEAN
        LANGUAGE sql
        STABLE
        AS $$
            SELECT EXISTS (
                SELECT 1 FROM user_roles WHERE user_id = _user_id AND role = _role
            )
        $$;
    """)


def downgrade() -> None:
    """Drop scoring tables"""

    op.execute("DROP FUNCTION IF EXISTS has_role(TEXT, TEXT)")

    op.drop_index('idx_scoring_config_active', table_name='scoring_config')
    op.drop_table('scoring_config')

    op.drop_index('idx_user_roles_user_role', table_name='user_roles')
    op.drop_table('user_roles')

    op.drop_index('idx_scoring_audit_created_at', table_name='scoring_audit_log')
    op.drop_index('idx_scoring_audit_action', table_name='scoring_audit_log')
    op.drop_table('scoring_audit_log')

    op.drop_index('idx_bulk_operations_status', table_name='bulk_operations')
    op.drop_table('bulk_operations')

    op.drop_index('idx_assessments_variant', table_name='assessments')
    op.drop_index('idx_assessments_updated_at', table_name='assessments')
    op.drop_index('idx_assessments_created_at', table_name='assessments')
    op.drop_index('ix_assessments_user_id', table_name='assessments')
    op.drop_table('assessments')
