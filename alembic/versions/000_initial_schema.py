"""Create projects, resources and resource_workloads tables

Revision ID: 000
Revises:
Create Date: 2025-11-03 09:00:00.000000

For new installations, run: alembic upgrade head
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '000'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create capacity tracking tables."""

    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_projects_name', 'projects', ['name'])

    # Enum columns hold member names (DEVELOPER, GREEN, ...)
    op.create_table(
        'resources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=30), nullable=False, server_default='DEVELOPER'),
        sa.Column('custom_role_name', sa.String(length=100), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('weekly_availability', sa.Float(), nullable=False, server_default='40'),
        sa.Column('weekly_workload', sa.Float(), nullable=False, server_default='0'),
        sa.Column('load_percentage', sa.Float(), nullable=False, server_default='0'),
        sa.Column('rag_status', sa.String(length=10), nullable=False, server_default='GREEN'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('project_id', 'name', name='uq_resources_project_name'),
    )
    op.create_index('ix_resources_project_id', 'resources', ['project_id'])
    op.create_index('ix_resources_name', 'resources', ['name'])
    op.create_index('ix_resources_role', 'resources', ['role'])
    op.create_index('ix_resources_load_percentage', 'resources', ['load_percentage'])
    op.create_index('ix_resources_is_archived', 'resources', ['is_archived'])

    op.create_table(
        'resource_workloads',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Integer(), nullable=False),
        sa.Column('week_start_date', sa.Date(), nullable=False),
        sa.Column('week_end_date', sa.Date(), nullable=False),
        sa.Column('availability', sa.Float(), nullable=False),
        sa.Column('workload', sa.Float(), nullable=False),
        sa.Column('load_percentage', sa.Float(), nullable=False),
        sa.Column('rag_status', sa.String(length=10), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['resource_id'], ['resources.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('resource_id', 'week_start_date', name='uq_resource_workloads_resource_week'),
    )
    op.create_index('ix_resource_workloads_resource_id', 'resource_workloads', ['resource_id'])
    op.create_index('ix_resource_workloads_week_start_date', 'resource_workloads', ['week_start_date'])


def downgrade():
    """Drop capacity tracking tables."""
    op.drop_index('ix_resource_workloads_week_start_date', table_name='resource_workloads')
    op.drop_index('ix_resource_workloads_resource_id', table_name='resource_workloads')
    op.drop_table('resource_workloads')
    op.drop_index('ix_resources_is_archived', table_name='resources')
    op.drop_index('ix_resources_load_percentage', table_name='resources')
    op.drop_index('ix_resources_role', table_name='resources')
    op.drop_index('ix_resources_name', table_name='resources')
    op.drop_index('ix_resources_project_id', table_name='resources')
    op.drop_table('resources')
    op.drop_index('ix_projects_name', table_name='projects')
    op.drop_table('projects')
