"""Create generation jobs table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade():
    """Create the durable queue for deferred generation and translation."""
    op.create_table(
        'generation_jobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.String(length=20), nullable=False, server_default='generate'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('title', sa.String(length=500), nullable=True),
        sa.Column('cta_type', sa.String(length=100), nullable=True),
        sa.Column('cta_link', sa.String(length=500), nullable=True),
        sa.Column('main_image', sa.String(length=1000), nullable=True),
        sa.Column('blog_id', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=True),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('run_after', sa.DateTime(), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['blog_id'], ['blogs.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_generation_jobs_kind', 'generation_jobs', ['kind'])
    op.create_index('ix_generation_jobs_status', 'generation_jobs', ['status'])
    op.create_index('ix_generation_jobs_blog_id', 'generation_jobs', ['blog_id'])
    op.create_index('ix_generation_jobs_run_after', 'generation_jobs', ['run_after'])


def downgrade():
    """Drop generation jobs table."""
    op.drop_index('ix_generation_jobs_run_after', 'generation_jobs')
    op.drop_index('ix_generation_jobs_blog_id', 'generation_jobs')
    op.drop_index('ix_generation_jobs_status', 'generation_jobs')
    op.drop_index('ix_generation_jobs_kind', 'generation_jobs')
    op.drop_table('generation_jobs')
