"""Create blog tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create tables for blogs, their language versions and taxonomies."""

    # Create categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_categories_name', 'categories', ['name'])
    op.create_index('ix_categories_slug', 'categories', ['slug'])

    # Create subcategories table
    op.create_table(
        'subcategories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_subcategories_name', 'subcategories', ['name'])
    op.create_index('ix_subcategories_slug', 'subcategories', ['slug'])

    # Create tags table
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_tags_name', 'tags', ['name'])
    op.create_index('ix_tags_slug', 'tags', ['slug'])

    # Create blogs table
    op.create_table(
        'blogs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('main_image', sa.JSON(), nullable=True),
        sa.Column('main_image_prompt', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('subcategory_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.ForeignKeyConstraint(['subcategory_id'], ['subcategories.id']),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_blogs_slug', 'blogs', ['slug'])
    op.create_index('ix_blogs_status', 'blogs', ['status'])
    op.create_index('ix_blogs_featured', 'blogs', ['featured'])
    op.create_index('ix_blogs_category_id', 'blogs', ['category_id'])
    op.create_index('ix_blogs_subcategory_id', 'blogs', ['subcategory_id'])
    op.create_index('ix_blogs_created_at', 'blogs', ['created_at'])

    # Create contents table (one row per blog and language)
    op.create_table(
        'contents',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('blog_id', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=False),
        sa.Column('introduction', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('content1', sa.Text(), nullable=True),
        sa.Column('content2', sa.Text(), nullable=True),
        sa.Column('conclusion', sa.Text(), nullable=False),
        sa.Column('seo', sa.JSON(), nullable=True),
        sa.Column('cta', sa.Text(), nullable=True),
        sa.Column('cta_link', sa.String(length=500), nullable=True),
        sa.Column('cta_type', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['blog_id'], ['blogs.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('blog_id', 'language', name='uq_contents_blog_language'),
    )
    op.create_index('ix_contents_blog_id', 'contents', ['blog_id'])
    op.create_index('ix_contents_language', 'contents', ['language'])

    # Create blog_translations table (one row per blog and language)
    op.create_table(
        'blog_translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('blog_id', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('subtitle', sa.String(length=500), nullable=True),
        sa.Column('overview', sa.Text(), nullable=True),
        sa.Column('author', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['blog_id'], ['blogs.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('blog_id', 'language', name='uq_blog_translations_blog_language'),
    )
    op.create_index('ix_blog_translations_blog_id', 'blog_translations', ['blog_id'])
    op.create_index('ix_blog_translations_language', 'blog_translations', ['language'])

    # Create blog_tags junction table
    op.create_table(
        'blog_tags',
        sa.Column('blog_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('blog_id', 'tag_id'),
        sa.ForeignKeyConstraint(['blog_id'], ['blogs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
    )


def downgrade():
    """Drop blog tables."""
    op.drop_table('blog_tags')

    op.drop_index('ix_blog_translations_language', 'blog_translations')
    op.drop_index('ix_blog_translations_blog_id', 'blog_translations')
    op.drop_table('blog_translations')

    op.drop_index('ix_contents_language', 'contents')
    op.drop_index('ix_contents_blog_id', 'contents')
    op.drop_table('contents')

    op.drop_index('ix_blogs_created_at', 'blogs')
    op.drop_index('ix_blogs_subcategory_id', 'blogs')
    op.drop_index('ix_blogs_category_id', 'blogs')
    op.drop_index('ix_blogs_featured', 'blogs')
    op.drop_index('ix_blogs_status', 'blogs')
    op.drop_index('ix_blogs_slug', 'blogs')
    op.drop_table('blogs')

    op.drop_index('ix_tags_slug', 'tags')
    op.drop_index('ix_tags_name', 'tags')
    op.drop_table('tags')

    op.drop_index('ix_subcategories_slug', 'subcategories')
    op.drop_index('ix_subcategories_name', 'subcategories')
    op.drop_table('subcategories')

    op.drop_index('ix_categories_slug', 'categories')
    op.drop_index('ix_categories_name', 'categories')
    op.drop_table('categories')
