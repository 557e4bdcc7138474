"""initial schema: admins, novels, relations, chapters, blog posts, apps

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2025-11-02 10:12:31.402117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# 列表字段：PostgreSQL 上为 JSONB
json_list = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'admins',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_admins')),
    )
    op.create_index(op.f('ix_admins_username'), 'admins', ['username'], unique=True)

    op.create_table(
        'novels',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cover_image_url', sa.Text(), nullable=True),
        sa.Column('novel_type', sa.String(length=20), server_default='series', nullable=False),
        sa.Column('genres', json_list, nullable=False),
        sa.Column('status', sa.String(length=20), server_default='draft', nullable=False),
        sa.Column('view_count', sa.BigInteger(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_novels')),
    )
    op.create_index(op.f('ix_novels_slug'), 'novels', ['slug'], unique=True)
    op.create_index(op.f('ix_novels_title'), 'novels', ['title'], unique=False)

    op.create_table(
        'novel_relations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('novel_id', sa.Uuid(), nullable=False),
        sa.Column('related_novel_id', sa.Uuid(), nullable=False),
        sa.Column('relation_type', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('novel_id <> related_novel_id', name=op.f('ck_novel_relations_not_self')),
        sa.ForeignKeyConstraint(['novel_id'], ['novels.id'], name=op.f('fk_novel_relations_novel_id_novels'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['related_novel_id'], ['novels.id'], name=op.f('fk_novel_relations_related_novel_id_novels'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_novel_relations')),
        sa.UniqueConstraint('novel_id', 'related_novel_id', name='uq_novel_relations_pair'),
    )
    op.create_index(op.f('ix_novel_relations_novel_id'), 'novel_relations', ['novel_id'], unique=False)

    op.create_table(
        'novel_chapters',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('novel_id', sa.Uuid(), nullable=False),
        sa.Column('chapter_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('view_count', sa.BigInteger(), server_default='0', nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['novel_id'], ['novels.id'], name=op.f('fk_novel_chapters_novel_id_novels'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_novel_chapters')),
        sa.UniqueConstraint('novel_id', 'chapter_number', name='uq_novel_chapters_number'),
    )
    op.create_index(op.f('ix_novel_chapters_novel_id'), 'novel_chapters', ['novel_id'], unique=False)

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.String(length=1000), nullable=True),
        sa.Column('cover_image_url', sa.Text(), nullable=True),
        sa.Column('tags', json_list, nullable=False),
        sa.Column('published', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('view_count', sa.BigInteger(), server_default='0', nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_blog_posts')),
    )
    op.create_index(op.f('ix_blog_posts_slug'), 'blog_posts', ['slug'], unique=True)

    op.create_table(
        'apps',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('platforms', json_list, nullable=False),
        sa.Column('icon_url', sa.Text(), nullable=True),
        sa.Column('screenshots', json_list, nullable=False),
        sa.Column('distribution_channels', json_list, nullable=False),
        sa.Column('privacy_policy_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_apps')),
    )
    op.create_index(op.f('ix_apps_slug'), 'apps', ['slug'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_apps_slug'), table_name='apps')
    op.drop_table('apps')
    op.drop_index(op.f('ix_blog_posts_slug'), table_name='blog_posts')
    op.drop_table('blog_posts')
    op.drop_index(op.f('ix_novel_chapters_novel_id'), table_name='novel_chapters')
    op.drop_table('novel_chapters')
    op.drop_index(op.f('ix_novel_relations_novel_id'), table_name='novel_relations')
    op.drop_table('novel_relations')
    op.drop_index(op.f('ix_novels_title'), table_name='novels')
    op.drop_index(op.f('ix_novels_slug'), table_name='novels')
    op.drop_table('novels')
    op.drop_index(op.f('ix_admins_username'), table_name='admins')
    op.drop_table('admins')
