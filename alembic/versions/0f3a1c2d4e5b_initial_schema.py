"""Initial schema: users, records, faq_chunks, headlines, preferences

Revision ID: 0f3a1c2d4e5b
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from pgvector.sqlalchemy import Vector


# revision identifiers, used by Alembic.
revision: str = '0f3a1c2d4e5b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EMBEDDING_DIMENSIONS = 1536


def upgrade() -> None:
    """Upgrade schema - create all tables and the pgvector extension."""
    op.execute("CREATE EXTENSION IF NOT EXISTS vector")

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(64), nullable=False),
        sa.Column('password', sa.String(128), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('section_code', sa.String(64), nullable=True),
        sa.Column('action_officer_1', sa.Uuid(), nullable=False),
        sa.Column('action_officer_2', sa.String(128), nullable=True),
        sa.Column('creation_officer', sa.String(128), nullable=True),
        sa.Column('case_type', sa.String(64), nullable=True),
        sa.Column('channel', sa.String(64), nullable=True),
        sa.Column('category', sa.String(128), nullable=True),
        sa.Column('subcategory', sa.String(128), nullable=True),
        sa.Column('outcome', sa.String(16), nullable=False, server_default='Open'),
        sa.Column('reply_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reply', sa.Text(), nullable=True),
        sa.Column('planning_area', sa.String(128), nullable=True),
        sa.Column('location', sa.Text(), nullable=True),
        sa.Column('location_x', sa.String(32), nullable=True),
        sa.Column('location_y', sa.String(32), nullable=True),
        sa.Column('draft', postgresql.JSONB(), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('reasoning', sa.Text(), nullable=True),
        sa.Column('creation_date', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('receive_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('relevant_chunks', postgresql.JSONB(), nullable=True),
        sa.Column('related_emails', postgresql.JSONB(), nullable=True),
        sa.Column('evergreen_topics', postgresql.JSONB(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_records'),
        sa.CheckConstraint(
            "outcome IN ('Open', 'Draft', 'Vetted', 'Replied')", name='ck_records_outcome'
        ),
    )
    op.create_index('ix_records_action_officer_1', 'records', ['action_officer_1'], unique=False)
    op.create_index(
        'idx_records_officer_created', 'records', ['action_officer_1', 'creation_date'], unique=False
    )

    op.create_table(
        'faq_chunks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('faq_id', sa.String(50), nullable=False),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('section', sa.String(100), nullable=True),
        sa.Column('heading', sa.Text(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('embedding', Vector(EMBEDDING_DIMENSIONS), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_faq_chunks'),
    )
    op.create_index('ix_faq_chunks_faq_id', 'faq_chunks', ['faq_id'], unique=False)
    # Cosine distance index for the <=> operator
    op.execute(
        "CREATE INDEX idx_faq_chunks_embedding ON faq_chunks "
        "USING hnsw (embedding vector_cosine_ops)"
    )

    op.create_table(
        'headlines',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('match_percent', sa.String(16), nullable=True),
        sa.Column('desc', sa.Text(), nullable=True),
        sa.Column('entities', sa.Text(), nullable=True),
        sa.Column('examples', sa.Text(), nullable=True),
        sa.Column('category', sa.String(128), nullable=True),
        sa.Column('date_processed', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('topic', sa.String(128), nullable=True),
        sa.Column('score', sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_headlines'),
        sa.CheckConstraint(
            "type IN ('today', 'overall', 'evergreen')", name='ck_headlines_type'
        ),
    )

    op.create_table(
        'preferences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('always_retrieve_drafts', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('greetings', sa.Text(), nullable=True),
        sa.Column('closing', sa.Text(), nullable=True),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('role', sa.String(128), nullable=False),
        sa.Column('position', sa.String(128), nullable=True),
        sa.Column('department', sa.String(128), nullable=True),
        sa.Column('telephone', sa.String(64), nullable=True),
        sa.Column('links', postgresql.JSONB(), nullable=True),
        sa.Column('closing_message', sa.Text(), nullable=True),
        sa.Column('confidentiality_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_preferences'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='fk_preferences_user'),
        sa.UniqueConstraint('user_id', name='uq_preferences_user_id'),
    )


def downgrade() -> None:
    """Downgrade schema - drop all tables."""
    op.drop_table('preferences')
    op.drop_table('headlines')
    op.execute("DROP INDEX IF EXISTS idx_faq_chunks_embedding")
    op.drop_index('ix_faq_chunks_faq_id', table_name='faq_chunks')
    op.drop_table('faq_chunks')
    op.drop_index('idx_records_officer_created', table_name='records')
    op.drop_index('ix_records_action_officer_1', table_name='records')
    op.drop_table('records')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
