"""initial newsletter schema

Revision ID: a1d3f5c7e9b2
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from fastapi_users_db_sqlalchemy.generics import GUID


# revision identifiers, used by Alembic.
revision: str = 'a1d3f5c7e9b2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UUID = GUID()
TIER = sa.Enum('free', 'pro', name='subscriptiontier')
ROLE = sa.Enum('subscriber', 'admin', name='profilerole')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('hashed_password', sa.String(1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_superuser', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', UUID, sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', ROLE, nullable=False, server_default='subscriber'),
        sa.Column('subscription_tier', TIER, nullable=False, server_default='free'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'subscribers',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('subscription_tier', TIER, nullable=False, server_default='free'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_subscribers_email', 'subscribers', ['email'], unique=True)
    op.create_index('ix_subscribers_is_active', 'subscribers', ['is_active'])
    op.create_index('ix_subscribers_created_at', 'subscribers', ['created_at'])

    op.create_table(
        'newsletters',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('author_id', UUID, sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_newsletters_is_published', 'newsletters', ['is_published'])
    op.create_index('ix_newsletters_author_id', 'newsletters', ['author_id'])
    op.create_index('ix_newsletters_created_at', 'newsletters', ['created_at'])

    # No foreign keys: send history outlives deleted newsletters
    op.create_table(
        'newsletter_sends',
        sa.Column('id', UUID, primary_key=True),
        sa.Column('newsletter_id', UUID, nullable=False),
        sa.Column('subscriber_id', UUID, nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        'ix_newsletter_sends_newsletter_subscriber',
        'newsletter_sends',
        ['newsletter_id', 'subscriber_id'],
    )


def downgrade() -> None:
    op.drop_index('ix_newsletter_sends_newsletter_subscriber', table_name='newsletter_sends')
    op.drop_table('newsletter_sends')
    op.drop_table('newsletters')
    op.drop_table('subscribers')
    op.drop_table('profiles')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    TIER.drop(op.get_bind(), checkfirst=True)
    ROLE.drop(op.get_bind(), checkfirst=True)
