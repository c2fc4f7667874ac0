"""Add OAuth identity and profile fields to users

Revision ID: 002
Revises: 001
Create Date: 2025-11-20 00:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # batch mode rebuilds the table on SQLite, which cannot ALTER constraints
    with op.batch_alter_table('users') as batch_op:
        batch_op.alter_column('email', existing_type=sa.String(length=255), nullable=True)
        batch_op.alter_column('password_hash', existing_type=sa.String(length=255), nullable=True)
        batch_op.add_column(sa.Column('oauth_provider', sa.String(length=50), nullable=True))
        batch_op.add_column(sa.Column('oauth_provider_id', sa.String(length=255), nullable=True))
        batch_op.add_column(sa.Column('oauth_email', sa.String(length=255), nullable=True))
        batch_op.add_column(sa.Column('display_name', sa.String(length=100), nullable=True))
        batch_op.add_column(sa.Column('profile_image_url', sa.String(length=500), nullable=True))
        batch_op.create_unique_constraint('uq_users_oauth_identity', ['oauth_provider', 'oauth_provider_id'])

    op.create_index('idx_users_oauth_email', 'users', ['oauth_email'])


def downgrade() -> None:
    op.drop_index('idx_users_oauth_email', table_name='users')

    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_constraint('uq_users_oauth_identity', type_='unique')
        batch_op.drop_column('profile_image_url')
        batch_op.drop_column('display_name')
        batch_op.drop_column('oauth_email')
        batch_op.drop_column('oauth_provider_id')
        batch_op.drop_column('oauth_provider')
        batch_op.alter_column('password_hash', existing_type=sa.String(length=255), nullable=False)
        batch_op.alter_column('email', existing_type=sa.String(length=255), nullable=False)
