"""Initial journal schema: users, trades and trade_entries

Revision ID: 001
Revises: 
Create Date: 2025-11-02 00:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # One row per user per day
    op.create_table('trades',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('trade_date', sa.String(length=10), nullable=False),
        sa.Column('notes', sa.Text(), server_default='', nullable=False),
        sa.Column('has_trades', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'trade_date', name='uq_trades_user_date'),
    )
    op.create_index('idx_trades_user_date', 'trades', ['user_id', 'trade_date'])

    # One row per logged trade
    op.create_table('trade_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('trade_date', sa.String(length=10), nullable=False),
        sa.Column('ticker', sa.String(length=32), nullable=False),
        sa.Column('direction', sa.String(length=5), nullable=False),
        sa.Column('entry_price', sa.Float(), nullable=False),
        sa.Column('exit_price', sa.Float(), nullable=False),
        sa.Column('size', sa.Float(), nullable=False),
        sa.Column('pnl', sa.Float(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('tag', sa.String(length=50), nullable=True),
        sa.Column('confidence', sa.Integer(), nullable=True),
        sa.Column('setup_quality', sa.String(length=1), nullable=True),
        sa.CheckConstraint("direction IN ('LONG', 'SHORT')", name='direction'),
        sa.CheckConstraint("setup_quality IN ('A', 'B', 'C')", name='setup_quality'),
        sa.CheckConstraint('confidence BETWEEN 1 AND 5', name='ck_trade_entries_confidence'),
        sa.CheckConstraint('size >= 0', name='ck_trade_entries_size'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['user_id', 'trade_date'], ['trades.user_id', 'trades.trade_date'],
            ondelete='CASCADE', name='fk_trade_entries_trade_day',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_entries_user_date', 'trade_entries', ['user_id', 'trade_date'])
    op.create_index('idx_entries_ticker', 'trade_entries', ['ticker'])


def downgrade() -> None:
    op.drop_table('trade_entries')
    op.drop_table('trades')
    op.drop_table('users')
