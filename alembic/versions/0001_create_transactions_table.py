"""create_transactions_table

Revision ID: 0001_create_transactions_table
Revises:
Create Date: 2024-10-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_create_transactions_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column(
            'type',
            sa.Enum('income', 'expense', name='transaction_type', native_enum=False, length=16),
            nullable=False,
        ),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column(
            'category',
            sa.Enum(
                'Food', 'Travel', 'Bills', 'Shopping', 'Entertainment',
                'Healthcare', 'Salary', 'Freelance', 'Investment', 'Other',
                name='transaction_category', native_enum=False, length=32,
            ),
            nullable=False,
        ),
        sa.Column('description', sa.String(length=100), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_date', 'transactions', ['date'])


def downgrade() -> None:
    op.drop_index('ix_transactions_date', table_name='transactions')
    op.drop_index('ix_transactions_user_id', table_name='transactions')
    op.drop_table('transactions')
