"""create templates, contracts and clauses

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:12:31.402113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'contract_templates',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Text(), nullable=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('base_language', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('is_system', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contract_templates_owner_id', 'contract_templates', ['owner_id'])

    op.create_table(
        'contracts',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Text(), nullable=False),
        sa.Column('template_id', sa.Text(), nullable=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('party_a_name', sa.Text(), nullable=True),
        sa.Column('party_b_name', sa.Text(), nullable=True),
        sa.Column('effective_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('governing_law', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), nullable=True),
        sa.Column('final_text', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['template_id'], ['contract_templates.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contracts_owner_id', 'contracts', ['owner_id'])

    op.create_table(
        'contract_clauses',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('contract_id', sa.Text(), nullable=False),
        sa.Column('order_index', sa.BigInteger(), nullable=False),
        sa.Column('heading', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('clause_key', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['contract_id'], ['contracts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contract_clauses_contract_id', 'contract_clauses', ['contract_id'])


def downgrade() -> None:
    op.drop_index('ix_contract_clauses_contract_id', table_name='contract_clauses')
    op.drop_table('contract_clauses')
    op.drop_index('ix_contracts_owner_id', table_name='contracts')
    op.drop_table('contracts')
    op.drop_index('ix_contract_templates_owner_id', table_name='contract_templates')
    op.drop_table('contract_templates')
