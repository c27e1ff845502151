"""customer: initial schema

Revision ID: c4d8e1f2a6b9
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = 'c4d8e1f2a6b9'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ('customer',)
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'individual_policies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_number', sa.String(length=50), nullable=False),
        sa.Column('source_quote_id', sa.Integer(), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('policy_number'),
    )
    op.create_index(op.f('ix_individual_policies_source_quote_id'), 'individual_policies', ['source_quote_id'], unique=False)
    op.create_table(
        'group_policies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_number', sa.String(length=50), nullable=False),
        sa.Column('source_quote_id', sa.Integer(), nullable=False),
        sa.Column('source_group_id', sa.Integer(), nullable=True),
        sa.Column('group_name', sa.String(length=256), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('policy_number'),
    )
    op.create_index(op.f('ix_group_policies_source_quote_id'), 'group_policies', ['source_quote_id'], unique=False)
    op.create_table(
        'policy_holders',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('middle_name', sa.String(length=256), nullable=True),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('email', sa.String(length=256), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('address_line_1', sa.String(length=256), nullable=True),
        sa.Column('address_line_2', sa.String(length=256), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state_province', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=2), nullable=True),
        sa.Column('source_applicant_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['policy_id'], ['individual_policies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_policy_holders_policy_id'), 'policy_holders', ['policy_id'], unique=False)
    op.create_table(
        'individual_policy_coverages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_id', sa.Integer(), nullable=False),
        sa.Column('product_type', sa.String(length=100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('premium', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.ForeignKeyConstraint(['policy_id'], ['individual_policies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_individual_policy_coverages_policy_id'), 'individual_policy_coverages', ['policy_id'], unique=False)
    op.create_table(
        'dependents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_holder_id', sa.Integer(), nullable=False),
        sa.Column('dependent_type', sa.String(length=30), nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('middle_name', sa.String(length=256), nullable=True),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['policy_holder_id'], ['policy_holders.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_dependents_policy_holder_id'), 'dependents', ['policy_holder_id'], unique=False)
    op.create_table(
        'beneficiaries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_holder_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('relationship', sa.String(length=100), nullable=True),
        sa.Column('percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['policy_holder_id'], ['policy_holders.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_beneficiaries_policy_holder_id'), 'beneficiaries', ['policy_holder_id'], unique=False)
    op.create_table(
        'dependent_coverages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('dependent_id', sa.Integer(), nullable=False),
        sa.Column('product_type', sa.String(length=100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('premium', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.ForeignKeyConstraint(['dependent_id'], ['dependents.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_dependent_coverages_dependent_id'), 'dependent_coverages', ['dependent_id'], unique=False)
    op.create_table(
        'policy_classes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_policy_id', sa.Integer(), nullable=False),
        sa.Column('class_name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['group_policy_id'], ['group_policies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_policy_classes_group_policy_id'), 'policy_classes', ['group_policy_id'], unique=False)
    op.create_table(
        'group_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_class_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('middle_name', sa.String(length=256), nullable=True),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('email', sa.String(length=256), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('source_applicant_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['policy_class_id'], ['policy_classes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_group_members_policy_class_id'), 'group_members', ['policy_class_id'], unique=False)
    op.create_table(
        'class_coverages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('policy_class_id', sa.Integer(), nullable=False),
        sa.Column('product_type', sa.String(length=100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('premium', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.ForeignKeyConstraint(['policy_class_id'], ['policy_classes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_class_coverages_policy_class_id'), 'class_coverages', ['policy_class_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_class_coverages_policy_class_id'), table_name='class_coverages')
    op.drop_table('class_coverages')
    op.drop_index(op.f('ix_group_members_policy_class_id'), table_name='group_members')
    op.drop_table('group_members')
    op.drop_index(op.f('ix_policy_classes_group_policy_id'), table_name='policy_classes')
    op.drop_table('policy_classes')
    op.drop_index(op.f('ix_dependent_coverages_dependent_id'), table_name='dependent_coverages')
    op.drop_table('dependent_coverages')
    op.drop_index(op.f('ix_beneficiaries_policy_holder_id'), table_name='beneficiaries')
    op.drop_table('beneficiaries')
    op.drop_index(op.f('ix_dependents_policy_holder_id'), table_name='dependents')
    op.drop_table('dependents')
    op.drop_index(op.f('ix_individual_policy_coverages_policy_id'), table_name='individual_policy_coverages')
    op.drop_table('individual_policy_coverages')
    op.drop_index(op.f('ix_policy_holders_policy_id'), table_name='policy_holders')
    op.drop_table('policy_holders')
    op.drop_index(op.f('ix_group_policies_source_quote_id'), table_name='group_policies')
    op.drop_table('group_policies')
    op.drop_index(op.f('ix_individual_policies_source_quote_id'), table_name='individual_policies')
    op.drop_table('individual_policies')
