"""quoting: initial schema

Revision ID: a3f1c2d4e5b6
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = 'a3f1c2d4e5b6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ('quoting',)
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_name', sa.String(length=256), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('applicant_id', sa.Integer(), nullable=True),
        sa.Column('group_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quotes_applicant_id'), 'quotes', ['applicant_id'], unique=False)
    op.create_index(op.f('ix_quotes_group_id'), 'quotes', ['group_id'], unique=False)
    op.create_index(op.f('ix_quotes_status'), 'quotes', ['status'], unique=False)
    op.create_table(
        'coverages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('product_type', sa.String(length=100), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_coverages_quote_id'), 'coverages', ['quote_id'], unique=False)
    op.create_table(
        'employee_classes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('class_name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_employee_classes_group_id'), 'employee_classes', ['group_id'], unique=False)
    op.create_table(
        'quote_benefits',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False),
        sa.Column('template_db_id', sa.Integer(), nullable=False),
        sa.Column('template_uuid', sa.String(length=36), nullable=False),
        sa.Column('template_name', sa.String(length=256), nullable=False),
        sa.Column('template_version', sa.String(length=20), nullable=False),
        sa.Column('category_name', sa.String(length=100), nullable=False),
        sa.Column('category_icon', sa.String(length=50), nullable=True),
        sa.Column('field_schema', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=False),
        sa.Column('configured_values', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=False),
        sa.Column('instance_number', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_quote_benefits_quote_id'), 'quote_benefits', ['quote_id'], unique=False)
    op.create_index(op.f('ix_quote_benefits_template_uuid'), 'quote_benefits', ['template_uuid'], unique=False)
    op.create_table(
        'applicants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=256), nullable=False),
        sa.Column('middle_name', sa.String(length=256), nullable=True),
        sa.Column('last_name', sa.String(length=256), nullable=False),
        sa.Column('birthdate', sa.Date(), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=256), nullable=True),
        sa.Column('address_line_1', sa.String(length=256), nullable=True),
        sa.Column('address_line_2', sa.String(length=256), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state_province', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=2), nullable=True),
        sa.Column('group_id', sa.Integer(), nullable=True),
        sa.Column('class_id', sa.Integer(), nullable=True),
        sa.Column('quote_type', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['employee_classes.id']),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_applicants_class_id'), 'applicants', ['class_id'], unique=False)
    op.create_index(op.f('ix_applicants_group_id'), 'applicants', ['group_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_applicants_group_id'), table_name='applicants')
    op.drop_index(op.f('ix_applicants_class_id'), table_name='applicants')
    op.drop_table('applicants')
    op.drop_index(op.f('ix_quote_benefits_template_uuid'), table_name='quote_benefits')
    op.drop_index(op.f('ix_quote_benefits_quote_id'), table_name='quote_benefits')
    op.drop_table('quote_benefits')
    op.drop_index(op.f('ix_employee_classes_group_id'), table_name='employee_classes')
    op.drop_table('employee_classes')
    op.drop_index(op.f('ix_coverages_quote_id'), table_name='coverages')
    op.drop_table('coverages')
    op.drop_index(op.f('ix_quotes_status'), table_name='quotes')
    op.drop_index(op.f('ix_quotes_group_id'), table_name='quotes')
    op.drop_index(op.f('ix_quotes_applicant_id'), table_name='quotes')
    op.drop_table('quotes')
    op.drop_table('groups')
