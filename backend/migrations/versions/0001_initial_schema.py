"""Initial schema: users, companies, settings, positions, permissions, resources

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
    ]


def upgrade():
    op.create_table('users',
        *_base_columns(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('password_salt', sa.String(length=64), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('street_address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('province', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('phone_number', sa.String(length=50), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('position_id', sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index('ix_users_email_active', 'users', ['email', 'is_active'], unique=False)

    op.create_table('company_details',
        *_base_columns(),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('team_size', sa.String(length=50), nullable=True),
        sa.Column('estimated_annual_revenue', sa.String(length=50), nullable=True),
        sa.Column('top_priority', sa.String(length=255), nullable=True),
        sa.Column('industry', sa.String(length=100), nullable=True),
        sa.Column('heard_about_us', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id')
    )

    op.create_table('companies',
        *_base_columns(),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('company_details_id', sa.Uuid(), nullable=True),
        sa.Column('company_name', sa.String(length=255), nullable=True),
        sa.Column('phone_number', sa.String(length=50), nullable=True),
        sa.Column('website_url', sa.String(length=255), nullable=True),
        sa.Column('company_email', sa.String(length=255), nullable=True),
        sa.Column('street1', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('post_code', sa.String(length=20), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('timezone', sa.String(length=64), nullable=True),
        sa.Column('date_format', sa.String(length=32), nullable=True),
        sa.Column('time_format', sa.String(length=32), nullable=True),
        sa.Column('first_day_of_week', sa.String(length=16), nullable=True),
        sa.Column('display_business_hours', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_details_id'], ['company_details.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id'),
        sa.UniqueConstraint('company_details_id')
    )

    op.create_table('company_memberships',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'company_id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index('ix_company_memberships_company_id', 'company_memberships', ['company_id'], unique=False)

    op.create_table('user_positions',
        *_base_columns(),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=32), nullable=False),
        sa.CheckConstraint(
            "name IN ('COMPANY_OWNER', 'ADMIN', 'MANAGER', 'DISPATCHER', "
            "'WORKER', 'LIMITED_WORKER', 'CUSTOM')",
            name='valid_position_check'
        ),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('company_id', 'name', name='uq_user_positions_company_name')
    )
    op.create_index(op.f('ix_user_positions_company_id'), 'user_positions', ['company_id'], unique=False)

    # users.position_id closes the users -> companies -> user_positions cycle
    op.create_foreign_key(
        'fk_users_position_id', 'users', 'user_positions',
        ['position_id'], ['id'], ondelete='SET NULL'
    )

    op.create_table('accounts',
        *_base_columns(),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('is_blocking_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id')
    )

    workday = '{"start": "09:00", "end": "17:00", "enabled": true}'
    weekend = '{"start": "09:00", "end": "17:00", "enabled": false}'
    op.create_table('business_hours',
        *_base_columns(),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('monday', sa.String(length=255), nullable=False, server_default=workday),
        sa.Column('tuesday', sa.String(length=255), nullable=False, server_default=workday),
        sa.Column('wednesday', sa.String(length=255), nullable=False, server_default=workday),
        sa.Column('thursday', sa.String(length=255), nullable=False, server_default=workday),
        sa.Column('friday', sa.String(length=255), nullable=False, server_default=workday),
        sa.Column('saturday', sa.String(length=255), nullable=False, server_default=weekend),
        sa.Column('sunday', sa.String(length=255), nullable=False, server_default=weekend),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id')
    )

    op.create_table('communications',
        *_base_columns(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('surveys', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('error_messages', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('labour_costs',
        *_base_columns(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('labour_cost', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('cost_unit', sa.String(length=16), nullable=False, server_default='PER_HOUR'),
        sa.CheckConstraint("cost_unit IN ('PER_HOUR', 'PER_MONTH')", name='valid_cost_unit_check'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('permissions',
        *_base_columns(),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('verification_tokens',
        *_base_columns(),
        sa.Column('token', sa.String(length=128), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_verification_tokens_token'), 'verification_tokens', ['token'], unique=True)
    op.create_index(op.f('ix_verification_tokens_user_id'), 'verification_tokens', ['user_id'], unique=False)

    op.create_table('resources',
        *_base_columns(),
        sa.Column('company_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False, server_default='OTHER'),
        sa.Column('additional_properties', sa.JSON(), nullable=True),
        sa.CheckConstraint(
            "type IN ('TRUCK', 'CAR', 'VAN', 'TRAILER', 'EQUIPMENT', 'OTHER')",
            name='valid_resource_type_check'
        ),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_resources_company_id'), 'resources', ['company_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_resources_company_id'), table_name='resources')
    op.drop_table('resources')
    op.drop_index(op.f('ix_verification_tokens_user_id'), table_name='verification_tokens')
    op.drop_index(op.f('ix_verification_tokens_token'), table_name='verification_tokens')
    op.drop_table('verification_tokens')
    op.drop_table('permissions')
    op.drop_table('labour_costs')
    op.drop_table('communications')
    op.drop_table('business_hours')
    op.drop_table('accounts')
    op.drop_constraint('fk_users_position_id', 'users', type_='foreignkey')
    op.drop_index(op.f('ix_user_positions_company_id'), table_name='user_positions')
    op.drop_table('user_positions')
    op.drop_index('ix_company_memberships_company_id', table_name='company_memberships')
    op.drop_table('company_memberships')
    op.drop_table('companies')
    op.drop_table('company_details')
    op.drop_index('ix_users_email_active', table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
