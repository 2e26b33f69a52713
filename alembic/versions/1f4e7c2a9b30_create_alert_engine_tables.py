"""create alert engine tables

Revision ID: 1f4e7c2a9b30
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '1f4e7c2a9b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('tag', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('needs_group_move', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('needs_group_move_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('moved_to_group', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('moved_to_group_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('tag', name='uq_animals_tag'),
    )

    op.create_table(
        'breeding_records',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('animal_id', sa.Uuid(), sa.ForeignKey('animals.id'), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('service_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('pregnancy_check_done', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('pregnancy_result', sa.String(length=16), nullable=True),
        sa.Column('pregnancy_check_date', sa.Date(), nullable=True),
        sa.Column('expected_delivery_date', sa.Date(), nullable=True),
        sa.Column('actual_delivery_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index(
        'ix_breeding_records_animal_date', 'breeding_records', ['animal_id', 'event_date']
    )
    op.create_index(
        'ix_breeding_records_pending',
        'breeding_records',
        ['pregnancy_check_done', 'event_date'],
        postgresql_where=sa.text('pregnancy_check_done = false AND actual_delivery_date IS NULL'),
    )

    op.create_table(
        'vaccination_records',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('animal_id', sa.Uuid(), sa.ForeignKey('animals.id'), nullable=False),
        sa.Column('vaccine_id', sa.Uuid(), nullable=True),
        sa.Column('vaccine_name', sa.String(length=120), nullable=True),
        sa.Column('administered_date', sa.Date(), nullable=True),
        sa.Column('next_due_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index(
        'ix_vaccination_records_animal_vaccine',
        'vaccination_records',
        ['animal_id', 'vaccine_id'],
    )

    op.create_table(
        'feed_items',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('current_stock', sa.DECIMAL(12, 2), nullable=True),
        sa.Column('minimum_stock_level', sa.DECIMAL(12, 2), nullable=True),
        sa.Column('unit', sa.String(length=16), nullable=False, server_default='kg'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )

    op.create_table(
        'app_settings',
        sa.Column('key', sa.String(length=100), primary_key=True, nullable=False),
        sa.Column('value', postgresql.JSONB(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )

    op.create_table(
        'alerts',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('bucket', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('evaluation_date', sa.Date(), nullable=False),
        sa.Column('payload', postgresql.JSONB(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_alerts_evaluation_date', 'alerts', ['evaluation_date'])

    op.create_table(
        'notification_states',
        sa.Column('alert_id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('snooze_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'alert_audit_log',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('recipient', sa.String(length=64), nullable=False),
        sa.Column('alert_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_alert_audit_log_created', 'alert_audit_log', ['created_at'])
    op.create_index('ix_alert_audit_log_recipient', 'alert_audit_log', ['recipient'])

    op.create_table(
        'device_tokens',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('platform', sa.String(length=20), nullable=False),
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('disabled', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_active_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('uq_device_tokens_token', 'device_tokens', ['token'], unique=True)
    op.create_index('ix_device_tokens_user', 'device_tokens', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_device_tokens_user', table_name='device_tokens')
    op.drop_index('uq_device_tokens_token', table_name='device_tokens')
    op.drop_table('device_tokens')
    op.drop_index('ix_alert_audit_log_recipient', table_name='alert_audit_log')
    op.drop_index('ix_alert_audit_log_created', table_name='alert_audit_log')
    op.drop_table('alert_audit_log')
    op.drop_table('notification_states')
    op.drop_index('ix_alerts_evaluation_date', table_name='alerts')
    op.drop_table('alerts')
    op.drop_table('app_settings')
    op.drop_table('feed_items')
    op.drop_index('ix_vaccination_records_animal_vaccine', table_name='vaccination_records')
    op.drop_table('vaccination_records')
    op.drop_index('ix_breeding_records_pending', table_name='breeding_records')
    op.drop_index('ix_breeding_records_animal_date', table_name='breeding_records')
    op.drop_table('breeding_records')
    op.drop_table('animals')
