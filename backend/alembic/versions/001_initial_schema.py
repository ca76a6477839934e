"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Detect database type
    bind = op.get_bind()
    is_sqlite = bind.dialect.name == 'sqlite'

    false_default = '0' if is_sqlite else 'false'
    true_default = '1' if is_sqlite else 'true'
    timestamp_default = sa.text("(datetime('now'))") if is_sqlite else sa.text('now()')

    # ------------------------------------------------------------------
    # admins
    # ------------------------------------------------------------------
    op.create_table(
        'admins',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='moderator'),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=true_default),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('two_factor_enabled', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('two_factor_secret', sa.String(length=64), nullable=True),
        sa.Column('login_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('lock_until', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_admins_username', 'admins', ['username'])
    op.create_index('ix_admins_email', 'admins', ['email'])
    op.create_index('ix_admins_is_active', 'admins', ['is_active'])

    # ------------------------------------------------------------------
    # admin_logs (append-only)
    # ------------------------------------------------------------------
    op.create_table(
        'admin_logs',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('admin_id', sa.String(36), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('target', sa.String(length=255), nullable=True),
        sa.Column('target_type', sa.String(length=20), nullable=True),
        sa.Column('details', sa.JSON(), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False, server_default=true_default),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['admin_id'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admin_logs_admin_id', 'admin_logs', ['admin_id'])
    op.create_index('ix_admin_logs_action', 'admin_logs', ['action'])
    op.create_index('ix_admin_logs_target_type', 'admin_logs', ['target_type'])
    op.create_index('ix_admin_logs_success', 'admin_logs', ['success'])
    op.create_index('ix_admin_logs_created_at', 'admin_logs', ['created_at'])

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.Column('last_name', sa.String(length=20), nullable=False, server_default=''),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('biography', sa.String(length=70), nullable=False, server_default=''),
        sa.Column('status', sa.String(length=10), nullable=False, server_default='offline'),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_blocked', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('block_reason', sa.String(length=500), nullable=True),
        sa.Column('blocked_at', sa.DateTime(), nullable=True),
        sa.Column('blocked_by', sa.String(36), nullable=True),
        sa.Column('warnings_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_warning', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['blocked_by'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('phone'),
    )
    op.create_index('ix_users_username', 'users', ['username'])
    op.create_index('ix_users_phone', 'users', ['phone'])
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('ix_users_is_blocked', 'users', ['is_blocked'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # ------------------------------------------------------------------
    # rooms + membership tables
    # ------------------------------------------------------------------
    op.create_table(
        'rooms',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('creator_id', sa.String(36), nullable=True),
        sa.Column('is_blocked', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('block_reason', sa.String(length=500), nullable=True),
        sa.Column('blocked_at', sa.DateTime(), nullable=True),
        sa.Column('blocked_by', sa.String(36), nullable=True),
        sa.Column('is_reported', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('report_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id']),
        sa.ForeignKeyConstraint(['blocked_by'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rooms_type', 'rooms', ['type'])
    op.create_index('ix_rooms_creator_id', 'rooms', ['creator_id'])
    op.create_index('ix_rooms_is_blocked', 'rooms', ['is_blocked'])
    op.create_index('ix_rooms_is_reported', 'rooms', ['is_reported'])
    op.create_index('ix_rooms_created_at', 'rooms', ['created_at'])

    for table in ('room_participants', 'room_admins'):
        op.create_table(
            table,
            sa.Column('room_id', sa.String(36), nullable=False),
            sa.Column('user_id', sa.String(36), nullable=False),
            sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('room_id', 'user_id'),
        )
        op.create_index(f'ix_{table}_user_id', table, ['user_id'])

    # ------------------------------------------------------------------
    # messages
    # ------------------------------------------------------------------
    op.create_table(
        'messages',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('sender_id', sa.String(36), nullable=False),
        sa.Column('room_id', sa.String(36), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('file_data', sa.JSON(), nullable=True),
        sa.Column('voice_data', sa.JSON(), nullable=True),
        sa.Column('is_edited', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('is_reported', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('report_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('deleted_by', sa.String(36), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id']),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.ForeignKeyConstraint(['deleted_by'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_room_id', 'messages', ['room_id'])
    op.create_index('ix_messages_is_reported', 'messages', ['is_reported'])
    op.create_index('ix_messages_is_deleted', 'messages', ['is_deleted'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    # ------------------------------------------------------------------
    # media
    # ------------------------------------------------------------------
    op.create_table(
        'media',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('sender_id', sa.String(36), nullable=False),
        sa.Column('room_id', sa.String(36), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=True),
        sa.Column('filename', sa.String(length=255), nullable=True),
        sa.Column('mimetype', sa.String(length=100), nullable=True),
        sa.Column('size', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('is_reported', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('report_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('deleted_by', sa.String(36), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        sa.Column('scan_result', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id']),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id']),
        sa.ForeignKeyConstraint(['deleted_by'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_media_sender_id', 'media', ['sender_id'])
    op.create_index('ix_media_room_id', 'media', ['room_id'])
    op.create_index('ix_media_mimetype', 'media', ['mimetype'])
    op.create_index('ix_media_is_reported', 'media', ['is_reported'])
    op.create_index('ix_media_is_deleted', 'media', ['is_deleted'])
    op.create_index('ix_media_created_at', 'media', ['created_at'])

    # ------------------------------------------------------------------
    # reports
    # ------------------------------------------------------------------
    op.create_table(
        'reports',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('reporter_id', sa.String(36), nullable=False),
        sa.Column('target_type', sa.String(length=10), nullable=False),
        sa.Column('target_id', sa.String(36), nullable=False),
        sa.Column('reason', sa.String(length=30), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=10), nullable=False, server_default='pending'),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='medium'),
        sa.Column('admin_id', sa.String(36), nullable=True),
        sa.Column('admin_action', sa.String(length=20), nullable=True),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('action_date', sa.DateTime(), nullable=True),
        sa.Column('evidence', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['reporter_id'], ['users.id']),
        sa.ForeignKeyConstraint(['admin_id'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reports_reporter_id', 'reports', ['reporter_id'])
    op.create_index('ix_reports_target_id', 'reports', ['target_id'])
    op.create_index('ix_reports_status', 'reports', ['status'])
    op.create_index('ix_reports_priority', 'reports', ['priority'])
    op.create_index('ix_reports_created_at', 'reports', ['created_at'])

    # ------------------------------------------------------------------
    # system_settings
    # ------------------------------------------------------------------
    op.create_table(
        'system_settings',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('data_type', sa.String(length=10), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=false_default),
        sa.Column('last_modified_by', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=timestamp_default),
        sa.ForeignKeyConstraint(['last_modified_by'], ['admins.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )
    op.create_index('ix_system_settings_key', 'system_settings', ['key'])
    op.create_index('ix_system_settings_category', 'system_settings', ['category'])


def downgrade() -> None:
    op.drop_table('system_settings')
    op.drop_table('reports')
    op.drop_table('media')
    op.drop_table('messages')
    op.drop_table('room_admins')
    op.drop_table('room_participants')
    op.drop_table('rooms')
    op.drop_table('users')
    op.drop_table('admin_logs')
    op.drop_table('admins')
