"""initial_roster_schema

Revision ID: c4e1a7f0b2d9
Revises:
Create Date: 2026-10-19 09:00:00.000000

계정, 계정 설정, 직원, 시프트 패턴, 스케줄 엔트리, 교대/휴가 요청 테이블 생성.
Create accounts, account_settings, employees, shift_patterns,
schedule_entries and shift_requests tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'c4e1a7f0b2d9'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # accounts — 최상위 테넌트 (Top-level tenant)
    op.create_table(
        'accounts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # account_settings — 계정별 로스터 설정, NULL이면 전역 기본값
    # Per-account roster settings; NULL falls back to global defaults
    op.create_table(
        'account_settings',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('rotation_block_days', sa.Integer(), nullable=True),
        sa.Column('max_leaves_per_month', sa.Integer(), nullable=True),
        sa.Column('group_link', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # employees — 직원 (논리 삭제: is_active)
    op.create_table(
        'employees',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(100), server_default='', nullable=False),
        sa.Column('division', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('pin_hash', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_employees_account_active', 'employees', ['account_id', 'is_active'])

    # shift_patterns — 근무 시간 패턴
    op.create_table(
        'shift_patterns',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('account_id', 'name', name='uq_shift_pattern_account_name'),
    )

    # schedule_entries — 확정 로스터 셀, 시간은 패턴의 값 복사
    # Committed roster cells; shift times are a value copy of the pattern
    op.create_table(
        'schedule_entries',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('kind', sa.String(20), server_default='filled', nullable=False),
        sa.Column('shift_name', sa.String(100), nullable=True),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('source', sa.String(20), server_default='manual', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_schedule_entries_account_date', 'schedule_entries', ['account_id', 'work_date'])

    # 유니크 제약 — 직원+날짜당 하나의 엔트리
    # At most one entry per employee and date
    op.create_unique_constraint(
        'uq_schedule_entry_employee_date',
        'schedule_entries',
        ['employee_id', 'work_date'],
    )

    # shift_requests — 교대/휴가 요청
    op.create_table(
        'shift_requests',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('account_id', UUID(as_uuid=True), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('requester_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('original_date', sa.Date(), nullable=False),
        sa.Column('target_date', sa.Date(), nullable=True),
        sa.Column('target_employee_id', UUID(as_uuid=True), sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=True),
        sa.Column('reason', sa.Text(), server_default='', nullable=False),
        sa.Column('partner_responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('decided_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_shift_requests_account_status', 'shift_requests', ['account_id', 'status'])
    op.create_index('ix_shift_requests_requester_created', 'shift_requests', ['requester_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_shift_requests_requester_created', table_name='shift_requests')
    op.drop_index('ix_shift_requests_account_status', table_name='shift_requests')
    op.drop_table('shift_requests')
    op.drop_constraint('uq_schedule_entry_employee_date', 'schedule_entries', type_='unique')
    op.drop_index('ix_schedule_entries_account_date', table_name='schedule_entries')
    op.drop_table('schedule_entries')
    op.drop_table('shift_patterns')
    op.drop_index('ix_employees_account_active', table_name='employees')
    op.drop_table('employees')
    op.drop_table('account_settings')
    op.drop_table('accounts')
