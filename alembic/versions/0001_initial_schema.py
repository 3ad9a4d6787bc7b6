"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-01-06 09:00:00.000000

Creates the school fee and attendance tables:
- users / teachers: accounts and teacher profiles
- classes / fee_structures / class_teachers: class registry, default fees, assignments
- students: enrolment and per-student monthly fee components
- fee_records: one row per student per (month, year)
- attendance: one row per student per day
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


USER_ROLE = sa.Enum('ADMIN', 'TEACHER', name='userrole')
FEE_STATUS = sa.Enum('PENDING', 'PAID', 'OVERDUE', name='feestatus')
PAYMENT_MODE = sa.Enum('CASH', 'ONLINE', 'CHEQUE', name='paymentmode')
ATTENDANCE_STATUS = sa.Enum('PRESENT', 'ABSENT', name='attendancestatus')

FEE_COMPONENTS = (
    'tuition_fee',
    'lab_fee',
    'library_fee',
    'sports_fee',
    'exam_fee',
    'other_fee',
)


def _id_column() -> sa.Column:
    return sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False)


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()),
    ]


def _fee_component_columns() -> list[sa.Column]:
    return [
        sa.Column(name, sa.Float(), nullable=False, server_default='0')
        for name in FEE_COMPONENTS
    ]


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        _id_column(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.Text(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', USER_ROLE, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'teachers',
        _id_column(),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('employee_id', sa.String(length=50), nullable=False),
        sa.Column('phone_number', sa.String(length=50), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('qualification', sa.String(length=255), nullable=True),
        sa.Column('joining_date', sa.Date(), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_teachers_employee_id', 'teachers', ['employee_id'], unique=True)

    op.create_table(
        'classes',
        _id_column(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_classes_name', 'classes', ['name'], unique=True)

    op.create_table(
        'fee_structures',
        _id_column(),
        sa.Column('class_id', sa.BigInteger(), nullable=False),
        *_fee_component_columns(),
        sa.Column('total_monthly_fee', sa.Float(), nullable=False, server_default='0'),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('class_id'),
    )

    op.create_table(
        'class_teachers',
        _id_column(),
        sa.Column('teacher_id', sa.BigInteger(), nullable=False),
        sa.Column('class_id', sa.BigInteger(), nullable=False),
        sa.Column('subject', sa.String(length=100), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['teacher_id'], ['teachers.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('teacher_id', 'class_id', name='uq_class_teacher'),
    )
    op.create_index('ix_class_teachers_teacher_id', 'class_teachers', ['teacher_id'])
    op.create_index('ix_class_teachers_class_id', 'class_teachers', ['class_id'])

    op.create_table(
        'students',
        _id_column(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('father_name', sa.String(length=255), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('class_id', sa.BigInteger(), nullable=False),
        sa.Column('roll_number', sa.String(length=50), nullable=False),
        sa.Column('phone_number', sa.String(length=50), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('admission_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_fee_component_columns(),
        sa.Column('total_monthly_fee', sa.Float(), nullable=False, server_default='0'),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
    )
    op.create_index('ix_students_class_id', 'students', ['class_id'])
    op.create_index('ix_students_roll_number', 'students', ['roll_number'], unique=True)

    op.create_table(
        'fee_records',
        _id_column(),
        sa.Column('student_id', sa.BigInteger(), nullable=False),
        sa.Column('month', sa.String(length=20), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        *_fee_component_columns(),
        sa.Column('total_fee', sa.Float(), nullable=False, server_default='0'),
        sa.Column('amount_paid', sa.Float(), nullable=False, server_default='0'),
        sa.Column('balance', sa.Float(), nullable=False, server_default='0'),
        sa.Column('status', FEE_STATUS, nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_mode', PAYMENT_MODE, nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('student_id', 'month', 'year', name='uq_fee_record_student_period'),
    )
    op.create_index('ix_fee_records_student_id', 'fee_records', ['student_id'])
    op.create_index('ix_fee_records_year', 'fee_records', ['year'])
    op.create_index('ix_fee_records_status', 'fee_records', ['status'])

    op.create_table(
        'attendance',
        _id_column(),
        sa.Column('student_id', sa.BigInteger(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', ATTENDANCE_STATUS, nullable=False),
        sa.Column('marked_by', sa.BigInteger(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['marked_by'], ['teachers.id']),
        sa.UniqueConstraint('student_id', 'date', name='uq_attendance_student_date'),
    )
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])
    op.create_index('ix_attendance_date', 'attendance', ['date'])
    op.create_index('ix_attendance_marked_by', 'attendance', ['marked_by'])


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_table('attendance')
    op.drop_table('fee_records')
    op.drop_table('students')
    op.drop_table('class_teachers')
    op.drop_table('fee_structures')
    op.drop_table('classes')
    op.drop_table('teachers')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in (ATTENDANCE_STATUS, PAYMENT_MODE, FEE_STATUS, USER_ROLE):
        enum_type.drop(bind, checkfirst=True)
