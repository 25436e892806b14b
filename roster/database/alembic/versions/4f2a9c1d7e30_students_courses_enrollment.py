"""students, courses and enrollment

Revision ID: 4f2a9c1d7e30
Revises:
Create Date: 2026-10-19 11:42:08.113902

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4f2a9c1d7e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_json = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')
enrollment_role = sa.Enum('student', 'auditor', 'assistant', name='enrollment_role')


def upgrade() -> None:
    op.create_table(
        'student',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', _json, nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('normalized_name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_student')),
        sa.UniqueConstraint('email', name='uq_student_email'),
    )
    op.create_index('ix_student_normalized_name', 'student', ['normalized_name'], unique=False)

    op.create_table(
        'course',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', _json, nullable=True),
        sa.Column('code', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=128), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_course')),
        sa.UniqueConstraint('code', name='uq_course_code'),
    )
    op.create_index('ix_course_slug', 'course', ['slug'], unique=False)

    # M:M association with its own metadata
    op.create_table(
        'enrollment',
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('meta_data', _json, nullable=True),
        sa.Column('student_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('role', enrollment_role, server_default=sa.text("'student'"), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['student.id'],
                                name=op.f('fk_enrollment_student_id_student'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'],
                                name=op.f('fk_enrollment_course_id_course'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('student_id', 'course_id', name=op.f('pk_enrollment')),
        sa.UniqueConstraint('student_id', 'course_id', name='uq_enrollment_student_course'),
    )
    op.create_index('ix_enrollment_course_id', 'enrollment', ['course_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_enrollment_course_id', table_name='enrollment')
    op.drop_table('enrollment')
    enrollment_role.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_course_slug', table_name='course')
    op.drop_table('course')
    op.drop_index('ix_student_normalized_name', table_name='student')
    op.drop_table('student')
