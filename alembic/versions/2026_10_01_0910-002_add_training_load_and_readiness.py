"""Add daily loads, readiness assessments and baselines

Revision ID: 002
Revises: 001
Create Date: 2026-10-01 09:10:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    ]


def upgrade() -> None:
    """Create daily_loads, readiness_assessments and readiness_baselines."""
    op.create_table('daily_loads',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('log_date', sa.Date(), nullable=False),
        sa.Column('total_tss', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_duration_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('session_rpe_avg', sa.Float(), nullable=True),
        sa.Column('avg_hr', sa.Integer(), nullable=True),
        sa.Column('normalized_power', sa.Integer(), nullable=True),
        sa.Column('training_load', sa.Float(), nullable=True),
        sa.Column('tss_source', sa.String(length=16), nullable=True),
        sa.Column('zone_1_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('zone_2_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('zone_3_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('zone_4_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('zone_5_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ctl', sa.Float(), nullable=True),
        sa.Column('atl', sa.Float(), nullable=True),
        sa.Column('tsb', sa.Float(), nullable=True),
        sa.Column('monotony', sa.Float(), nullable=True),
        sa.Column('strain', sa.Float(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'log_date', name='uq_daily_load_user_date'))
    op.create_index(op.f('ix_daily_loads_user_id'), 'daily_loads', ['user_id'], unique=False)
    op.create_index(op.f('ix_daily_loads_log_date'), 'daily_loads', ['log_date'], unique=False)

    op.create_table('readiness_assessments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('assessment_date', sa.Date(), nullable=False),
        sa.Column('subjective_readiness', sa.Integer(), nullable=False),
        sa.Column('grip_strength_lbs', sa.Float(), nullable=True),
        sa.Column('vertical_jump_inches', sa.Float(), nullable=True),
        sa.Column('hrv_reading', sa.Float(), nullable=True),
        sa.Column('resting_hr', sa.Integer(), nullable=True),
        sa.Column('sleep_quality', sa.Integer(), nullable=True),
        sa.Column('sleep_hours', sa.Float(), nullable=True),
        sa.Column('tsb_value', sa.Float(), nullable=True),
        sa.Column('atl_value', sa.Float(), nullable=True),
        sa.Column('ctl_value', sa.Float(), nullable=True),
        sa.Column('baseline_hrv_avg', sa.Float(), nullable=True),
        sa.Column('calculated_readiness_score', sa.Integer(), nullable=False),
        sa.Column('recommended_intensity', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('adjustment_factor', sa.Float(), nullable=False, server_default='1.0'),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'assessment_date', name='uq_readiness_user_date'))
    op.create_index(op.f('ix_readiness_assessments_user_id'), 'readiness_assessments', ['user_id'], unique=False)
    op.create_index(op.f('ix_readiness_assessments_assessment_date'), 'readiness_assessments',
                    ['assessment_date'], unique=False)

    op.create_table('readiness_baselines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('avg_grip_strength_lbs', sa.Float(), nullable=True),
        sa.Column('avg_vertical_jump_inches', sa.Float(), nullable=True),
        sa.Column('avg_hrv', sa.Float(), nullable=True),
        sa.Column('avg_resting_hr', sa.Float(), nullable=True),
        sa.Column('avg_sleep_hours', sa.Float(), nullable=True),
        sa.Column('std_grip_strength', sa.Float(), nullable=True),
        sa.Column('std_vertical_jump', sa.Float(), nullable=True),
        sa.Column('std_hrv', sa.Float(), nullable=True),
        sa.Column('std_resting_hr', sa.Float(), nullable=True),
        sa.Column('std_sleep_hours', sa.Float(), nullable=True),
        sa.Column('grip_sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('jump_sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('hrv_sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sleep_sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('resting_hr_sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('last_updated', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_readiness_baselines_user_id'), 'readiness_baselines', ['user_id'], unique=True)


def downgrade() -> None:
    """Drop training load and readiness tables."""
    op.drop_index(op.f('ix_readiness_baselines_user_id'), table_name='readiness_baselines')
    op.drop_table('readiness_baselines')
    op.drop_index(op.f('ix_readiness_assessments_assessment_date'), table_name='readiness_assessments')
    op.drop_index(op.f('ix_readiness_assessments_user_id'), table_name='readiness_assessments')
    op.drop_table('readiness_assessments')
    op.drop_index(op.f('ix_daily_loads_log_date'), table_name='daily_loads')
    op.drop_index(op.f('ix_daily_loads_user_id'), table_name='daily_loads')
    op.drop_table('daily_loads')
