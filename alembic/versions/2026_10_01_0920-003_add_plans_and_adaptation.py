"""Add training plans, suggested workouts, adaptation settings and recommendations

Revision ID: 003
Revises: 002
Create Date: 2026-10-01 09:20:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '003'
down_revision: Union[str, None] = '002'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    ]


def upgrade() -> None:
    """Create plan and adaptation tables."""
    op.create_table('training_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('goal', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_plans_user_id'), 'training_plans', ['user_id'], unique=False)
    op.create_index(op.f('ix_training_plans_status'), 'training_plans', ['status'], unique=False)

    op.create_table('suggested_workouts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('suggested_date', sa.Date(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('category', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('primary_intensity', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('planned_duration_minutes', sa.Integer(), nullable=True),
        sa.Column('planned_tss', sa.Float(), nullable=True),
        sa.Column('order_in_day', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False, server_default='suggested'),
        sa.Column('readiness_adjusted', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('adjustment_factor', sa.Float(), nullable=True),
        sa.Column('original_intensity', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['plan_id'], ['training_plans.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_suggested_workouts_plan_id'), 'suggested_workouts', ['plan_id'], unique=False)
    op.create_index(op.f('ix_suggested_workouts_suggested_date'), 'suggested_workouts', ['suggested_date'],
                    unique=False)

    op.create_table('adaptation_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('auto_evaluate', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('weekly_review_day', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notify_pending_recommendations', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('compliance_alert_threshold', sa.Float(), nullable=False, server_default='0.8'),
        sa.Column('tsb_alert_threshold', sa.Float(), nullable=False, server_default='-20'),
        sa.Column('readiness_alert_threshold', sa.Integer(), nullable=False, server_default='40'),
        sa.Column('day_of_adjustment_enabled', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('day_of_readiness_threshold', sa.Integer(), nullable=False, server_default='50'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_adaptation_settings_user_id'), 'adaptation_settings', ['user_id'], unique=True)

    op.create_table('plan_recommendations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('recommendation_type', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('scope', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('trigger_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('trigger_date', sa.DateTime(), nullable=False),
        sa.Column('trigger_data', sa.JSON(), nullable=False),
        sa.Column('target_workout_id', sa.Integer(), nullable=True),
        sa.Column('proposed_changes', sa.JSON(), nullable=False),
        sa.Column('reasoning', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('confidence_score', sa.Float(), nullable=False, server_default='0.5'),
        sa.Column('evidence_summary', sa.JSON(), nullable=False),
        sa.Column('projected_impact', sa.JSON(), nullable=False),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False, server_default='pending'),
        sa.Column('user_notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('modified_changes', sa.JSON(), nullable=True),
        sa.Column('responded_at', sa.DateTime(), nullable=True),
        sa.Column('applied_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.ForeignKeyConstraint(['plan_id'], ['training_plans.id'], ),
        sa.ForeignKeyConstraint(['target_workout_id'], ['suggested_workouts.id'], ),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_plan_recommendations_user_id'), 'plan_recommendations', ['user_id'], unique=False)
    op.create_index(op.f('ix_plan_recommendations_plan_id'), 'plan_recommendations', ['plan_id'], unique=False)
    op.create_index(op.f('ix_plan_recommendations_recommendation_type'), 'plan_recommendations',
                    ['recommendation_type'], unique=False)
    op.create_index(op.f('ix_plan_recommendations_trigger_date'), 'plan_recommendations', ['trigger_date'],
                    unique=False)
    op.create_index(op.f('ix_plan_recommendations_status'), 'plan_recommendations', ['status'], unique=False)


def downgrade() -> None:
    """Drop plan and adaptation tables."""
    for index in ('status', 'trigger_date', 'recommendation_type', 'plan_id', 'user_id'):
        op.drop_index(op.f(f'ix_plan_recommendations_{index}'), table_name='plan_recommendations')
    op.drop_table('plan_recommendations')
    op.drop_index(op.f('ix_adaptation_settings_user_id'), table_name='adaptation_settings')
    op.drop_table('adaptation_settings')
    op.drop_index(op.f('ix_suggested_workouts_suggested_date'), table_name='suggested_workouts')
    op.drop_index(op.f('ix_suggested_workouts_plan_id'), table_name='suggested_workouts')
    op.drop_table('suggested_workouts')
    op.drop_index(op.f('ix_training_plans_status'), table_name='training_plans')
    op.drop_index(op.f('ix_training_plans_user_id'), table_name='training_plans')
    op.drop_table('training_plans')
