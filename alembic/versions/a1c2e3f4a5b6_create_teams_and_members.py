"""create_teams_and_members

Revision ID: a1c2e3f4a5b6
Revises:
Create Date: 2026-10-19 10:00:00.000000

팀/회원 테이블 생성: teams, members.
Create the teams and members tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c2e3f4a5b6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # teams — 팀 (unique name)
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
    )

    # members — 회원 (nullable username, optional team)
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id', ondelete='SET NULL'), nullable=True),
        sa.CheckConstraint('age >= 0', name='ck_member_age_non_negative'),
    )

    # 회원 인덱스 — Member indexes used by search
    op.create_index('ix_members_username', 'members', ['username'])
    op.create_index('ix_members_team_id', 'members', ['team_id'])


def downgrade() -> None:
    op.drop_index('ix_members_team_id', table_name='members')
    op.drop_index('ix_members_username', table_name='members')
    op.drop_table('members')
    op.drop_table('teams')
