"""initial ladder game schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('balance', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)

    op.create_table(
        'question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('answer1', sa.String(length=255), nullable=False),
        sa.Column('answer2', sa.String(length=255), nullable=False),
        sa.Column('answer3', sa.String(length=255), nullable=False),
        sa.Column('answer4', sa.String(length=255), nullable=False),
        sa.Column('correct_index', sa.Integer(), nullable=False, server_default='1'),
        sa.CheckConstraint('level >= 0 AND level <= 14', name='ck_question_level'),
        sa.CheckConstraint('correct_index >= 1 AND correct_index <= 4', name='ck_question_correct_index'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_question_level', 'question', ['level'])

    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('current_level', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_failed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('finished_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('prize', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('fifty_fifty_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('audience_help_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('friend_call_used', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_game_user_id', 'game', ['user_id'])

    op.create_table(
        'game_question',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('a', sa.Integer(), nullable=False),
        sa.Column('b', sa.Integer(), nullable=False),
        sa.Column('c', sa.Integer(), nullable=False),
        sa.Column('d', sa.Integer(), nullable=False),
        sa.Column('help_hash', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['question_id'], ['question.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_id', 'level', name='uq_game_question_level'),
    )
    op.create_index('ix_game_question_game_id', 'game_question', ['game_id'])


def downgrade():
    op.drop_index('ix_game_question_game_id', table_name='game_question')
    op.drop_table('game_question')
    op.drop_index('ix_game_user_id', table_name='game')
    op.drop_table('game')
    op.drop_index('ix_question_level', table_name='question')
    op.drop_table('question')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
