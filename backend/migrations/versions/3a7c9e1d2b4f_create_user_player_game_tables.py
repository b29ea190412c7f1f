"""create user, player, game and game_player tables

Revision ID: 3a7c9e1d2b4f
Revises:
Create Date: 2025-03-02 10:12:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3a7c9e1d2b4f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.String(length=24), primary_key=True),
            sa.Column('created_by', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('instagram_handle', sa.String(length=64), nullable=True),
            sa.Column('profile_image_url', sa.String(length=512), nullable=True),
            sa.Column('bio', sa.Text(), nullable=True),
            sa.Column('height_inches', sa.Integer(), nullable=True),
            sa.Column('weight_lbs', sa.Integer(), nullable=True),
            sa.Column('position', sa.String(length=32), nullable=True),
            sa.Column('date_of_birth', sa.Date(), nullable=True),
            sa.Column('city', sa.String(length=64), nullable=True),
            sa.Column('state', sa.String(length=64), nullable=True),
            sa.Column('overall_stats', sa.JSON(), nullable=False),
            sa.Column('all_time_shot_data', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
            sa.UniqueConstraint('instagram_handle'),
        )
        op.create_index('ix_player_name', 'player', ['name'])

    if 'game' not in existing_tables:
        op.create_table(
            'game',
            sa.Column('id', sa.String(length=24), primary_key=True),
            sa.Column('game_type', sa.String(length=32), nullable=True),
            sa.Column('status', sa.String(length=32), nullable=True),
            sa.Column('final_score', sa.JSON(), nullable=True),
            sa.Column('teams', sa.JSON(), nullable=True),
            sa.Column('winner', sa.String(length=64), nullable=True),
            sa.Column('events', sa.JSON(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_game_status', 'game', ['status'])
        op.create_index('ix_game_created_at', 'game', ['created_at'])

    if 'game_player' not in existing_tables:
        op.create_table(
            'game_player',
            sa.Column('game_id', sa.String(length=24), sa.ForeignKey('game.id', ondelete='CASCADE'), primary_key=True),
            sa.Column('player_id', sa.String(length=24), sa.ForeignKey('player.id', ondelete='CASCADE'), primary_key=True),
        )


def downgrade():
    op.drop_table('game_player')
    op.drop_index('ix_game_created_at', table_name='game')
    op.drop_index('ix_game_status', table_name='game')
    op.drop_table('game')
    op.drop_index('ix_player_name', table_name='player')
    op.drop_table('player')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
