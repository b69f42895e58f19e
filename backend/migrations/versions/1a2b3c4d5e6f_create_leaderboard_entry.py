"""create leaderboard_entry

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'leaderboard_entry' in insp.get_table_names():
        return
    op.create_table(
        'leaderboard_entry',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    with op.batch_alter_table('leaderboard_entry') as batch_op:
        batch_op.create_index('ix_leaderboard_entry_user_id', ['user_id'], unique=True)


def downgrade():
    with op.batch_alter_table('leaderboard_entry') as batch_op:
        batch_op.drop_index('ix_leaderboard_entry_user_id')
    op.drop_table('leaderboard_entry')
