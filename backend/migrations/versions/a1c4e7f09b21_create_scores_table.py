"""create scores table

Revision ID: a1c4e7f09b21
Revises:
Create Date: 2026-10-18 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c4e7f09b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Leaderboard databases written by the previous server already have the table
    if 'scores' not in set(insp.get_table_names()):
        op.create_table(
            'scores',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('date', sa.String(length=10), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )

    indexes = {ix['name'] for ix in sa.inspect(bind).get_indexes('scores')}
    if 'ix_scores_date' not in indexes:
        op.create_index('ix_scores_date', 'scores', ['date'], unique=False)


def downgrade():
    op.drop_index('ix_scores_date', table_name='scores')
    op.drop_table('scores')
