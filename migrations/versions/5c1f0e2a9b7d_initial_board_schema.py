"""initial board schema

Revision ID: 5c1f0e2a9b7d
Revises:
Create Date: 2026-10-18 10:12:44.201937

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1f0e2a9b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'boards',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('updated_at', sa.BigInteger(), nullable=False),
        sa.Column('collaboration_link', sa.String(), nullable=True),
        sa.Column('thumbnail', sa.Text(), nullable=True),
    )
    op.create_table(
        'folders',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
    )
    op.create_table(
        'index_items',
        sa.Column('position', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('item_type', sa.String(), nullable=False),
        sa.Column('item_id', sa.String(), nullable=False),
    )
    op.create_table(
        'folder_items',
        sa.Column(
            'folder_id',
            sa.String(),
            sa.ForeignKey('folders.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('position', sa.Integer(), primary_key=True),
        sa.Column(
            'board_id',
            sa.String(),
            sa.ForeignKey('boards.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.UniqueConstraint('folder_id', 'board_id', name='uq_folder_board'),
    )
    op.create_table(
        'board_data',
        sa.Column(
            'board_id',
            sa.String(),
            sa.ForeignKey('boards.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('data', sa.Text(), nullable=False),
    )
    op.create_table(
        'settings',
        sa.Column('key', sa.String(), primary_key=True),
        sa.Column('value', sa.String(), nullable=False),
    )


def downgrade():
    op.drop_table('settings')
    op.drop_table('board_data')
    op.drop_table('folder_items')
    op.drop_table('index_items')
    op.drop_table('folders')
    op.drop_table('boards')
