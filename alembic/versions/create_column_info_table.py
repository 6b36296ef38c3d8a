"""create_column_info_table

Revision ID: create_column_info
Revises:
Create Date: 2026-10-19

Create the pma__column_info table holding column comments and MIME
transformation settings.

"""
from typing import Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by alembic.
revision: str = 'create_column_info'
down_revision: Union[str, None] = None
branch_labels: Union[str, None] = None
depends_on: Union[str, None] = None


def upgrade() -> None:
    op.create_table(
        'pma__column_info',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('db_name', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('table_name', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('column_name', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('comment', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('mimetype', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('transformation', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('transformation_options', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('input_transformation', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('input_transformation_options', sa.String(length=255), nullable=False, server_default=''),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('db_name', 'table_name', 'column_name', name='db_name')
    )


def downgrade() -> None:
    op.drop_table('pma__column_info')
