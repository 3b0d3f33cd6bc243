"""
Create the profiles table.
One row per agency, maid or sponsor profile, with lookup columns and the serialized aggregate.
"""

from alembic import op
import sqlalchemy as sa

# Migration identifiers
revision = '0001_create_profiles'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create profiles and its lookup indexes."""
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('kind', sa.String(20), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('completion_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Owner lookups
    op.create_index('idx_profiles_user', 'profiles', ['user_id'])
    # Review queue and listings by kind
    op.create_index('idx_profiles_kind_status', 'profiles', ['kind', 'status'])


def downgrade():
    """Drop profiles."""
    op.drop_index('idx_profiles_kind_status', table_name='profiles')
    op.drop_index('idx_profiles_user', table_name='profiles')
    op.drop_table('profiles')
