from alembic import op
import sqlalchemy as sa

revision = '20251018121000'
down_revision = None

def upgrade():
    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('sku', sa.String(64), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.CheckConstraint('quantity >= 0', name='ck_inventory_quantity_non_negative'),
    )
    op.create_index('ix_inventory_sku', 'inventory', ['sku'], unique=True)

def downgrade():
    op.drop_index('ix_inventory_sku', table_name='inventory')
    op.drop_table('inventory')
