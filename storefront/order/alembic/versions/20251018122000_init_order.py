from alembic import op
import sqlalchemy as sa

revision = '20251018122000'
down_revision = None

order_status = sa.Enum('CREATED', 'PENDING_PAYMENT', 'PAID', 'PAYMENT_FAILED', 'FAILED', name='orderstatus')

def upgrade():
    op.create_table(
        'carts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_id', sa.String(50), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
    )
    op.create_index('ix_carts_customer_id', 'carts', ['customer_id'], unique=True)
    op.create_table(
        'cart_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cart_id', sa.Integer(), sa.ForeignKey('carts.id', ondelete='CASCADE')),
        sa.Column('sku', sa.String(50), nullable=False),
        sa.Column('product_name', sa.String(255), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
    )
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_id', sa.String(50)),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('status', order_status, nullable=False, server_default='CREATED'),
        sa.Column('session_id', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
    )
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id', ondelete='CASCADE')),
        sa.Column('sku', sa.String(50)),
        sa.Column('product_name', sa.String(255)),
        sa.Column('unit_price', sa.Numeric(10, 2)),
        sa.Column('quantity', sa.Integer()),
    )

def downgrade():
    op.drop_table('order_items')
    op.drop_index('ix_orders_customer_id', table_name='orders')
    op.drop_table('orders')
    order_status.drop(op.get_bind(), checkfirst=True)
    op.drop_table('cart_items')
    op.drop_index('ix_carts_customer_id', table_name='carts')
    op.drop_table('carts')
