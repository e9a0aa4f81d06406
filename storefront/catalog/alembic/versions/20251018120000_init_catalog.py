from alembic import op
import sqlalchemy as sa

revision = '20251018120000'
down_revision = None

product_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='productstatus')

def upgrade():
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
    )
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(240), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('brand', sa.String(120), nullable=False),
        sa.Column('image_url', sa.String(1024)),
        sa.Column('sku', sa.String(64), nullable=False, unique=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', product_status, nullable=False, server_default='PENDING'),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id')),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text("(now() at time zone 'utc')")),
    )

def downgrade():
    op.drop_table('products'); op.drop_table('categories')
    product_status.drop(op.get_bind(), checkfirst=True)
