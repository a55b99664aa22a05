"""Alembic 마이그레이션: 상품 / 상품 참조 테이블 추가"""
from alembic import op
import sqlalchemy as sa

revision = "catalog_product_tables"
down_revision = None


def upgrade():
    """상품 및 상품 참조 테이블 생성"""
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(64), nullable=False),
        sa.Column('type', sa.String(32), nullable=False, server_default='default'),
        sa.Column('label', sa.String(255), nullable=False, server_default=''),
        sa.Column('status', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('date_start', sa.DateTime(), nullable=True),
        sa.Column('date_end', sa.DateTime(), nullable=True),
        sa.Column('data_json', sa.Text(), nullable=False, server_default='{}'),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_products_code', 'products', ['code'], unique=True)
    op.create_index('ix_products_status', 'products', ['status'])

    op.create_table(
        'product_list_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=False),
        sa.Column('domain', sa.String(32), nullable=False, server_default='product'),
        sa.Column('list_type', sa.String(32), nullable=False, server_default='default'),
        sa.Column('ref_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['parent_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['ref_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'idx_product_list_parent_domain',
        'product_list_items',
        ['parent_id', 'domain', 'list_type'],
    )


def downgrade():
    """테이블 삭제"""
    op.drop_index('idx_product_list_parent_domain', table_name='product_list_items')
    op.drop_table('product_list_items')
    op.drop_index('ix_products_status', table_name='products')
    op.drop_index('ix_products_code', table_name='products')
    op.drop_table('products')
