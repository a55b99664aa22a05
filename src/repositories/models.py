"""데이터베이스 모델"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, TIMESTAMP, func
from src.core.database import Base


class Product(Base):
    """상품 테이블

    - data_json: 도메인별 부가 데이터 {"price": [...], "media": [...], "text": [...]}
    """
    
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(64), nullable=False, unique=True, index=True)
    type = Column(String(32), nullable=False, default="default")  # default, select, bundle
    label = Column(String(255), nullable=False, default="")
    status = Column(Integer, nullable=False, default=1, index=True)  # 1=활성, 0=비활성
    date_start = Column(DateTime, nullable=True)
    date_end = Column(DateTime, nullable=True)
    data_json = Column(Text, nullable=False, default="{}")
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    def __repr__(self) -> str:
        return f"<Product(id={self.id}, code={self.code}, type={self.type})>"


class ProductListItem(Base):
    """상품 → 상품 참조 (선택 상품의 변형 상품 등)"""

    __tablename__ = "product_list_items"

    id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    domain = Column(String(32), nullable=False, default="product")
    list_type = Column(String(32), nullable=False, default="default")
    ref_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_product_list_parent_domain", "parent_id", "domain", "list_type"),
    )

    def __repr__(self) -> str:
        return f"<ProductListItem(parent={self.parent_id}, ref={self.ref_id}, type={self.list_type})>"
