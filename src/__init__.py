"""카탈로그 상품 목록 프래그먼트 서비스"""

__version__ = "1.0.0"
