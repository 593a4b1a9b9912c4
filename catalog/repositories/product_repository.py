from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from catalog.models.product import Product


class ProductRepository:
    """Storage access for products. Every mutation is a single commit."""

    MAX_PAGE_SIZE = 100

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id.asc()).all()

    @classmethod
    def clamp_page_size(cls, per_page: int) -> int:
        return min(max(per_page, 1), cls.MAX_PAGE_SIZE)

    def list(self, page: int = 1, per_page: int = 10) -> Tuple[List[Product], int]:
        """
        Returns (items, total_count)
        page is 1-based.
        """
        page = max(page, 1)
        per_page = self.clamp_page_size(per_page)

        query = self.db.query(Product)

        total = query.with_entities(func.count(Product.id)).scalar() or 0

        offset = (page - 1) * per_page
        items = (
            query
            .order_by(Product.id.asc())
            .offset(offset)
            .limit(per_page)
            .all()
        )

        return items, total

    def save(self, product: Product) -> Product:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self.db.commit()
