import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from catalog.core.config import settings
from catalog.models.product import Product
from catalog.repositories.product_repository import ProductRepository
from catalog.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def to_minor_units(price: float) -> int:
    """Decimal price -> integer cents, rounded half-up."""
    cents = Decimal(str(price)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class ProductPage:
    items: List[Product]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.last_page


# --------------------------
# CREATE PRODUCT
# --------------------------
def create_product(db: Session, data: ProductCreate) -> Product:
    product = Product(
        name=data.name,
        description=data.description,
        price=to_minor_units(data.price),
    )
    product = ProductRepository(db).save(product)
    logger.info("Created product id=%s name=%r price=%s", product.id, product.name, product.price)
    return product

# --------------------------
# GET PRODUCT
# --------------------------
def get_product(db: Session, product_id: int) -> Optional[Product]:
    return ProductRepository(db).find_by_id(product_id)


def get_product_or_404(db: Session, product_id: int) -> Product:
    product = get_product(db, product_id)
    if not product:
        raise HTTPException(404, "Product not found")
    return product

# --------------------------
# LIST PRODUCTS
# --------------------------
def list_products(db: Session) -> List[Product]:
    return ProductRepository(db).all()


def paginate_products(db: Session, page: int = 1, per_page: Optional[int] = None) -> ProductPage:
    per_page = ProductRepository.clamp_page_size(per_page or settings.PRODUCTS_PER_PAGE)
    page = max(page, 1)
    items, total = ProductRepository(db).list(page=page, per_page=per_page)
    return ProductPage(items=items, total=total, page=page, per_page=per_page)

# --------------------------
# UPDATE PRODUCT
# --------------------------
def update_product(db: Session, product_id: int, data: ProductUpdate) -> Optional[Product]:
    repository = ProductRepository(db)
    product = repository.find_by_id(product_id)
    if not product:
        return None

    product.name = data.name
    product.description = data.description
    product.price = to_minor_units(data.price)

    product = repository.save(product)
    logger.info("Updated product id=%s", product.id)
    return product

# --------------------------
# DELETE PRODUCT
# --------------------------
def delete_product(db: Session, product_id: int) -> bool:
    repository = ProductRepository(db)
    product = repository.find_by_id(product_id)
    if not product:
        return False

    repository.delete(product)
    logger.info("Deleted product id=%s", product_id)
    return True
