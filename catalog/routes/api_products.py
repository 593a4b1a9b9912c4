from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from catalog.database.connection import get_db
from catalog.schemas.product import (
    ProductCreate, ProductUpdate, ProductResource, ProductResponse,
    ProductEnvelope, ProductCollection
)
from catalog.services.product_service import (
    create_product, get_product_or_404, list_products,
    update_product, delete_product
)
from catalog.dependencies.auth import require_auth
from catalog.models.product import Product
from catalog.models.user import User


router = APIRouter(prefix="/api/products", tags=["Products API"])


def product_from_path(product_id: int, db: Session = Depends(get_db)) -> Product:
    """Resolve the path product before the request body is validated."""
    return get_product_or_404(db, product_id)


# LIST
@router.get("", response_model=ProductCollection)
def index(db: Session = Depends(get_db)):
    return ProductCollection(
        data=[ProductResource.model_validate(product) for product in list_products(db)]
    )

# CREATE
@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def store(data: ProductCreate, db: Session = Depends(get_db)):
    return ProductResponse.model_validate(create_product(db, data))

# GET BY ID
@router.get("/{product_id}", response_model=ProductEnvelope)
def show(product: Product = Depends(product_from_path)):
    return ProductEnvelope(data=ProductResource.model_validate(product))

# UPDATE
@router.put("/{product_id}", response_model=ProductResponse)
def update(
    data: ProductUpdate,
    product: Product = Depends(product_from_path),
    db: Session = Depends(get_db),
):
    product = update_product(db, product.id, data)
    return ProductResponse.model_validate(product)

# DELETE (any authenticated user, admin not required)
@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def destroy(
    product_id: int,
    user: User = Depends(require_auth),
    db: Session = Depends(get_db),
):
    if not delete_product(db, product_id):
        raise HTTPException(404, "Product not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
