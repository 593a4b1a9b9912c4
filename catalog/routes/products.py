from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from catalog.database.connection import get_db
from catalog.core.exceptions import format_validation_errors
from catalog.core.web import templates, redirect, redirect_back_with_errors, pop_flash, flash_status
from catalog.schemas.product import ProductCreate, ProductUpdate
from catalog.services.product_service import (
    create_product, get_product_or_404, paginate_products,
    update_product, delete_product
)
from catalog.dependencies.auth import require_web_user, require_web_admin
from catalog.models.user import User


router = APIRouter(prefix="/products", tags=["Products (web)"])


def _page_number(value: str) -> int:
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return 1


def _old_input(name, price, description) -> dict:
    return {"name": name or "", "price": price or "", "description": description or ""}


# LIST
@router.get("", response_class=HTMLResponse)
def index(
    request: Request,
    page: str = "1",
    user: User = Depends(require_web_user),
    db: Session = Depends(get_db),
):
    products = paginate_products(db, _page_number(page))
    _, _, status_message = pop_flash(request)
    return templates.TemplateResponse(
        request,
        "products/index.html",
        {"products": products, "user": user, "status_message": status_message},
    )

# CREATE FORM
@router.get("/create", response_class=HTMLResponse)
def create_form(request: Request, user: User = Depends(require_web_admin)):
    errors, old_input, _ = pop_flash(request)
    return templates.TemplateResponse(
        request,
        "products/create.html",
        {"user": user, "errors": errors, "old": old_input},
    )

# CREATE
@router.post("")
def store(
    request: Request,
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    user: User = Depends(require_web_admin),
    db: Session = Depends(get_db),
):
    try:
        data = ProductCreate(name=name, price=price, description=description)
    except ValidationError as exc:
        return redirect_back_with_errors(
            request,
            "/products/create",
            format_validation_errors(exc.errors()),
            _old_input(name, price, description),
        )

    create_product(db, data)
    flash_status(request, "Product created")
    return redirect("/products")

# EDIT FORM
@router.get("/{product_id}/edit", response_class=HTMLResponse)
def edit_form(
    request: Request,
    product_id: int,
    user: User = Depends(require_web_admin),
    db: Session = Depends(get_db),
):
    product = get_product_or_404(db, product_id)
    errors, old_input, _ = pop_flash(request)
    return templates.TemplateResponse(
        request,
        "products/edit.html",
        {"user": user, "product": product, "errors": errors, "old": old_input},
    )

# UPDATE
@router.put("/{product_id}")
def update(
    request: Request,
    product_id: int,
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    user: User = Depends(require_web_admin),
    db: Session = Depends(get_db),
):
    get_product_or_404(db, product_id)

    try:
        data = ProductUpdate(name=name, price=price, description=description)
    except ValidationError as exc:
        return redirect_back_with_errors(
            request,
            f"/products/{product_id}/edit",
            format_validation_errors(exc.errors()),
            _old_input(name, price, description),
        )

    update_product(db, product_id, data)
    flash_status(request, "Product updated")
    return redirect("/products")

# DELETE
@router.delete("/{product_id}")
def destroy(
    request: Request,
    product_id: int,
    user: User = Depends(require_web_admin),
    db: Session = Depends(get_db),
):
    if not delete_product(db, product_id):
        raise HTTPException(404, "Product not found")
    flash_status(request, "Product deleted")
    return redirect("/products")

# HTML forms can only POST; `_method` picks PUT or DELETE
@router.post("/{product_id}")
def method_override(
    request: Request,
    product_id: int,
    method: str = Form("", alias="_method"),
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    user: User = Depends(require_web_admin),
    db: Session = Depends(get_db),
):
    method = method.upper()
    if method == "PUT":
        return update(request, product_id, name, price, description, user, db)
    if method == "DELETE":
        return destroy(request, product_id, user, db)
    raise HTTPException(405, "Method Not Allowed")
