import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from catalog.database.connection import get_db
from catalog.models.user import User
from catalog.schemas.user import UserCreate, UserResponse, Token
from catalog.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_refresh_token,
    create_refresh_token
)
from catalog.core.config import settings
from catalog.core.exceptions import validation_error_response
from catalog.core.web import templates, redirect, redirect_back_with_errors, pop_flash
from catalog.dependencies.auth import ACCESS_TOKEN_COOKIE, get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])
web_router = APIRouter(tags=["Auth (web)"])

INTENDED_URL_KEY = "_intended_url"


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %s", email)
        return None
    return user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(data: UserCreate, db: Session = Depends(get_db)):
    if get_user_by_email(db, data.email):
        return validation_error_response({"email": ["The email has already been taken."]})

    # is_admin is never taken from the request
    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        is_admin=False,
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = authenticate(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return Token(
        access_token=create_access_token({"sub": user.email}),
        refresh_token=create_refresh_token({"sub": user.email}),
    )

@router.post("/refresh", response_model=Token)
def refresh_token(refresh_token: str):
    payload = decode_refresh_token(refresh_token)

    if not payload.email:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    return Token(access_token=create_access_token({"sub": payload.email}))


# --------------------------
# Browser login
# --------------------------
@web_router.get("/")
def home():
    return redirect("/login")


@web_router.get("/login", response_class=HTMLResponse)
def login_form(request: Request):
    errors, old_input, _ = pop_flash(request)
    return templates.TemplateResponse(
        request,
        "auth/login.html",
        {"errors": errors, "old": old_input},
    )


@web_router.post("/login")
def web_login(
    request: Request,
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    errors = {}
    if not email:
        errors["email"] = ["The email field is required."]
    if not password:
        errors["password"] = ["The password field is required."]

    user = None
    if not errors:
        user = authenticate(db, email, password)
        if not user:
            errors["email"] = ["These credentials do not match our records."]

    if errors:
        return redirect_back_with_errors(request, "/login", errors, {"email": email or ""})

    response = redirect(request.session.pop(INTENDED_URL_KEY, "/products"))
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        create_access_token({"sub": user.email}),
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    logger.info("User id=%s logged in", user.id)
    return response


@web_router.post("/logout")
def web_logout():
    response = redirect("/login")
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return response
