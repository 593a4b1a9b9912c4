import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from catalog.database.connection import get_db
from catalog.core.exceptions import LoginRequired
from catalog.core.security import decode_access_token
from catalog.models.user import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_current_principal(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User | None:
    """Resolve the request's principal from a bearer header or the login cookie."""
    token = token or request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        return None

    token_data = decode_access_token(token)
    if not token_data.email:
        return None

    return get_user_by_email(db, token_data.email)


def ensure_admin(principal: User | None) -> User:
    """
    Access guard for privileged operations.
    No principal fails closed with 401 before the admin flag is read.
    """
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not principal.is_admin:
        logger.warning("Forbidden: user id=%s is not an admin", principal.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return principal


def require_auth(principal: User | None = Depends(get_current_principal)) -> User:
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


def require_web_user(
    request: Request,
    principal: User | None = Depends(get_current_principal),
) -> User:
    if principal is None:
        raise LoginRequired(request.url.path)
    return principal


def require_web_admin(user: User = Depends(require_web_user)) -> User:
    return ensure_admin(user)
