"""
Create an admin user, or promote an existing one.

``is_admin`` cannot be set through any HTTP endpoint, this script is the
storage-level way to grant it:

    python -m catalog.scripts.create_admin admin@example.com "Admin" secret123
"""
import argparse
import logging
import sys

from sqlalchemy.orm import Session

from catalog.core.logging import setup_logging
from catalog.core.security import get_password_hash
from catalog.database.connection import Base, SessionLocal, engine
from catalog.dependencies.auth import get_user_by_email
from catalog.models import product  # noqa: F401
from catalog.models.user import User

logger = logging.getLogger(__name__)


def create_admin(db: Session, email: str, name: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user:
        user.is_admin = True
        logger.info("Promoted existing user id=%s to admin", user.id)
    else:
        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            is_admin=True,
        )
        db.add(user)
        logger.info("Created admin user %s", email)

    db.commit()
    db.refresh(user)
    return user


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("email")
    parser.add_argument("name")
    parser.add_argument("password")
    args = parser.parse_args(argv)

    setup_logging()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        create_admin(db, args.email, args.name, args.password)
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
