import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from catalog.database.connection import Base, get_db
from catalog.core.security import create_access_token, get_password_hash
from catalog.main import app
from catalog.models.product import Product
from catalog.models.user import User

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def create_test_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    connection = engine.connect()
    trans = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()


def _create_user(db, email, is_admin, password="password123"):
    user = User(
        name=email.split("@")[0].title(),
        email=email,
        hashed_password=get_password_hash(password),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def user(db):
    return _create_user(db, "user@example.com", is_admin=False)


@pytest.fixture()
def admin(db):
    return _create_user(db, "admin@example.com", is_admin=True)


def auth_headers(user):
    """Bearer header for acting as ``user``."""
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


def make_product(db, name="Test Product", price=12345, description=None):
    """Insert a product directly; ``price`` is in minor units."""
    product = Product(name=name, price=price, description=description)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product
