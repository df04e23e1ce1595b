"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read once at import time; configure them before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-with-at-least-thirty-two-chars")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import (
    Base,
    Category,
    Product,
    Restaurant,
    RestaurantCuisine,
    User,
    restaurant_category,
)
from rest_api.services.permissions import Principal
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.password import hash_password
from shared.security.rate_limit import limiter


# SQLite in-memory database shared by every connection of the test engine
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

CLIENT_PASSWORD = "clientpass123"
OWNER_PASSWORD = "ownerpass123"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with an empty login rate-limit window."""
    limiter.reset()
    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Seed data
# =============================================================================


def make_user(db_session, email: str, role: str, password: str, name: str = "Test User") -> User:
    user = User(
        name=name,
        email=email,
        role=role,
        phone="+100000000",
        address="1 Test Street",
        password_hash=hash_password(password),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def link_category(db_session, restaurant: Restaurant, category: Category) -> None:
    db_session.execute(
        insert(restaurant_category).values(restaurant_id=restaurant.id, category_id=category.id)
    )
    db_session.commit()


@pytest.fixture
def seed_cuisine(db_session):
    cuisine = RestaurantCuisine(name="Italian")
    db_session.add(cuisine)
    db_session.commit()
    db_session.refresh(cuisine)
    return cuisine


@pytest.fixture
def seed_client_user(db_session):
    """A CLIENT account."""
    return make_user(db_session, "client@test.com", Roles.CLIENT, CLIENT_PASSWORD, name="Carla Client")


@pytest.fixture
def seed_owner_user(db_session):
    """A RESTAURANT account that owns seed_restaurant."""
    return make_user(db_session, "owner@test.com", Roles.OWNER, OWNER_PASSWORD, name="Oscar Owner")


@pytest.fixture
def seed_other_owner(db_session):
    """A RESTAURANT account that owns nothing seeded."""
    return make_user(db_session, "other@test.com", Roles.OWNER, OWNER_PASSWORD, name="Olga Other")


@pytest.fixture
def seed_restaurant(db_session, seed_owner_user, seed_cuisine):
    restaurant = Restaurant(
        owner_id=seed_owner_user.id,
        cuisine_id=seed_cuisine.id,
        name="Luigi's",
        description="Wood-fired pizza",
        phone="+100000001",
        email="luigis@test.com",
        address="2 Pizza Road",
        opening_hours="12:00-23:00",
    )
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture
def make_restaurant(db_session, seed_cuisine):
    """Factory for extra restaurants owned by an arbitrary user."""
    def _make(owner: User, email: str, name: str = "Other Place") -> Restaurant:
        restaurant = Restaurant(
            owner_id=owner.id,
            cuisine_id=seed_cuisine.id,
            name=name,
            description="Somewhere else",
            phone="+100000002",
            email=email,
            address="3 Side Street",
        )
        db_session.add(restaurant)
        db_session.commit()
        db_session.refresh(restaurant)
        return restaurant
    return _make


@pytest.fixture
def seed_category(db_session, seed_restaurant):
    """The Pizzas category, offered by seed_restaurant."""
    category = Category(name="Pizzas", description="Stone oven pizzas")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    link_category(db_session, seed_restaurant, category)
    return category


@pytest.fixture
def seed_product(db_session, seed_restaurant, seed_category):
    """A 10.00 Margherita."""
    product = Product(
        restaurant_id=seed_restaurant.id,
        category_id=seed_category.id,
        name="Margherita",
        description="Tomato, mozzarella, basil",
        price=Decimal("10.00"),
        is_active=True,
        quantity=50,
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


# =============================================================================
# Principals and auth headers
# =============================================================================


@pytest.fixture
def owner_principal(seed_owner_user):
    return Principal.from_user(seed_owner_user)


@pytest.fixture
def client_principal(seed_client_user):
    return Principal.from_user(seed_client_user)


@pytest.fixture
def other_owner_principal(seed_other_owner):
    return Principal.from_user(seed_other_owner)


def login(client, email: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.json()}"
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def client_headers(client, seed_client_user):
    """Authentication headers for the CLIENT account."""
    return login(client, "client@test.com", CLIENT_PASSWORD)


@pytest.fixture
def owner_headers(client, seed_owner_user):
    """Authentication headers for the restaurant owner."""
    return login(client, "owner@test.com", OWNER_PASSWORD)


@pytest.fixture
def other_owner_headers(client, seed_other_owner):
    return login(client, "other@test.com", OWNER_PASSWORD)
