"""
Tests for CategoryService: shared categories and the
disassociate / global delete rule.
"""

from decimal import Decimal

import pytest
from sqlalchemy import select

from rest_api.models import Category, Product
from rest_api.services.domain import CategoryService
from shared.utils.exceptions import (
    CategoryNotFoundError,
    ForbiddenError,
    RestaurantNotFoundError,
    ValidationError,
)


@pytest.fixture
def category_service(db_session):
    return CategoryService(db_session)


class TestFindOrCreate:
    """Category names are global."""

    def test_creates_missing(self, db_session, category_service):
        category = category_service.find_or_create("Desserts", "Sweet")
        db_session.commit()
        assert category.id is not None
        assert category.description == "Sweet"

    def test_reuses_existing(self, category_service, seed_category):
        assert category_service.find_or_create("Pizzas").id == seed_category.id

    def test_blank_name_rejected(self, category_service):
        with pytest.raises(ValidationError):
            category_service.find_or_create("   ")


class TestDeleteFromRestaurant:
    """delete_from_restaurant()"""

    def test_unused_category_deleted_globally(
        self, db_session, category_service, seed_restaurant, seed_category, owner_principal
    ):
        result = category_service.delete_from_restaurant(
            seed_restaurant.id, seed_category.id, owner_principal
        )

        assert result.disassociated is True
        assert result.deleted_globally is True
        assert db_session.scalars(select(Category)).all() == []

    def test_category_with_products_kept(
        self, db_session, category_service, seed_restaurant, seed_product, seed_category, owner_principal
    ):
        result = category_service.delete_from_restaurant(
            seed_restaurant.id, seed_category.id, owner_principal
        )

        assert result.disassociated is True
        assert result.deleted_globally is False
        assert category_service.list_for_restaurant(seed_restaurant.id) == []
        assert db_session.get(Category, seed_category.id) is not None

    def test_category_offered_elsewhere_kept(
        self,
        db_session,
        category_service,
        seed_restaurant,
        seed_category,
        seed_other_owner,
        make_restaurant,
        owner_principal,
    ):
        other = make_restaurant(seed_other_owner, "other-place@test.com")
        category_service.attach_to_restaurant(other.id, seed_category.id)
        db_session.commit()

        result = category_service.delete_from_restaurant(
            seed_restaurant.id, seed_category.id, owner_principal
        )

        assert result.deleted_globally is False
        assert [c.name for c in category_service.list_for_restaurant(other.id)] == ["Pizzas"]

    def test_not_linked_leaves_category_alone(
        self, db_session, category_service, seed_restaurant, owner_principal
    ):
        """An orphan category is only removed by a restaurant that offered it."""
        stray = category_service.find_or_create("Stray")
        db_session.commit()

        result = category_service.delete_from_restaurant(seed_restaurant.id, stray.id, owner_principal)

        assert result.disassociated is False
        assert result.deleted_globally is False
        assert db_session.get(Category, stray.id) is not None

    def test_requires_owner(self, category_service, seed_restaurant, seed_category, other_owner_principal):
        with pytest.raises(ForbiddenError):
            category_service.delete_from_restaurant(
                seed_restaurant.id, seed_category.id, other_owner_principal
            )

    def test_missing_restaurant(self, category_service, seed_category, owner_principal):
        with pytest.raises(RestaurantNotFoundError):
            category_service.delete_from_restaurant(9999, seed_category.id, owner_principal)

    def test_missing_category(self, category_service, seed_restaurant, owner_principal):
        with pytest.raises(CategoryNotFoundError):
            category_service.delete_from_restaurant(seed_restaurant.id, 9999, owner_principal)


class TestCategoryEndpoints:
    """/api/categories and DELETE /api/restaurants/{id}/categories/{category_id}"""

    def test_list_and_get(self, client, seed_category):
        listing = client.get("/api/categories")
        assert listing.status_code == 200
        assert [c["name"] for c in listing.json()] == ["Pizzas"]

        single = client.get(f"/api/categories/{seed_category.id}")
        assert single.status_code == 200
        assert single.json()["description"] == "Stone oven pizzas"

    def test_get_missing(self, client):
        assert client.get("/api/categories/9999").status_code == 404

    def test_delete_endpoint_reports_outcome(
        self, client, db_session, owner_headers, seed_restaurant, seed_category
    ):
        db_session.add(
            Product(
                restaurant_id=seed_restaurant.id,
                category_id=seed_category.id,
                name="Calzone",
                price=Decimal("12.50"),
            )
        )
        db_session.commit()

        response = client.delete(
            f"/api/restaurants/{seed_restaurant.id}/categories/{seed_category.id}",
            headers=owner_headers,
        )
        assert response.status_code == 200
        assert response.json() == {
            "restaurant_id": seed_restaurant.id,
            "category_id": seed_category.id,
            "disassociated": True,
            "deleted_globally": False,
        }
