"""
Tests for products: ownership, category association, search and the
grouped menu.
"""

from decimal import Decimal

import pytest

from rest_api.models import Category, Order, OrderDetail, Product
from rest_api.services.domain import CategoryService, ProductService
from shared.config.constants import OrderStatus
from shared.utils.exceptions import (
    CategoryNotFoundError,
    ConflictError,
    ForbiddenError,
    InsufficientRoleError,
    ProductNotFoundError,
    ValidationError,
)
from shared.utils.schemas import ProductCreate, ProductUpdate


@pytest.fixture
def product_service(db_session):
    return ProductService(db_session)


@pytest.fixture
def desserts(db_session):
    """A category no restaurant offers yet."""
    category = Category(name="Desserts", description="Sweet")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


class TestCreateProduct:
    """ProductService.create()"""

    def test_create_links_category_to_restaurant(
        self, db_session, product_service, seed_restaurant, seed_category, desserts, owner_principal
    ):
        product = product_service.create(
            ProductCreate(
                restaurant_id=seed_restaurant.id,
                category_id=desserts.id,
                name="Tiramisu",
                price=Decimal("6.50"),
                quantity=5,
            ),
            owner_principal,
        )

        assert product.category_name == "Desserts"
        assert product.price == Decimal("6.50")
        offered = CategoryService(db_session).list_for_restaurant(seed_restaurant.id)
        assert [c.name for c in offered] == ["Desserts", "Pizzas"]

    def test_client_cannot_create(self, product_service, seed_restaurant, seed_category, client_principal):
        with pytest.raises(InsufficientRoleError):
            product_service.create(
                ProductCreate(
                    restaurant_id=seed_restaurant.id,
                    category_id=seed_category.id,
                    name="Sneaky",
                    price=Decimal("1.00"),
                ),
                client_principal,
            )

    def test_other_owner_cannot_create(
        self, product_service, seed_restaurant, seed_category, other_owner_principal
    ):
        with pytest.raises(ForbiddenError):
            product_service.create(
                ProductCreate(
                    restaurant_id=seed_restaurant.id,
                    category_id=seed_category.id,
                    name="Sneaky",
                    price=Decimal("1.00"),
                ),
                other_owner_principal,
            )

    def test_unknown_category(self, product_service, seed_restaurant, owner_principal):
        with pytest.raises(CategoryNotFoundError):
            product_service.create(
                ProductCreate(
                    restaurant_id=seed_restaurant.id,
                    category_id=9999,
                    name="Lost",
                    price=Decimal("1.00"),
                ),
                owner_principal,
            )

    @pytest.mark.parametrize("price", ["-1.00", "1.005"])
    def test_invalid_price(self, product_service, seed_restaurant, seed_category, owner_principal, price):
        with pytest.raises(ValidationError):
            product_service.create(
                ProductCreate(
                    restaurant_id=seed_restaurant.id,
                    category_id=seed_category.id,
                    name="Odd",
                    price=Decimal(price),
                ),
                owner_principal,
            )

    def test_create_endpoint(self, client, owner_headers, seed_restaurant, seed_category):
        response = client.post(
            "/api/products",
            json={
                "restaurant_id": seed_restaurant.id,
                "category_id": seed_category.id,
                "name": "Quattro Formaggi",
                "price": "12.5",
            },
            headers=owner_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["price"] == "12.50"
        assert data["is_active"] is True
        assert data["quantity"] == 0

    def test_create_endpoint_requires_restaurant_role(self, client, client_headers, seed_restaurant, seed_category):
        response = client.post(
            "/api/products",
            json={
                "restaurant_id": seed_restaurant.id,
                "category_id": seed_category.id,
                "name": "Sneaky",
                "price": "1.00",
            },
            headers=client_headers,
        )
        assert response.status_code == 403


class TestUpdateProduct:
    """ProductService.update()"""

    def test_category_name_creates_and_links(
        self, db_session, product_service, seed_restaurant, seed_product, owner_principal
    ):
        updated = product_service.update(
            seed_product.id, ProductUpdate(category_name="Specials"), owner_principal
        )

        assert updated.category_name == "Specials"
        offered = CategoryService(db_session).list_for_restaurant(seed_restaurant.id)
        assert "Specials" in [c.name for c in offered]

    def test_category_name_wins_over_category_id(
        self, product_service, seed_product, desserts, owner_principal
    ):
        updated = product_service.update(
            seed_product.id,
            ProductUpdate(category_id=desserts.id, category_name="Specials"),
            owner_principal,
        )
        assert updated.category_name == "Specials"

    def test_partial_update_keeps_other_fields(self, product_service, seed_product, owner_principal):
        updated = product_service.update(
            seed_product.id, ProductUpdate(price=Decimal("11.00")), owner_principal
        )
        assert updated.price == Decimal("11.00")
        assert updated.name == "Margherita"
        assert updated.description == "Tomato, mozzarella, basil"
        assert updated.quantity == 50

    def test_other_owner_forbidden(self, product_service, seed_product, other_owner_principal):
        with pytest.raises(ForbiddenError):
            product_service.update(seed_product.id, ProductUpdate(name="Mine"), other_owner_principal)

    def test_missing_product(self, product_service, owner_principal):
        with pytest.raises(ProductNotFoundError):
            product_service.update(9999, ProductUpdate(name="Ghost"), owner_principal)


class TestDeleteProduct:
    """ProductService.delete()"""

    def test_delete(self, client, db_session, owner_headers, seed_product):
        response = client.delete(f"/api/products/{seed_product.id}", headers=owner_headers)
        assert response.status_code == 204
        assert db_session.get(Product, seed_product.id) is None

    def test_ordered_product_cannot_be_deleted(
        self, db_session, product_service, seed_restaurant, seed_product, seed_client_user, owner_principal
    ):
        db_session.add(
            Order(
                client_id=seed_client_user.id,
                restaurant_id=seed_restaurant.id,
                status=OrderStatus.PENDING,
                total=Decimal("10.00"),
                details=[OrderDetail(product_id=seed_product.id, quantity=1, subtotal=Decimal("10.00"))],
            )
        )
        db_session.commit()

        with pytest.raises(ConflictError):
            product_service.delete(seed_product.id, owner_principal)


class TestProductQueries:
    """Public product reads."""

    def test_get_by_id(self, client, seed_product):
        response = client.get(f"/api/products/{seed_product.id}")
        assert response.status_code == 200
        assert response.json()["category_name"] == "Pizzas"
        assert response.json()["price"] == "10.00"

    def test_get_missing(self, client):
        assert client.get("/api/products/9999").status_code == 404

    def test_search_is_case_insensitive(self, client, seed_product):
        response = client.get("/api/products/search", params={"name": "MARG"})
        assert response.status_code == 200
        data = response.json()
        assert [p["name"] for p in data] == ["Margherita"]
        assert data[0]["restaurant_name"] == "Luigi's"

    def test_search_blank_term_returns_nothing(self, product_service, seed_product):
        assert product_service.search_by_name("   ") == []

    def test_search_treats_wildcards_literally(self, product_service, seed_product):
        assert product_service.search_by_name("%") == []

    def test_list_by_category(self, client, seed_product, seed_category):
        response = client.get(f"/api/products/category/{seed_category.id}")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [seed_product.id]

    def test_list_by_missing_category(self, client):
        assert client.get("/api/products/category/9999").status_code == 404

    def test_list_by_restaurant(self, client, seed_restaurant, seed_product):
        response = client.get(f"/api/restaurants/{seed_restaurant.id}/products")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Margherita"]

    def test_list_by_missing_restaurant(self, client):
        assert client.get("/api/restaurants/9999/products").status_code == 404


class TestMenu:
    """GET /api/restaurants/{id}/menu"""

    def test_grouped_by_category_name(
        self, client, db_session, seed_restaurant, seed_product, desserts
    ):
        db_session.add_all(
            [
                Product(
                    restaurant_id=seed_restaurant.id,
                    category_id=desserts.id,
                    name="Tiramisu",
                    price=Decimal("6.50"),
                ),
                Product(
                    restaurant_id=seed_restaurant.id,
                    category_id=desserts.id,
                    name="Panna Cotta",
                    price=Decimal("5.00"),
                ),
            ]
        )
        db_session.commit()

        response = client.get(f"/api/restaurants/{seed_restaurant.id}/menu")
        assert response.status_code == 200
        menu = response.json()
        assert [section["category_name"] for section in menu] == ["Desserts", "Pizzas"]
        assert [p["name"] for p in menu[0]["products"]] == ["Panna Cotta", "Tiramisu"]
        assert [p["name"] for p in menu[1]["products"]] == ["Margherita"]

    def test_empty_menu(self, client, seed_restaurant):
        response = client.get(f"/api/restaurants/{seed_restaurant.id}/menu")
        assert response.status_code == 200
        assert response.json() == []
