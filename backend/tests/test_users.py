"""
Tests for user accounts: UserService and /api/users.
"""

import pytest

from rest_api.services.domain import UserService
from shared.utils.exceptions import ForbiddenError, UserNotFoundError
from shared.utils.schemas import UserUpdate


class TestUserService:
    """Service-level rules."""

    def test_update_other_user_forbidden(self, db_session, seed_client_user, owner_principal):
        service = UserService(db_session)
        with pytest.raises(ForbiddenError):
            service.update(seed_client_user.id, UserUpdate(name="Hacked"), owner_principal)

    def test_empty_password_keeps_hash(self, db_session, seed_client_user, client_principal):
        """An empty password in an update is ignored."""
        original = seed_client_user.password_hash
        UserService(db_session).update(
            seed_client_user.id, UserUpdate(name="Carla", password=""), client_principal
        )
        db_session.refresh(seed_client_user)
        assert seed_client_user.password_hash == original
        assert seed_client_user.name == "Carla"

    def test_deleted_user_cannot_authenticate(self, db_session, seed_client_user, client_principal):
        service = UserService(db_session)
        service.delete(client_principal)

        assert service.authenticate("client@test.com", "clientpass123") is None
        with pytest.raises(UserNotFoundError):
            service.get_by_id(seed_client_user.id)


class TestUserEndpoints:
    """/api/users"""

    def test_get_me(self, client, client_headers, seed_client_user):
        response = client.get("/api/users/me", headers=client_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == seed_client_user.id
        assert data["name"] == "Carla Client"
        assert "password_hash" not in data

    def test_update_self(self, client, client_headers, seed_client_user):
        response = client.patch(
            f"/api/users/{seed_client_user.id}",
            json={"phone": "+199", "address": "New Address 5"},
            headers=client_headers,
        )
        assert response.status_code == 200
        assert response.json()["phone"] == "+199"
        assert response.json()["address"] == "New Address 5"

    def test_password_change_allows_login_with_new_password(
        self, client, client_headers, seed_client_user
    ):
        response = client.patch(
            f"/api/users/{seed_client_user.id}",
            json={"password": "brandnewpass"},
            headers=client_headers,
        )
        assert response.status_code == 200

        login = client.post(
            "/api/auth/login",
            json={"email": "client@test.com", "password": "brandnewpass"},
        )
        assert login.status_code == 200

    def test_update_other_user_forbidden(self, client, owner_headers, seed_client_user):
        response = client.patch(
            f"/api/users/{seed_client_user.id}",
            json={"name": "Nope"},
            headers=owner_headers,
        )
        assert response.status_code == 403

    def test_delete_me(self, client, client_headers):
        response = client.delete("/api/users/me", headers=client_headers)
        assert response.status_code == 204

        # The token has not expired, but its account is gone
        assert client.get("/api/users/me", headers=client_headers).status_code == 401
        login = client.post(
            "/api/auth/login",
            json={"email": "client@test.com", "password": "clientpass123"},
        )
        assert login.status_code == 401

    def test_deleted_account_token_cannot_place_orders(
        self, client, client_headers, seed_restaurant, seed_product
    ):
        assert client.delete("/api/users/me", headers=client_headers).status_code == 204

        response = client.post(
            "/api/orders",
            json={
                "restaurant_id": seed_restaurant.id,
                "total": "10.00",
                "details": [{"product_id": seed_product.id, "quantity": 1, "subtotal": "10.00"}],
            },
            headers=client_headers,
        )
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
