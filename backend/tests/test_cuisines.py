"""
Tests for the cuisine catalog and reference-data seeding.
"""

from rest_api.seed import seed
from shared.config.constants import DEFAULT_CUISINES


class TestSeed:
    """seed() is idempotent."""

    def test_seed_creates_defaults_once(self, db_session):
        assert seed(db_session) == len(DEFAULT_CUISINES)
        assert seed(db_session) == 0

    def test_seed_only_adds_missing(self, db_session, seed_cuisine):
        assert seed(db_session, cuisines=["Italian", "Thai"]) == 1


class TestCuisineEndpoints:
    """/api/cuisines"""

    def test_list(self, client, db_session):
        seed(db_session, cuisines=["Mexican", "Italian"])

        response = client.get("/api/cuisines")
        assert response.status_code == 200
        assert sorted(c["name"] for c in response.json()) == ["Italian", "Mexican"]

    def test_get(self, client, seed_cuisine):
        response = client.get(f"/api/cuisines/{seed_cuisine.id}")
        assert response.status_code == 200
        assert response.json() == {"id": seed_cuisine.id, "name": "Italian"}

    def test_get_missing(self, client):
        response = client.get("/api/cuisines/9999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Cuisine with ID 9999 not found"
