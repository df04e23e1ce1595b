"""
Tests for the marketplace CLI, run against the SQLite test database.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker
from typer.testing import CliRunner

from cli import app as cli_app
from rest_api.models import RestaurantCuisine, User
from shared.config.constants import DEFAULT_CUISINES

runner = CliRunner()


@pytest.fixture
def cli_db(db_session, monkeypatch):
    """Point the CLI's engine and session factory at the test database."""
    bind = db_session.get_bind()
    monkeypatch.setattr("shared.infrastructure.db.engine", bind)
    monkeypatch.setattr(
        "shared.infrastructure.db.SessionLocal",
        sessionmaker(autoflush=False, expire_on_commit=False, bind=bind),
    )
    return db_session


class TestDatabaseCommands:
    def test_db_init_seeds_cuisines(self, cli_db):
        result = runner.invoke(cli_app, ["db-init"])

        assert result.exit_code == 0, result.output
        assert f"{len(DEFAULT_CUISINES)} cuisines added" in result.output
        assert len(cli_db.scalars(select(RestaurantCuisine)).all()) == len(DEFAULT_CUISINES)

    def test_seed_is_idempotent(self, cli_db):
        first = runner.invoke(cli_app, ["seed"])
        second = runner.invoke(cli_app, ["seed"])

        assert first.exit_code == 0, first.output
        assert "Added" in first.output
        assert second.exit_code == 0
        assert "already present" in second.output

    def test_seed_production_requires_force(self, cli_db):
        result = runner.invoke(cli_app, ["seed", "--env", "production"])

        assert result.exit_code == 1
        assert cli_db.scalars(select(RestaurantCuisine)).all() == []

    def test_cuisines_lists_catalog(self, cli_db):
        runner.invoke(cli_app, ["seed"])

        result = runner.invoke(cli_app, ["cuisines"])

        assert result.exit_code == 0, result.output
        assert DEFAULT_CUISINES[0] in result.output

    def test_cuisines_empty(self, cli_db):
        result = runner.invoke(cli_app, ["cuisines"])

        assert result.exit_code == 0
        assert "No cuisines" in result.output


class TestUserCommands:
    def test_create_user(self, cli_db):
        result = runner.invoke(
            cli_app,
            [
                "create-user",
                "Owner@Example.com",
                "--name",
                "Ana",
                "--role",
                "RESTAURANT",
                "--password",
                "ownerpass123",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Created RESTAURANT user owner@example.com" in result.output
        user = cli_db.scalar(select(User).where(User.email == "owner@example.com"))
        assert user is not None
        assert user.role == "RESTAURANT"

    def test_create_user_duplicate_email(self, cli_db):
        args = ["create-user", "ana@example.com", "--name", "Ana", "--password", "clientpass123"]
        assert runner.invoke(cli_app, args).exit_code == 0

        result = runner.invoke(cli_app, args)

        assert result.exit_code == 1

    def test_create_user_unknown_role(self, cli_db):
        result = runner.invoke(
            cli_app,
            ["create-user", "ana@example.com", "--name", "Ana", "--role", "ADMIN", "--password", "clientpass123"],
        )

        assert result.exit_code == 1
        assert cli_db.scalar(select(User)) is None
