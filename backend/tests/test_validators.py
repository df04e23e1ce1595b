"""
Tests for the explicit validation helpers used by the domain services.
"""

from decimal import Decimal

import pytest

from shared.utils.exceptions import InvalidRoleError, ValidationError
from shared.utils.pagination import Pagination
from shared.utils.validators import (
    escape_like_pattern,
    require_text,
    sanitize_search_term,
    validate_image_url,
    validate_password,
    validate_price,
    validate_role,
)


class TestValidateRole:
    """Registration roles."""

    @pytest.mark.parametrize("role", [None, "", "   "])
    def test_empty_defaults_to_client(self, role):
        assert validate_role(role) == "CLIENT"

    @pytest.mark.parametrize("role,expected", [("client", "CLIENT"), (" Restaurant ", "RESTAURANT")])
    def test_normalized(self, role, expected):
        assert validate_role(role) == expected

    def test_unknown_rejected(self):
        with pytest.raises(InvalidRoleError):
            validate_role("ADMIN")


class TestValidatePassword:
    def test_too_short(self):
        with pytest.raises(ValidationError):
            validate_password("short")

    def test_too_long_in_bytes(self):
        """Multi-byte characters count by their encoded size."""
        with pytest.raises(ValidationError):
            validate_password("ñ" * 40)

    def test_accepted(self):
        assert validate_password("longenough1") == "longenough1"


class TestValidatePrice:
    """Amounts must fit a Numeric(10, 2) column."""

    def test_largest_amount_accepted(self):
        assert validate_price(Decimal("99999999.99")) == Decimal("99999999.99")

    @pytest.mark.parametrize("amount", ["100000000", "1E+30", "1E+100"])
    def test_oversized_rejected(self, amount):
        with pytest.raises(ValidationError):
            validate_price(Decimal(amount))

    @pytest.mark.parametrize("amount", ["not-a-number", "NaN", "Infinity"])
    def test_malformed_rejected(self, amount):
        with pytest.raises(ValidationError):
            validate_price(amount)

    def test_too_many_decimals(self):
        with pytest.raises(ValidationError):
            validate_price(Decimal("1.005"))


class TestValidateImageUrl:
    """SSRF-safe image URLs."""

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_empty_becomes_none(self, url):
        assert validate_image_url(url) is None

    def test_public_url_accepted(self):
        assert validate_image_url(" https://cdn.example.com/a.png ") == "https://cdn.example.com/a.png"

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://cdn.example.com/a.png",
            "javascript:alert(1)",
            "http://localhost/a.png",
            "http://127.0.0.1/a.png",
            "http://192.168.1.10/a.png",
            "http://169.254.169.254/latest/meta-data",
        ],
    )
    def test_rejected(self, url):
        with pytest.raises(ValidationError):
            validate_image_url(url)


class TestTextHelpers:
    def test_require_text_trims(self):
        assert require_text("  Pizzas  ", "name") == "Pizzas"

    def test_require_text_max_length(self):
        with pytest.raises(ValidationError):
            require_text("x" * 11, "name", max_length=10)

    def test_escape_like_pattern(self):
        assert escape_like_pattern("50%_off\\") == "50\\%\\_off\\\\"

    def test_sanitize_search_term(self):
        assert sanitize_search_term("  piz\x00za ") == "pizza"
        assert sanitize_search_term(None) == ""
        assert len(sanitize_search_term("a" * 500)) == 100


class TestPagination:
    def test_clamped(self):
        pagination = Pagination(limit=10_000, offset=-5)
        assert pagination.limit == 200
        assert pagination.offset == 0

    def test_to_dict(self):
        meta = Pagination(limit=10, offset=20).to_dict(total=25)
        assert meta == {
            "limit": 10,
            "offset": 20,
            "page": 3,
            "total": 25,
            "pages": 3,
            "has_next": False,
            "has_prev": True,
        }
