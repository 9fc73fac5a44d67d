"""
Unit tests for the locale formatter.
"""

import pytest
from datetime import date
from decimal import Decimal
from catalog.models.item import PerishableItem
from catalog.models.rating import Rating
from catalog.models.review import Review
from catalog.utils.formatter import (
    LOCALES,
    build_formatters,
    get_formatter,
    resolve,
    supported_locales,
)


@pytest.fixture
def cake():
    return PerishableItem(103, "Cake", Decimal("3.99"), Rating.FOUR_STAR, date(2026, 10, 8))


def test_supported_locales():
    """Test the fixed locale set, default first."""
    assert supported_locales() == ("en-GB", "en-US", "fr-FR", "ru-RU", "zh-CN")


@pytest.mark.parametrize("tag, expected", [
    ("en-GB", "£1,234.50"),
    ("en-US", "$1,234.50"),
    ("fr-FR", "1\u202f234,50\u00a0€"),
    ("ru-RU", "1\u00a0234,50\u00a0₽"),
    ("zh-CN", "¥1,234.50"),
])
def test_format_money(tag, expected):
    """Test currency rendering per locale."""
    assert get_formatter(tag).format_money(Decimal("1234.5")) == expected


def test_format_money_rounds_half_up():
    """Test amounts are shown with exactly two decimals."""
    formatter = get_formatter("en-GB")
    assert formatter.format_money(Decimal("0.125")) == "£0.13"
    assert formatter.format_money(Decimal("0")) == "£0.00"


@pytest.mark.parametrize("tag, expected", [
    ("en-GB", "08/10/2026"),
    ("en-US", "10/8/26"),
    ("fr-FR", "08/10/2026"),
    ("ru-RU", "08.10.2026"),
    ("zh-CN", "2026/10/8"),
])
def test_format_date(tag, expected):
    """Test short date rendering per locale."""
    assert get_formatter(tag).format_date(date(2026, 10, 8)) == expected


def test_format_item(cake):
    """Test the item line carries name, price, stars and best-before."""
    assert get_formatter("en-GB").format_item(cake) == \
        "Cake, Price: £3.99, Rating: ★★★★☆, Best Before: 08/10/2026"
    assert get_formatter("en-US").format_item(cake) == \
        "Cake, Price: $3.99, Rating: ★★★★☆, Best Before: 10/8/26"


def test_format_review():
    """Test the review line carries stars and comment."""
    review = Review(Rating.TWO_STAR, "Too sweet")
    assert get_formatter("en-GB").format_review(review) == "Review: ★★☆☆☆\tToo sweet"
    assert "Too sweet" in get_formatter("ru-RU").format_review(review)


def test_no_reviews_is_localized():
    """Test every locale has its own no-reviews phrase."""
    phrases = {tag: get_formatter(tag).no_reviews() for tag in supported_locales()}
    assert phrases["en-GB"] == "No reviews"
    assert len(set(phrases.values())) == 4  # en-GB and en-US share one


def test_unsupported_locale_falls_back(cake):
    """Test an unknown tag renders exactly like the default locale."""
    assert get_formatter("xx-XX").tag == "en-GB"
    assert get_formatter("xx-XX").format_item(cake) == get_formatter("en-GB").format_item(cake)

    formatters = build_formatters()
    assert resolve(formatters, "xx-XX") is formatters["en-GB"]
    assert resolve(formatters, "fr-FR") is formatters["fr-FR"]


def test_identical_inputs_render_identically(cake):
    """Test rendering is deterministic for a locale."""
    for tag in LOCALES:
        formatter = get_formatter(tag)
        assert formatter.format_item(cake) == formatter.format_item(cake.apply_rating(Rating.FOUR_STAR))


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
