"""
Item data model.

Sellable catalog items. Two variants share the same capability set:
StandardItem and PerishableItem. Identity is the integer id alone.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from catalog.models.rating import Rating
import config.settings as settings

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

PriceLike = Union[Decimal, str, int, float]


def to_price(value: PriceLike) -> Decimal:
    """
    Normalize a price to a 2-decimal Decimal.

    Raises:
        ValueError: If the value is not a finite, non-negative number
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid price: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid price: {value!r}")
    if amount < 0:
        raise ValueError(f"Price cannot be negative, got {value!r}")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Price out of range: {value!r}")


@dataclass(frozen=True, eq=False)
class Item(ABC):
    """
    A catalog item. Immutable; a rating change produces a new instance.
    """
    id: int
    name: str
    price: Decimal
    rating: Rating

    def __post_init__(self):
        object.__setattr__(self, "price", to_price(self.price))
        object.__setattr__(self, "rating", Rating.from_ordinal(int(self.rating)))

    @property
    @abstractmethod
    def variant(self) -> str:
        """Record tag of the concrete variant."""

    def discount(self, on: Optional[date] = None) -> Decimal:
        """Price times the discount rate, rounded half-up to cents."""
        return (self.price * settings.DISCOUNT_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)

    def best_before(self) -> date:
        return date.today()

    @property
    def stars(self) -> str:
        return self.rating.stars

    def apply_rating(self, rating: Rating) -> "Item":
        """Return a same-variant copy carrying the new rating."""
        return replace(self, rating=rating)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "variant": self.variant,
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "rating": int(self.rating),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        """Create the matching variant from a dict produced by to_dict()."""
        if data["variant"] == settings.PERISHABLE_TAG:
            return PerishableItem(
                id=int(data["id"]),
                name=data["name"],
                price=data["price"],
                rating=Rating.from_ordinal(int(data["rating"])),
                best_before_date=date.fromisoformat(data["best_before"])
            )
        if data["variant"] == settings.STANDARD_TAG:
            return StandardItem(
                id=int(data["id"]),
                name=data["name"],
                price=data["price"],
                rating=Rating.from_ordinal(int(data["rating"]))
            )
        raise ValueError(f"Unknown item variant: {data['variant']!r}")

    def __eq__(self, other):
        if isinstance(other, Item):
            return self.id == other.id
        return NotImplemented

    def __hash__(self):
        return hash(self.id)

    def __str__(self):
        return f"{self.id}, {self.name}, {self.price}, {self.discount()}, {self.stars}, {self.best_before()}"


@dataclass(frozen=True, eq=False)
class StandardItem(Item):
    """Non-perishable item; always discountable."""

    @property
    def variant(self) -> str:
        return settings.STANDARD_TAG


@dataclass(frozen=True, eq=False)
class PerishableItem(Item):
    """Item with a best-before date; discounted only on that exact day."""
    best_before_date: date = None

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.best_before_date, date):
            raise ValueError(f"Perishable item {self.id} needs a best-before date")

    @property
    def variant(self) -> str:
        return settings.PERISHABLE_TAG

    def discount(self, on: Optional[date] = None) -> Decimal:
        on = on or date.today()
        return super().discount(on) if on == self.best_before_date else ZERO

    def best_before(self) -> date:
        return self.best_before_date

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["best_before"] = self.best_before_date.isoformat()
        return data
