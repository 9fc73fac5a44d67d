"""
Rating data model.

Ordinal star rating shared by items and reviews.
"""

from enum import IntEnum

FILLED_STAR = "★"
EMPTY_STAR = "☆"


class Rating(IntEnum):
    """
    Star rating from NOT_RATED (0) to FIVE_STAR (5).
    The integer value is the ordinal used as the weight when averaging.
    """
    NOT_RATED = 0
    ONE_STAR = 1
    TWO_STAR = 2
    THREE_STAR = 3
    FOUR_STAR = 4
    FIVE_STAR = 5

    @property
    def stars(self) -> str:
        """Fixed-width glyph string: filled stars then empty stars."""
        return FILLED_STAR * self.value + EMPTY_STAR * (MAX_STARS - self.value)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Rating":
        """
        Convert an ordinal to a Rating.

        Raises:
            ValueError: If ordinal is outside 0..5
        """
        if not (0 <= ordinal <= MAX_STARS):
            raise ValueError(f"Invalid rating: {ordinal}. Must be 0-{MAX_STARS}")
        return cls(ordinal)


MAX_STARS = max(Rating).value
