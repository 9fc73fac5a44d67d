"""
Review data model.

A single customer review of a catalog item.
"""

from dataclasses import dataclass
from typing import Iterable, List

from catalog.models.rating import Rating


@dataclass(frozen=True)
class Review:
    """
    Customer review: a star rating plus free-text comments.
    """
    rating: Rating
    comments: str

    def __post_init__(self):
        object.__setattr__(self, "rating", Rating.from_ordinal(int(self.rating)))

    def to_dict(self) -> dict:
        return {"rating": int(self.rating), "comments": self.comments}

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        return cls(rating=Rating.from_ordinal(int(data["rating"])), comments=data["comments"])


def display_order(reviews: Iterable[Review]) -> List[Review]:
    """Reviews sorted by ascending rating; equal ratings keep insertion order."""
    return sorted(reviews, key=lambda review: review.rating)
