"""
Line record codec.

Item record:   tag,id,name,price,rating[,best_before]
Review record: rating,comments

Strict parsers raise MalformedRecordError. The tolerant parsers log and
return None so one bad line never aborts a batch.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from catalog.errors import MalformedRecordError
from catalog.models.item import Item, PerishableItem, StandardItem
from catalog.models.rating import Rating
from catalog.models.review import Review
import config.settings as settings

logger = logging.getLogger(__name__)

DELIMITER = settings.RECORD_DELIMITER

FIELD_COUNTS = {
    settings.STANDARD_TAG: 5,
    settings.PERISHABLE_TAG: 6,
}


def parse_item_strict(line: str) -> Item:
    """
    Decode one item record.

    Raises:
        MalformedRecordError: On any field count, number, rating or date problem
    """
    text = line.rstrip("\r\n")
    if not text.strip():
        raise MalformedRecordError(line, "Empty record")

    fields = text.split(DELIMITER)
    tag = fields[0]
    expected = FIELD_COUNTS.get(tag)
    if expected is None:
        raise MalformedRecordError(line, f"Unknown item tag {tag!r}")
    if len(fields) != expected:
        raise MalformedRecordError(line, f"Expected {expected} fields, got {len(fields)}")

    item_id = _parse_int(fields[1], line, "id")
    name = fields[2]
    price = _parse_price(fields[3], line)
    rating = _parse_rating(fields[4], line)

    best_before = None
    if tag == settings.PERISHABLE_TAG:
        try:
            best_before = date.fromisoformat(fields[5])
        except ValueError:
            raise MalformedRecordError(line, f"Invalid best-before date {fields[5]!r}")

    try:
        if best_before is not None:
            return PerishableItem(item_id, name, price, rating, best_before)
        return StandardItem(item_id, name, price, rating)
    except ValueError as e:
        raise MalformedRecordError(line, str(e))


def parse_review_strict(line: str) -> Review:
    """
    Decode one review record. The comment is everything after the first delimiter.

    Raises:
        MalformedRecordError: On a missing delimiter or a bad rating
    """
    text = line.rstrip("\r\n")
    rating_text, sep, comments = text.partition(DELIMITER)
    if not sep:
        raise MalformedRecordError(line, "Expected 2 fields, got 1")
    return Review(_parse_rating(rating_text, line), comments)


def parse_item(line: str) -> Optional[Item]:
    """Tolerant item parser: returns None for a malformed line."""
    try:
        return parse_item_strict(line)
    except MalformedRecordError as e:
        logger.warning(f"Error parsing product: {e}")
        return None


def parse_review(line: str) -> Optional[Review]:
    """Tolerant review parser: returns None for a malformed line."""
    try:
        return parse_review_strict(line)
    except MalformedRecordError as e:
        logger.warning(f"Error parsing review: {e}")
        return None


def serialize_item(item: Item) -> str:
    """
    Encode one item record.

    Raises:
        ValueError: If the name contains the delimiter or a line break
    """
    if DELIMITER in item.name or "\n" in item.name or "\r" in item.name:
        raise ValueError(f"Product name cannot be stored as a record: {item.name!r}")
    fields = [item.variant, str(item.id), item.name, str(item.price), str(int(item.rating))]
    if isinstance(item, PerishableItem):
        fields.append(item.best_before_date.isoformat())
    return DELIMITER.join(fields)


def serialize_review(review: Review) -> str:
    if "\n" in review.comments or "\r" in review.comments:
        raise ValueError(f"Review comments cannot span lines: {review.comments!r}")
    return f"{int(review.rating)}{DELIMITER}{review.comments}"


def _parse_int(text: str, line: str, field_name: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise MalformedRecordError(line, f"Non-numeric {field_name} {text!r}")


def _parse_price(text: str, line: str) -> Decimal:
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        raise MalformedRecordError(line, f"Non-numeric price {text!r}")
    if not amount.is_finite() or amount < 0:
        raise MalformedRecordError(line, f"Invalid price {text!r}")
    return amount


def _parse_rating(text: str, line: str) -> Rating:
    ordinal = _parse_int(text, line, "rating")
    try:
        return Rating.from_ordinal(ordinal)
    except ValueError as e:
        raise MalformedRecordError(line, str(e))

