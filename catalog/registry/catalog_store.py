"""
Catalog Store - Single source of truth for items and their reviews.

Owns the id -> (item, reviews) mapping behind one shared/exclusive lock.
"""

import functools
import logging
import os
from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Optional, Tuple

from catalog.errors import ItemNotFoundError, SnapshotError
from catalog.models.item import Item, PerishableItem, PriceLike, StandardItem, ZERO
from catalog.models.rating import Rating
from catalog.models.review import Review, display_order
from catalog.utils import formatter as locale_formatter
from catalog.utils.locking import ReadWriteLock
from catalog.utils.snapshot import SnapshotManager
from catalog.utils.storage import Entry, RecordStorage
import config.settings as settings

logger = logging.getLogger(__name__)


def average_rating(reviews: Tuple[Review, ...]) -> Rating:
    """Mean of the review ordinals rounded half-up; NOT_RATED when there are none."""
    if not reviews:
        return Rating.NOT_RATED
    mean = Decimal(sum(int(review.rating) for review in reviews)) / len(reviews)
    return Rating.from_ordinal(int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


class CatalogStore:
    """
    Concurrent catalog of items and reviews.

    Reads (find, reviews, discounts, listing, reports) share the lock; writes
    (create, add_review, restore) hold it exclusively. Every public method
    acquires the lock once and only calls unlocked private helpers.
    """

    def __init__(
        self,
        data_root: Optional[str] = None,
        reports_root: str = settings.REPORTS_ROOT
    ):
        """
        Initialize the store, seeding it from data_root when that directory exists.

        Args:
            data_root: Directory of product/review record files
            reports_root: Directory report files are written to
        """
        self.data_root = data_root
        self.reports_root = str(reports_root)
        self._lock = ReadWriteLock()
        self._entries: Dict[int, Entry] = {}
        self._formatters = locale_formatter.build_formatters()

        if data_root is not None and os.path.isdir(data_root):
            self._entries = RecordStorage(data_root).load_catalog()
        elif data_root is not None:
            logger.info(f"No data directory at {data_root}, starting with empty catalog")

    @staticmethod
    def supported_locales() -> Tuple[str, ...]:
        return locale_formatter.supported_locales()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def create(
        self,
        item_id: int,
        name: str,
        price: PriceLike,
        rating: Rating = Rating.NOT_RATED,
        best_before: Optional[date] = None
    ) -> Item:
        """
        Add a new item unless the id is already taken.

        Args:
            item_id: Identity of the item
            name: Display name
            price: Price, normalized to 2 decimals
            rating: Initial rating
            best_before: If given, the item is perishable

        Returns:
            The stored item for item_id. On a duplicate id this is the
            existing entry's item; the catalog is left untouched.

        Raises:
            ValueError: If the attributes are invalid
        """
        if best_before is not None:
            item = PerishableItem(item_id, name, price, rating, best_before)
        else:
            item = StandardItem(item_id, name, price, rating)

        with self._lock.write_locked():
            existing = self._entries.get(item_id)
            if existing is not None:
                logger.warning(f"Product {item_id} already exists, keeping stored entry")
                return existing[0]
            self._entries[item_id] = (item, ())

        logger.info(f"Created product {item_id} - '{name}'")
        return item

    def find(self, item_id: int) -> Item:
        """
        Raises:
            ItemNotFoundError: If no item has this id
        """
        with self._lock.read_locked():
            return self._get_entry(item_id)[0]

    def reviews(self, item_id: int) -> Tuple[Review, ...]:
        """
        Reviews of an item in insertion order.

        Raises:
            ItemNotFoundError: If no item has this id
        """
        with self._lock.read_locked():
            return self._get_entry(item_id)[1]

    def add_review(self, item_id: int, rating: Rating, comments: str) -> Item:
        """
        Record a review and re-rate the item.

        The replacement item is built from the full review sequence and then
        swapped into the entry in the same critical section, so no reader
        sees the id missing or a rating that disagrees with its reviews.

        Returns:
            The replacement item

        Raises:
            ItemNotFoundError: If no item has this id
        """
        review = Review(rating, comments)
        with self._lock.write_locked():
            item, reviews = self._get_entry(item_id)
            reviews = reviews + (review,)
            updated = item.apply_rating(average_rating(reviews))
            self._entries[item_id] = (updated, reviews)

        logger.debug(f"Product {item_id} reviewed: {len(reviews)} reviews, rating {updated.stars}")
        return updated

    def discounts_by_star_rating(self, locale: str, on: Optional[date] = None) -> Dict[str, str]:
        """
        Total discount per star rating, formatted as currency.

        Args:
            locale: Locale tag; unknown tags use the default locale
            on: Evaluation date for perishable discounts (default: today)

        Returns:
            Dict of star string -> formatted discount total
        """
        formatter = locale_formatter.resolve(self._formatters, locale)
        totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        with self._lock.read_locked():
            for item, _ in self._entries.values():
                totals[item.stars] += item.discount(on)
        return {stars: formatter.format_money(total) for stars, total in totals.items()}

    def report(self, item_id: int, locale: str, client: str) -> Optional[str]:
        """
        Write the locale-rendered report of one item and its reviews.

        Failures are logged and never raised; the catalog is unaffected.

        Returns:
            Path of the written report, or None if the item is missing or the write failed
        """
        formatter = locale_formatter.resolve(self._formatters, locale)
        try:
            with self._lock.read_locked():
                item, reviews = self._get_entry(item_id)
        except ItemNotFoundError as e:
            logger.info(f"Report for {client} not written: {e}")
            return None

        lines = [formatter.format_item(item)]
        if reviews:
            lines.extend(formatter.format_review(review) for review in display_order(reviews))
        else:
            lines.append(formatter.no_reviews())

        filename = settings.REPORT_FILE.format(id=item_id, client=client)
        if os.path.basename(filename) != filename:
            logger.error(f"Report for product {item_id} not written: invalid client tag {client!r}")
            return None

        filepath = os.path.join(self.reports_root, filename)
        try:
            os.makedirs(self.reports_root, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            logger.error(f"Failed to write report for product {item_id}: {e}")
            return None

        logger.info(f"Report for product {item_id} written to {filepath}")
        return filepath

    def list_formatted(
        self,
        predicate: Optional[Callable[[Item], bool]] = None,
        key: Optional[Callable[[Item], Any]] = None,
        locale: str = settings.DEFAULT_LOCALE,
        reverse: bool = False,
        comparator: Optional[Callable[[Item, Item], int]] = None
    ) -> List[str]:
        """
        Render the items passing predicate, ordered by key or by a two-argument
        comparator. Passing both is an error.

        Returns:
            One rendered line per item
        """
        if key is not None and comparator is not None:
            raise ValueError("Pass either key or comparator, not both")
        formatter = locale_formatter.resolve(self._formatters, locale)
        if comparator is not None:
            key = functools.cmp_to_key(comparator)
        with self._lock.read_locked():
            items = [item for item, _ in self._entries.values()]

        if predicate is not None:
            items = [item for item in items if predicate(item)]
        items.sort(key=key or (lambda item: item.id), reverse=reverse)
        return [formatter.format_item(item) for item in items]

    def entries(self) -> List[Entry]:
        """Consistent copy of every (item, reviews) pair, ordered by id."""
        with self._lock.read_locked():
            return [self._entries[item_id] for item_id in sorted(self._entries)]

    def save_records(self, storage: RecordStorage) -> int:
        """
        Write every item and its reviews back as line records.

        Returns:
            Number of items written
        """
        entries = self.entries()
        for item, reviews in entries:
            storage.save_item(item)
            storage.save_reviews(item.id, reviews)
        logger.info(f"Saved {len(entries)} products to {storage.data_root}")
        return len(entries)

    def dump_snapshot(self, manager: SnapshotManager) -> str:
        """Write a versioned snapshot of the whole catalog; returns its path."""
        return manager.dump(self.entries())

    def restore_snapshot(self, manager: SnapshotManager) -> int:
        """
        Replace the catalog with the newest snapshot.

        Returns:
            Number of items restored; 0 (catalog untouched) if no usable snapshot exists
        """
        try:
            entries = manager.load_latest()
        except SnapshotError as e:
            logger.error(f"Snapshot restore failed: {e}")
            return 0
        if entries is None:
            return 0

        with self._lock.write_locked():
            self._entries = entries
        logger.info(f"Restored {len(entries)} products from snapshot")
        return len(entries)

    def _get_entry(self, item_id: int) -> Entry:
        """Caller must hold the lock."""
        entry = self._entries.get(item_id)
        if entry is None:
            raise ItemNotFoundError(item_id)
        return entry
