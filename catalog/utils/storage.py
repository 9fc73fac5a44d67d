"""
Record storage.

Reads and writes item and review line records under the data directory:
- Items   (data/product{id}.txt, first line is the record)
- Reviews (data/reviews{id}.txt, one record per line)
"""

import logging
import os
from typing import Dict, Iterable, List, Optional, Tuple

from catalog.models.item import Item
from catalog.models.review import Review
from catalog.utils.line_format import parse_item, parse_review, serialize_item, serialize_review
import config.settings as settings

logger = logging.getLogger(__name__)

Entry = Tuple[Item, Tuple[Review, ...]]


class RecordStorage:
    """
    Manages flat-file item and review records for one data directory.
    """

    def __init__(self, data_root: str):
        """
        Initialize record storage.

        Args:
            data_root: Directory holding product and review files
        """
        self.data_root = str(data_root)

    def load_catalog(self) -> Dict[int, Entry]:
        """
        Scan the data directory and rebuild every parsable item with its reviews.
        Unparsable records are dropped; a failed scan yields an empty catalog.

        Returns:
            Mapping of item id to (item, reviews)
        """
        try:
            filenames = sorted(
                name for name in os.listdir(self.data_root)
                if name.startswith(settings.PRODUCT_FILE_PREFIX)
            )
        except OSError as e:
            logger.error(f"Error loading data from {self.data_root}: {e}")
            return {}

        entries: Dict[int, Entry] = {}
        for filename in filenames:
            item = self.load_item(os.path.join(self.data_root, filename))
            if item is None:
                continue
            if item.id in entries:
                logger.warning(f"Duplicate product id {item.id} in {filename}, keeping first")
                continue
            entries[item.id] = (item, tuple(self.load_reviews(item.id)))

        logger.info(f"Loaded {len(entries)} products from {self.data_root}")
        return entries

    def load_item(self, filepath: str) -> Optional[Item]:
        """
        Parse the first line of an item file.

        Returns:
            Item, or None if the file is unreadable, empty or malformed
        """
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                line = f.readline()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Error loading product {filepath}: {e}")
            return None
        return parse_item(line)

    def load_reviews(self, item_id: int) -> List[Review]:
        """
        Parse the review file of an item. A missing file means no reviews.
        """
        filepath = self._reviews_path(item_id)
        if not os.path.exists(filepath):
            return []

        try:
            with open(filepath, "rb") as f:
                raw_lines = f.read().splitlines()
        except OSError as e:
            logger.warning(f"Error loading reviews {filepath}: {e}")
            return []

        reviews = []
        for number, raw in enumerate(raw_lines, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(f"Error parsing review {filepath}:{number}: {e}")
                continue
            if not line.strip():
                continue
            review = parse_review(line)
            if review is not None:
                reviews.append(review)
        logger.debug(f"Loaded {len(reviews)} reviews for product {item_id}")
        return reviews

    def save_item(self, item: Item) -> str:
        """Write the record of one item; returns the file path."""
        os.makedirs(self.data_root, exist_ok=True)
        filepath = os.path.join(self.data_root, settings.PRODUCT_FILE.format(id=item.id))
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(serialize_item(item) + "\n")
        return filepath

    def save_reviews(self, item_id: int, reviews: Iterable[Review]) -> str:
        """Write the review records of one item in insertion order; returns the file path."""
        os.makedirs(self.data_root, exist_ok=True)
        filepath = self._reviews_path(item_id)
        with open(filepath, "w", encoding="utf-8") as f:
            for review in reviews:
                f.write(serialize_review(review) + "\n")
        return filepath

    def _reviews_path(self, item_id: int) -> str:
        return os.path.join(self.data_root, settings.REVIEWS_FILE.format(id=item_id))
