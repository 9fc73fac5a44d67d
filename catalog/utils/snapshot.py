"""
Catalog snapshots.

Versioned JSON dump/restore of the whole catalog.
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

from catalog.errors import SnapshotError
from catalog.models.item import Item
from catalog.models.review import Review
from catalog.utils.storage import Entry
import config.settings as settings

logger = logging.getLogger(__name__)


class SnapshotManager:
    """
    Writes and reads catalog snapshots under one directory.

    File layout:
        {"version": "1.0", "created_at": "...Z",
         "items": [{...item fields..., "reviews": [{"rating": 4, "comments": "..."}]}]}
    """

    def __init__(self, snapshot_root: str):
        self.snapshot_root = str(snapshot_root)

    def dump(self, entries: List[Entry]) -> str:
        """
        Persist entries with the temp-file + rename pattern.

        Returns:
            Path of the snapshot file written
        """
        os.makedirs(self.snapshot_root, exist_ok=True)
        created_at = datetime.utcnow()
        data = {
            "version": settings.SNAPSHOT_VERSION,
            "created_at": created_at.isoformat() + "Z",
            "items": [
                dict(item.to_dict(), reviews=[review.to_dict() for review in reviews])
                for item, reviews in entries
            ]
        }

        filename = settings.SNAPSHOT_FILE.format(timestamp=created_at.strftime("%Y%m%dT%H%M%S%f"))
        snapshot_path = os.path.join(self.snapshot_root, filename)
        temp_path = f"{snapshot_path}.tmp"
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, snapshot_path)
        except Exception as e:
            logger.error(f"Failed to dump catalog: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        logger.info(f"Catalog snapshot saved: {len(entries)} products to {snapshot_path}")
        return snapshot_path

    def latest(self) -> Optional[str]:
        """Path of the newest snapshot file, or None."""
        if not os.path.isdir(self.snapshot_root):
            return None
        names = sorted(
            name for name in os.listdir(self.snapshot_root)
            if name.startswith("catalog_") and name.endswith(".json")
        )
        return os.path.join(self.snapshot_root, names[-1]) if names else None

    def load(self, snapshot_path: str) -> Dict[int, Entry]:
        """
        Read one snapshot file.

        Raises:
            SnapshotError: If the file is unreadable, not JSON, or an unknown version
        """
        try:
            with open(snapshot_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Failed to read snapshot {snapshot_path}: {e}") from e

        version = data.get("version") if isinstance(data, dict) else None
        if version != settings.SNAPSHOT_VERSION:
            raise SnapshotError(f"Unsupported snapshot version {version!r} in {snapshot_path}")

        entries: Dict[int, Entry] = {}
        try:
            for item_data in data.get("items", []):
                item = Item.from_dict(item_data)
                reviews = tuple(Review.from_dict(r) for r in item_data.get("reviews", []))
                entries[item.id] = (item, reviews)
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"Corrupt snapshot {snapshot_path}: {e}") from e

        logger.info(f"Read {len(entries)} products from snapshot {snapshot_path}")
        return entries

    def load_latest(self) -> Optional[Dict[int, Entry]]:
        """Entries of the newest snapshot, or None when there is none."""
        snapshot_path = self.latest()
        if snapshot_path is None:
            logger.warning(f"No snapshot found in {self.snapshot_root}")
            return None
        return self.load(snapshot_path)
