"""
Catalog Summary.

Tabulates every item with its pricing, rating and review count.
"""

import json
import logging
import os
from datetime import date, datetime
from typing import Optional

import pandas as pd

from catalog.registry.catalog_store import CatalogStore
from catalog.utils.formatter import get_formatter

logger = logging.getLogger(__name__)

COLUMNS = ["Id", "Name", "Variant", "Price", "Discount", "Rating", "Stars", "Reviews"]


class CatalogSummary:
    """
    Builds a one-row-per-item table from a consistent store snapshot.
    """

    def __init__(self, store: CatalogStore):
        self.store = store

    def to_frame(self, locale: str, on: Optional[date] = None) -> pd.DataFrame:
        """
        Build the summary table.

        Args:
            locale: Locale tag used for the money columns
            on: Evaluation date for perishable discounts (default: today)

        Returns:
            DataFrame sorted by rating (descending), then id
        """
        formatter = get_formatter(locale)
        rows = []
        for item, reviews in self.store.entries():
            rows.append({
                "Id": item.id,
                "Name": item.name,
                "Variant": item.variant,
                "Price": formatter.format_money(item.price),
                "Discount": formatter.format_money(item.discount(on)),
                "Rating": int(item.rating),
                "Stars": item.stars,
                "Reviews": len(reviews)
            })

        df = pd.DataFrame(rows, columns=COLUMNS)
        if df.empty:
            logger.warning("Catalog is empty, creating empty summary table")
            return df

        return df.sort_values(["Rating", "Id"], ascending=[False, True]).reset_index(drop=True)

    def export(self, output_dir: str, locale: str, on: Optional[date] = None) -> str:
        """
        Write the summary CSV and its metadata JSON.

        Returns:
            Path to the generated CSV file
        """
        df = self.to_frame(locale, on)

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, "catalog_summary.csv")
        df.to_csv(output_path, index=False)
        logger.info(f"Catalog summary saved to {output_path} ({len(df)} products)")

        metadata_path = os.path.join(output_dir, "catalog_summary_metadata.json")
        metadata = {
            "locale": get_formatter(locale).tag,
            "evaluated_on": (on or date.today()).isoformat(),
            "total_products": len(df),
            "total_reviews": int(df["Reviews"].sum()) if not df.empty else 0,
            "generated_at": datetime.utcnow().isoformat() + "Z"
        }
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)

        logger.info(f"Metadata saved to {metadata_path}")
        return output_path
