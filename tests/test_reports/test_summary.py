"""
Unit tests for the catalog summary export.
"""

import json
import os
import tempfile
import pandas as pd
import pytest
from datetime import date
from catalog.models.rating import Rating
from catalog.registry.catalog_store import CatalogStore
from catalog.reports.summary import COLUMNS, CatalogSummary


BEST_BEFORE = date(2026, 10, 18)


@pytest.fixture
def store():
    store = CatalogStore()
    store.create(101, "Tea", "10.00", Rating.NOT_RATED)
    store.create(102, "Cake", "5.00", Rating.NOT_RATED, BEST_BEFORE)
    store.create(103, "Coffee", "2.50", Rating.NOT_RATED)
    store.add_review(103, Rating.FIVE_STAR, "Strong")
    store.add_review(103, Rating.FOUR_STAR, "Good")
    return store


def test_summary_frame(store):
    """Test one row per item, sorted by rating then id."""
    df = CatalogSummary(store).to_frame("en-GB", on=BEST_BEFORE)

    assert list(df.columns) == COLUMNS
    assert list(df["Id"]) == [103, 101, 102]
    assert list(df["Reviews"]) == [2, 0, 0]

    cake = df[df["Id"] == 102].iloc[0]
    assert cake["Variant"] == "F"
    assert cake["Discount"] == "£0.50"
    assert df.iloc[0]["Stars"] == "★★★★★"


def test_summary_empty_store():
    """Test an empty catalog gives an empty table with the expected columns."""
    df = CatalogSummary(CatalogStore()).to_frame("en-US")

    assert df.empty
    assert list(df.columns) == COLUMNS


def test_summary_export(store):
    """Test the CSV and metadata files are written."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = CatalogSummary(store).export(tmpdir, "xx-XX", on=BEST_BEFORE)

        df = pd.read_csv(output_path)
        assert len(df) == 3
        assert list(df.columns) == COLUMNS

        with open(os.path.join(tmpdir, "catalog_summary_metadata.json"), encoding="utf-8") as f:
            metadata = json.load(f)
        assert metadata["locale"] == "en-GB"
        assert metadata["total_products"] == 3
        assert metadata["total_reviews"] == 2
        assert metadata["evaluated_on"] == "2026-10-18"


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
