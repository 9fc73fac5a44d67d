"""
Tests for the simulated shop clients of the CLI entry point.
"""

import random
import tempfile
from concurrent.futures import ThreadPoolExecutor
import pytest
from catalog.models.rating import Rating
from catalog.registry.catalog_store import CatalogStore
from main import make_client


def test_clients_review_and_report():
    """Test each client reviews one product and writes its report."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = CatalogStore(reports_root=tmpdir)
        for item_id in range(101, 106):
            store.create(item_id, f"Product {item_id}", "10.00", Rating.NOT_RATED)

        client = make_client(store, random.Random(1), 101, 5)
        with ThreadPoolExecutor(max_workers=3) as executor:
            logs = list(executor.map(lambda _: client(), range(10)))

        assert all("reviewed" in log and "generated report" in log for log in logs)
        assert sum(len(reviews) for _, reviews in store.entries()) == 10
        assert all(item.rating in (Rating.NOT_RATED, Rating.FOUR_STAR) for item, _ in store.entries())


def test_client_with_missing_product():
    """Test a client targeting an unknown id logs the miss instead of failing."""
    store = CatalogStore()
    client = make_client(store, random.Random(1), 500, 1)

    log = client()

    assert "Product 500 not reviewed" in log
    assert "generated report" not in log


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
