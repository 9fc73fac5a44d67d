"""
Catalog Manager - simulated shop clients

CLI entry point: loads the catalog and runs concurrent clients against it.
"""

import argparse
import logging
import random
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from itertools import count

from catalog.errors import ItemNotFoundError
from catalog.models.rating import Rating
from catalog.registry.catalog_store import CatalogStore
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
        ]
    )


def make_client(store: CatalogStore, rng: random.Random, min_id: int, num_products: int):
    """
    Build the client task: read discounts, review a random product, write its report.
    """
    client_numbers = count(1)
    rng_lock = threading.Lock()
    locales = store.supported_locales()

    def client() -> str:
        with rng_lock:
            client_id = f"Client{next(client_numbers)}"
            product_id = min_id + rng.randrange(num_products)
            locale = rng.choice(locales)

        log = [f"{client_id} {threading.current_thread().name}", "-\tstart of log\t-"]
        log.extend(
            f"{stars}\t{total}"
            for stars, total in store.discounts_by_star_rating(locale).items()
        )

        try:
            store.add_review(product_id, Rating.FOUR_STAR, f"Yet another review from {client_id}")
            log.append(f"Product {product_id} reviewed")
        except ItemNotFoundError:
            log.append(f"Product {product_id} not reviewed")

        report_path = store.report(product_id, locale, client_id)
        if report_path:
            log.append(f"{client_id} generated report for {product_id} product")
        log.append("-\tend of log\t-")
        return "\n".join(log)

    return client


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Catalog Manager - concurrent shop client simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default five clients on three threads
  python main.py

  # Heavier load against a custom data directory
  python main.py --data-root ./data --clients 50 --threads 8
        """
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Product and review records (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--reports-root",
        default=str(settings.REPORTS_ROOT),
        help=f"Report output directory (default: {settings.REPORTS_ROOT})"
    )

    parser.add_argument(
        "--clients",
        type=int,
        default=settings.NUM_CLIENTS,
        help=f"Number of simulated clients (default: {settings.NUM_CLIENTS})"
    )

    parser.add_argument(
        "--threads",
        type=int,
        default=settings.MAX_THREADS,
        help=f"Worker threads (default: {settings.MAX_THREADS})"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible client choices"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    store = CatalogStore(data_root=args.data_root, reports_root=args.reports_root)
    logger.info(f"Catalog ready with {len(store)} products")

    client = make_client(
        store, random.Random(args.seed), settings.MIN_PRODUCT_ID, settings.NUM_PRODUCTS
    )

    try:
        with ThreadPoolExecutor(max_workers=args.threads) as executor:
            futures = [executor.submit(client) for _ in range(args.clients)]
            for future in futures:
                try:
                    print(future.result())
                except Exception as e:
                    logger.error(f"Error retrieving client log: {e}", exc_info=True)
    except KeyboardInterrupt:
        logger.warning("Simulation interrupted by user")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
