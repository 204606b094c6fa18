import argparse
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from app.core.logging import configure_logging
from app.infrastructure.persistence.catalog_seed import load_products
from app.infrastructure.persistence.sqlite import SQLitePersistence

logger = logging.getLogger("seed_products")


def main() -> None:
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL"))

    parser = argparse.ArgumentParser(description="Import the product catalog into the database.")
    parser.add_argument(
        "catalog",
        nargs="?",
        default=os.getenv("PRODUCT_SEED_PATH", "catalog/products.json"),
        help="JSON file with the products to import",
    )
    parser.add_argument(
        "--database",
        default=os.getenv("DATABASE_PATH", "data/app.db"),
        help="SQLite database path",
    )
    args = parser.parse_args()

    persistence = SQLitePersistence(Path(args.database).resolve())
    try:
        count = persistence.insert_products(load_products(Path(args.catalog)))
    finally:
        persistence.close()
    logger.info("Imported %d products into %s", count, args.database)


if __name__ == "__main__":
    main()
