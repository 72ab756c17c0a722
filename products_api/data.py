"""
Database maintenance command.

    python -m products_api.data --clear
"""
import argparse
import logging

from sqlalchemy.engine import Engine

from products_api.database import Base, engine
from products_api.models.product import Product  # noqa: F401

logger = logging.getLogger(__name__)


def clear_db(bind: Engine = None) -> None:
    """Drop and recreate every table."""
    bind = bind if bind is not None else engine
    Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    logger.info("Database cleared")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Products database maintenance")
    parser.add_argument("--clear", action="store_true", help="drop and recreate all tables")
    args = parser.parse_args(argv)

    if not args.clear:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    clear_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
