"""
Create the account store schema.

Usage:
  python -m shop_api.db.create_tables [--database-url sqlite:///./shop.db]
"""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from shop_api.core.config import get_settings

from .session import database_for

logger = logging.getLogger(__name__)


def create_all(database_url: str) -> None:
    database_for(database_url).create_schema()


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Create the shops/users tables")
    ap.add_argument("--database-url", help="SQLAlchemy URL (defaults to DATABASE_URL)")
    args = ap.parse_args(argv)

    url = args.database_url or get_settings().database_url
    try:
        create_all(url)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    logger.info("Schema ready at %s", url.split("@")[-1])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
