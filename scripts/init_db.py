#!/usr/bin/env python3
"""
Create the pgvector extension and the scholarship_embedding table.

Run with: python scripts/init_db.py [--config config.yaml]
Only needed for the postgres embedding store backend.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tenacity import retry, stop_after_attempt, wait_fixed

# Ensure we can import from the project root
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from core.config_loader import load_config
from database.database import build_session_factory, init_schema

logger = logging.getLogger("init_db")


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2), reraise=True)
def init_db(database_url: Optional[str]) -> None:
    logger.info("Initializing database...")
    try:
        init_schema(build_session_factory(database_url))
        logger.info("Checked/created 'vector' extension and embedding tables.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the embedding database")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_config(args.config)
    try:
        init_db(config.database.url)
    except Exception:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
