#!/usr/bin/env python3
"""
Generate scholarship embeddings.

Incremental by default: only scholarships whose embedding is missing or
stale (schema version or text hash changed) are regenerated. Embeddings of
scholarships no longer in the catalog are removed.

Run with: python scripts/generate_embeddings.py

Example usage:
    python scripts/generate_embeddings.py                 # incremental (recommended)
    python scripts/generate_embeddings.py --force         # full regeneration
    python scripts/generate_embeddings.py --config config.yaml --verbose

Environment variables:
    AZURE_OPENAI_ENDPOINT / AZURE_OPENAI_KEY - Azure OpenAI credentials
    AZURE_OPENAI_EMBEDDING_DEPLOYMENT - deployment name (default text-embedding-ada-002)
    OPENAI_API_KEY / OPENAI_BASE_URL - plain OpenAI-compatible endpoint instead
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure we can import from the project root
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import CatalogUnavailableError, StoreUnavailableError
from core.matcher.scholarship_text import EMBEDDING_VERSION

logger = logging.getLogger("generate_embeddings")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate scholarship embeddings")
    parser.add_argument("--force", action="store_true", help="Regenerate every embedding")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, ctx: Optional[AppContext] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if ctx is None:
        config = load_config(args.config)
        if not config.embedding.api_key:
            logger.error("No embedding API key configured. Set AZURE_OPENAI_KEY or OPENAI_API_KEY.")
            return 1
        ctx = AppContext.build(config)

    try:
        scholarships = ctx.catalog.list_approved()
    except CatalogUnavailableError as e:
        logger.error(f"Cannot load scholarships: {e}")
        return 1

    logger.info(f"Found {len(scholarships)} approved scholarships")
    if args.force:
        logger.info("Force regeneration enabled - will regenerate all embeddings")

    try:
        summary = ctx.lifecycle.sync(scholarships, force=args.force)
    except StoreUnavailableError as e:
        logger.error(f"Embedding store unavailable: {e}")
        return 1

    print("\n--- Summary ---")
    print(f"  - New: {summary.created}")
    print(f"  - Updated: {summary.updated}")
    print(f"  - Unchanged: {summary.unchanged}")
    print(f"  - Removed (orphaned): {summary.removed}")
    print(f"  - Failed: {summary.failed}")
    print(f"Embedding version: {EMBEDDING_VERSION}")
    print(f"Model: {ctx.provider.model_name}")

    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main())
