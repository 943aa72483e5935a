"""
Seeds the configured document store with the built-in site content.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from aster_backend.admin import seed_defaults
from aster_backend.dependencies import get_document_store
from aster_backend.errors import StoreWriteError
from aster_backend.repository import ContentRepository

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the store with default content")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite collections that already hold live data",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    repository = ContentRepository(get_document_store())
    try:
        seeded, skipped = seed_defaults(repository, force=args.force)
    except StoreWriteError as exc:
        logger.error("Seeding stopped: %s", exc)
        return 1

    logger.info("Seeded: %s", ", ".join(seeded) or "nothing")
    if skipped:
        logger.info("Skipped (already live, use --force): %s", ", ".join(skipped))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
