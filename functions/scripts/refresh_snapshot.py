"""
Runs a snapshot refresh ad hoc, outside the Cloud Scheduler trigger.

Example:
    FIREBASE_DATABASE_URL=https://<project>.firebaseio.com \
    CLOSEPOWERLIFTING_API_KEY=... python scripts/refresh_snapshot.py powerlifting
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import get_settings
from backend.dependencies import get_snapshot_store
from refresh_pipeline import refresh_job

logger = logging.getLogger(__name__)

SOURCES = ("powerlifting", "speedcubing")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Refresh a cached athlete snapshot")
    parser.add_argument("source", choices=SOURCES, help="Which snapshot to refresh")
    parser.add_argument(
        "--user",
        type=str,
        default=None,
        help="Override the Close Powerlifting user",
    )
    parser.add_argument(
        "--person-id",
        type=str,
        default=None,
        help="Override the WCA person id",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    settings = get_settings()
    if args.source == "powerlifting":
        source = refresh_job.close_powerlifting_source(
            args.user or settings.close_powerlifting_user
        )
        api_key = settings.closepowerlifting_api_key
    else:
        person_id = args.person_id or settings.wca_person_id
        if not person_id:
            logger.error("No WCA person id given (--person-id or WCA_PERSON_ID)")
            return 2
        source = refresh_job.wca_source(person_id)
        api_key = None

    try:
        snapshot = refresh_job.refresh_snapshot(
            source, get_snapshot_store(), api_key=api_key
        )
    except Exception as exc:
        logger.exception("Refresh failed: %s", exc)
        return 1

    logger.info("Refreshed %s (lastUpdated=%s)", source.name, snapshot.last_updated)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
