"""Nightly scheduler — keeps every student's upcoming training weeks in place.

Usage:
    python -m scheduler.nightly --once      # single run (for cron)
    python -m scheduler.nightly --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging
from datetime import date

from pacelink_client import PaceLinkClient, PaceLinkClientError
from pacelink_engine.math.weeks import local_today

from scheduler.config import (
    NIGHTLY_HOUR,
    NIGHTLY_MINUTE,
    SUPABASE_SERVICE_ROLE_KEY,
    SUPABASE_URL,
    TIMEZONE,
    WEEKS_AHEAD,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def nightly_job(client: PaceLinkClient | None = None, today: date | None = None) -> int:
    """Ensure upcoming weeks for every student. Returns the number of students updated."""
    logger.info("Starting nightly job")

    # 1. Connect with the service-role key (sees every coach's students)
    if client is None:
        try:
            client = PaceLinkClient(url=SUPABASE_URL, key=SUPABASE_SERVICE_ROLE_KEY)
        except PaceLinkClientError as exc:
            logger.error("Failed to connect to Supabase: %s", exc)
            return 0

    # 2. List students
    try:
        students = client.list_students()
    except PaceLinkClientError as exc:
        logger.error("Failed to list students: %s", exc)
        return 0

    # 3. Upsert weeks per student; one failure does not stop the run
    today = today or local_today(TIMEZONE)
    updated = 0
    for student in students:
        if not student.get("trainer_id"):
            logger.warning("Student %s has no trainer, skipping", student.get("id"))
            continue
        try:
            client.ensure_upcoming_weeks(student, WEEKS_AHEAD, today)
            updated += 1
        except PaceLinkClientError as exc:
            logger.error("Failed to ensure weeks for student %s: %s", student["id"], exc)

    logger.info("Nightly job complete: %d/%d students", updated, len(students))
    return updated


def main() -> None:
    parser = argparse.ArgumentParser(description="PaceLink nightly scheduler")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        nightly_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler(timezone=TIMEZONE)
        scheduler.add_job(
            nightly_job,
            "cron",
            hour=NIGHTLY_HOUR,
            minute=NIGHTLY_MINUTE,
            id="nightly_job",
        )
        logger.info(
            "Scheduler started — nightly job at %02d:%02d %s",
            NIGHTLY_HOUR,
            NIGHTLY_MINUTE,
            TIMEZONE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
