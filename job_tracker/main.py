"""Main entry point for the job tracker scheduler."""
import argparse
import asyncio
import logging
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from config.settings import settings
from job_tracker.exceptions import GmailAuthError
from job_tracker.gmail import GmailAuth, GmailClient
from job_tracker.logging_config import setup_logging
from job_tracker.persistence.database import get_session, init_db
from job_tracker.pipeline import RunSummary, process_new_emails
from job_tracker.state import StateStore
from job_tracker.tracking import ApplicationService

logger = logging.getLogger(__name__)


def build_gmail_client() -> GmailClient:
    auth = GmailAuth(
        client_id=settings.gmail_client_id,
        client_secret=settings.gmail_client_secret,
        refresh_token=settings.gmail_refresh_token,
        token_file=settings.gmail_token_file,
        redirect_uri=settings.gmail_redirect_uri,
    )
    return GmailClient(auth, processed_label=settings.processed_label)


def run_email_check() -> RunSummary:
    """Run one fetch/extract/store cycle against Gmail and the database."""
    client = build_gmail_client()
    state_store = StateStore(settings.state_file, settings.initial_lookback_hours)

    with get_session() as session:
        return process_new_emails(client, ApplicationService(session), state_store)


def verify_database() -> bool:
    """Create tables if needed and check the applications schema."""
    init_db()
    with get_session() as session:
        return ApplicationService(session).verify_schema()


async def scheduled_email_check():
    """Scheduler job; a failed run is logged and the next one still fires."""
    logger.info("Cron triggered - checking for new emails...")
    try:
        await asyncio.to_thread(run_email_check)
    except Exception as e:
        logger.error("Cron run failed: %s", e, exc_info=True)


async def async_main():
    """Async main entry point."""
    logger.info("Running initial email scan...")
    await asyncio.to_thread(run_email_check)

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        scheduled_email_check,
        CronTrigger.from_crontab(settings.cron_schedule),
        id="email_check",
        name="Email Check",
        max_instances=1,
    )
    scheduler.start()
    logger.info("Scheduling cron: %s", settings.cron_schedule)
    logger.info("Job tracker is running. Press Ctrl+C to stop.")

    try:
        while True:
            await asyncio.sleep(60)
    except asyncio.CancelledError:
        logger.info("Shutting down...")
    finally:
        scheduler.shutdown()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Track job applications from Gmail")
    parser.add_argument("--once", action="store_true", help="Run a single check and exit")
    args = parser.parse_args(argv)

    setup_logging(level=settings.log_level, log_file=settings.log_file)
    logger.info("Job tracker starting up...")

    if not verify_database():
        logger.error("Database verification failed. Please check the applications table.")
        return 1

    try:
        if args.once:
            summary = run_email_check()
            logger.info("Single run finished: %s", summary)
            return 0
        asyncio.run(async_main())
    except GmailAuthError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutdown complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
