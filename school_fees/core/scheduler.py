"""APScheduler configuration for the daily overdue sweep."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from school_fees.core.config import settings
from school_fees.core.database import SessionLocal
from school_fees.services.fee_record import FeeRecordService

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler: AsyncIOScheduler | None = None


def get_db_session() -> Session:
    """Get a database session for scheduler jobs."""
    return SessionLocal()


def mark_overdue_job() -> int:
    """
    Move past-due Pending fee records to Overdue.

    Runs shortly after midnight every day; returns the number of records
    updated.
    """
    logger.info("Starting overdue sweep job")

    db = get_db_session()
    try:
        result = FeeRecordService(db).mark_overdue()
        db.commit()
        return result.count
    except Exception:
        logger.exception("Overdue sweep job failed")
        db.rollback()
        return 0
    finally:
        db.close()


def init_scheduler() -> AsyncIOScheduler:
    """Initialize and configure the scheduler."""
    global scheduler

    scheduler = AsyncIOScheduler(
        timezone=settings.SCHEDULER_TIMEZONE,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 3600,
        },
    )

    scheduler.add_job(
        mark_overdue_job,
        trigger=CronTrigger(hour=0, minute=5),
        id="mark_overdue_fee_records",
        name="Mark overdue fee records",
        replace_existing=True,
    )

    logger.info("Scheduler initialized with overdue sweep job (%s)", settings.SCHEDULER_TIMEZONE)
    return scheduler


def start_scheduler():
    """Start the scheduler."""
    global scheduler
    if scheduler is None:
        scheduler = init_scheduler()

    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    global scheduler
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    scheduler = None
