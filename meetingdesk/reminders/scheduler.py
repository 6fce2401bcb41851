"""APScheduler integration for periodic reminder polling.

One AsyncIOScheduler per process runs the reminder poll job. The
lifespan context starts it and stops it around the application run.
"""

from contextlib import asynccontextmanager
from datetime import UTC
from typing import TYPE_CHECKING

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from meetingdesk.config import settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger()

JOB_ID = "meeting_reminder_poller"

# Created lazily by get_scheduler()
_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    """Return the process-wide scheduler, creating it in UTC on first use."""
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=UTC)
    return _scheduler


def reset_scheduler() -> None:
    """Reset the scheduler instance (for testing)."""
    global _scheduler
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=False)
    _scheduler = None


@asynccontextmanager
async def reminder_scheduler_lifespan(
    interval_minutes: int | None = None,
) -> "AsyncGenerator[None, None]":
    """Lifespan context manager for the reminder scheduler.

    Starts the scheduler with a job that polls meeting reminders every
    interval_minutes (settings.reminder_poll_minutes by default). The job
    never overlaps itself. Shuts down cleanly on exit.

    Example:
        async with reminder_scheduler_lifespan(interval_minutes=1):
            await stop.wait()
    """
    scheduler = get_scheduler()

    scheduler.add_job(
        poll_meeting_reminders,
        "interval",
        minutes=interval_minutes or settings.reminder_poll_minutes,
        id=JOB_ID,
        replace_existing=True,
        max_instances=1,
    )

    logger.info("Starting reminder scheduler")
    scheduler.start()

    try:
        yield
    finally:
        logger.info("Shutting down reminder scheduler")
        scheduler.shutdown(wait=False)


async def poll_meeting_reminders() -> None:
    """Scheduled job: send every reminder that has come due.

    Gets the ReminderPoller instance and runs one poll cycle. A contract
    violation is logged with its traceback and re-raised so the scheduler
    reports the failed job.
    """
    from meetingdesk.exceptions import ContractViolationError
    from meetingdesk.reminders.poller import ReminderPoller

    try:
        poller = ReminderPoller.get_instance()
    except RuntimeError as e:
        # ReminderPoller not initialized yet
        logger.warning("ReminderPoller not ready", error=str(e))
        return

    try:
        records = await poller.poll_once()
    except ContractViolationError:
        logger.exception("Reminder poll hit a contract violation")
        raise
    except Exception as e:
        logger.error("Reminder poll failed", error=str(e))
        return

    if records:
        logger.info("Sent meeting reminders", count=sum(1 for r in records if r.success))
