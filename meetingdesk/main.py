"""Service entry point: wires collaborators and runs the reminder scheduler."""

import asyncio
import logging
import os
from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass

from meetingdesk.adapters.base import MailDispatcher, MeetingRepository, RoleDirectory
from meetingdesk.config import settings
from meetingdesk.locks import MeetingLocks
from meetingdesk.meetings.service import MeetingService
from meetingdesk.reminders.composer import ReminderComposer
from meetingdesk.reminders.poller import ReminderPoller

logger = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging; structlog renders through it."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass
class MeetingDesk:
    """The wired-up services sharing one set of meeting locks."""

    meetings: MeetingService
    poller: ReminderPoller


def build_services(
    repository: MeetingRepository,
    directory: RoleDirectory,
    dispatcher: MailDispatcher,
) -> MeetingDesk:
    """Create MeetingService and ReminderPoller over the given collaborators.

    The poller is registered as the singleton the scheduler job uses.
    """
    locks = MeetingLocks()
    poller = ReminderPoller(
        repository=repository,
        composer=ReminderComposer(directory),
        dispatcher=dispatcher,
        locks=locks,
    )
    ReminderPoller.set_instance(poller)
    logger.info("ReminderPoller initialized")
    return MeetingDesk(
        meetings=MeetingService(repository, locks=locks),
        poller=poller,
    )


def _get_reminder_scheduler_context():
    """Get reminder scheduler lifespan context manager.

    Returns a no-op context if the scheduler is disabled via environment.
    """
    from meetingdesk.reminders.scheduler import reminder_scheduler_lifespan

    # Allow disabling scheduler for tests
    if os.environ.get("DISABLE_REMINDER_SCHEDULER"):

        @asynccontextmanager
        async def noop_context():
            yield

        return noop_context()

    return reminder_scheduler_lifespan()


@asynccontextmanager
async def lifespan(
    repository: MeetingRepository,
    directory: RoleDirectory,
    dispatcher: MailDispatcher,
) -> AsyncGenerator[MeetingDesk, None]:
    """Run the services with the reminder scheduler in the background.

    Startup:
    - Build services and register the poller
    - Start the reminder scheduler

    Shutdown:
    - Stop the scheduler
    - Unregister the poller
    """
    logger.info(f"Starting {settings.app_name}...")
    desk = build_services(repository, directory, dispatcher)

    async with AsyncExitStack() as stack:
        await stack.enter_async_context(_get_reminder_scheduler_context())
        try:
            yield desk
        finally:
            logger.info(f"Shutting down {settings.app_name}...")
            ReminderPoller.reset_instance()


async def serve(
    repository: MeetingRepository,
    directory: RoleDirectory,
    dispatcher: MailDispatcher,
    stop: asyncio.Event,
) -> None:
    """Run until stop is set."""
    configure_logging()
    async with lifespan(repository, directory, dispatcher):
        await stop.wait()
