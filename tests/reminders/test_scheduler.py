"""Tests for the reminder scheduler."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from meetingdesk.exceptions import ContractViolationError
from meetingdesk.reminders.poller import ReminderPoller
from meetingdesk.reminders.scheduler import (
    JOB_ID,
    get_scheduler,
    poll_meeting_reminders,
    reminder_scheduler_lifespan,
    reset_scheduler,
)


class TestGetScheduler:
    """Tests for get_scheduler function."""

    def setup_method(self):
        """Reset scheduler before each test."""
        reset_scheduler()

    def teardown_method(self):
        """Reset scheduler after each test."""
        reset_scheduler()

    def test_returns_same_instance(self):
        """get_scheduler returns same instance on multiple calls."""
        assert get_scheduler() is get_scheduler()

    def test_reset_clears_instance(self):
        scheduler1 = get_scheduler()
        reset_scheduler()
        assert get_scheduler() is not scheduler1


class TestReminderSchedulerLifespan:
    """Tests for reminder_scheduler_lifespan context manager."""

    def setup_method(self):
        reset_scheduler()

    def teardown_method(self):
        reset_scheduler()

    @pytest.mark.asyncio
    async def test_starts_scheduler(self):
        async with reminder_scheduler_lifespan():
            assert get_scheduler().running is True

    @pytest.mark.asyncio
    async def test_job_uses_configured_interval(self):
        """The poll job runs every reminder_poll_minutes (5 by default)."""
        async with reminder_scheduler_lifespan():
            job = get_scheduler().get_job(JOB_ID)
            assert job is not None
            assert job.trigger.interval.total_seconds() == 300

    @pytest.mark.asyncio
    async def test_interval_override(self):
        async with reminder_scheduler_lifespan(interval_minutes=1):
            job = get_scheduler().get_job(JOB_ID)
            assert job.trigger.interval.total_seconds() == 60

    @pytest.mark.asyncio
    async def test_job_max_instances(self):
        """Poll cycles never overlap."""
        async with reminder_scheduler_lifespan():
            job = get_scheduler().get_job(JOB_ID)
            assert job.max_instances == 1

    @pytest.mark.asyncio
    async def test_calls_shutdown_on_exit(self):
        with patch("meetingdesk.reminders.scheduler.AsyncIOScheduler") as mock_scheduler_class:
            mock_scheduler = MagicMock()
            mock_scheduler.running = True
            mock_scheduler_class.return_value = mock_scheduler
            reset_scheduler()

            async with reminder_scheduler_lifespan():
                pass

            mock_scheduler.shutdown.assert_called_once_with(wait=False)


class TestPollMeetingReminders:
    """Tests for the scheduled job function."""

    def setup_method(self):
        ReminderPoller.reset_instance()

    def teardown_method(self):
        ReminderPoller.reset_instance()

    @pytest.mark.asyncio
    async def test_runs_poll_cycle(self):
        mock_poller = MagicMock()
        mock_poller.poll_once = AsyncMock(return_value=[])
        ReminderPoller.set_instance(mock_poller)

        await poll_meeting_reminders()

        mock_poller.poll_once.assert_called_once()

    @pytest.mark.asyncio
    async def test_handles_uninitialized_poller(self):
        """The job returns quietly before the poller exists."""
        await poll_meeting_reminders()

    @pytest.mark.asyncio
    async def test_swallows_ordinary_errors(self):
        mock_poller = MagicMock()
        mock_poller.poll_once = AsyncMock(side_effect=RuntimeError("store offline"))
        ReminderPoller.set_instance(mock_poller)

        await poll_meeting_reminders()

    @pytest.mark.asyncio
    async def test_reraises_contract_violation(self):
        mock_poller = MagicMock()
        mock_poller.poll_once = AsyncMock(side_effect=ContractViolationError("bug"))
        ReminderPoller.set_instance(mock_poller)

        with pytest.raises(ContractViolationError):
            await poll_meeting_reminders()
