"""Tests for service wiring and the application lifespan."""

import pytest

from meetingdesk.main import build_services, lifespan
from meetingdesk.reminders.poller import ReminderPoller
from meetingdesk.reminders.scheduler import JOB_ID, get_scheduler, reset_scheduler

T0 = 1_767_225_600_000


class TestBuildServices:
    """Tests for build_services."""

    def teardown_method(self):
        ReminderPoller.reset_instance()

    def test_registers_poller(self, repository, directory, dispatcher):
        desk = build_services(repository, directory, dispatcher)
        assert ReminderPoller.get_instance() is desk.poller

    def test_services_share_locks(self, repository, directory, dispatcher):
        desk = build_services(repository, directory, dispatcher)
        assert desk.meetings.locks is desk.poller._locks

    @pytest.mark.asyncio
    async def test_end_to_end_reminder(self, repository, directory, dispatcher):
        """A meeting created and planned through the service gets reminded."""
        desk = build_services(repository, directory, dispatcher)
        meeting = await desk.meetings.create_meeting("alice", name="Standup")
        await desk.meetings.apply_update(
            meeting.id,
            {"state": 1, "start_time": T0, "reminder_advance": 15},
            actor="alice",
        )

        records = await desk.poller.poll_once(now=T0)

        assert [r.success for r in records] == [True]
        assert dispatcher.sent[0].subject == "Reminder for meeting: Standup"


class TestLifespan:
    """Tests for the lifespan context manager."""

    def setup_method(self):
        reset_scheduler()

    def teardown_method(self):
        reset_scheduler()
        ReminderPoller.reset_instance()

    @pytest.mark.asyncio
    async def test_starts_and_stops_scheduler(self, repository, directory, dispatcher, monkeypatch):
        monkeypatch.delenv("DISABLE_REMINDER_SCHEDULER", raising=False)
        async with lifespan(repository, directory, dispatcher) as desk:
            assert get_scheduler().get_job(JOB_ID) is not None
            assert ReminderPoller.get_instance() is desk.poller

        with pytest.raises(RuntimeError):
            ReminderPoller.get_instance()

    @pytest.mark.asyncio
    async def test_scheduler_can_be_disabled(self, repository, directory, dispatcher, monkeypatch):
        monkeypatch.setenv("DISABLE_REMINDER_SCHEDULER", "1")
        async with lifespan(repository, directory, dispatcher):
            assert get_scheduler().get_job(JOB_ID) is None
