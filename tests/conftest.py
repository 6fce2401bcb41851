"""Pytest configuration and fixtures."""

import pytest

from meetingdesk.adapters.memory import (
    InMemoryMeetingRepository,
    RecordingMailDispatcher,
    StaticRoleDirectory,
)
from meetingdesk.models.meeting import Meeting, MeetingState
from meetingdesk.models.user import UserProfile
from meetingdesk.reminders.composer import ReminderComposer

# 2026-01-01T00:00:00Z in epoch millis
T0 = 1_767_225_600_000


@pytest.fixture
def directory() -> StaticRoleDirectory:
    """Directory with two roles and two known users."""
    return StaticRoleDirectory(
        roles={
            "Members": ["alice", "bob"],
            "Stewards": ["carol"],
        },
        users=[
            UserProfile(
                user_id="alice",
                name="Alice Adams",
                email="alice@example.com",
                timezone="UTC",
            ),
            UserProfile(
                user_id="bob",
                name="Bob Brown",
                email="bob@example.com",
                timezone="Europe/Berlin",
            ),
        ],
    )


@pytest.fixture
def dispatcher() -> RecordingMailDispatcher:
    return RecordingMailDispatcher()


@pytest.fixture
def composer(directory: StaticRoleDirectory) -> ReminderComposer:
    return ReminderComposer(directory)


@pytest.fixture
def planning_meeting() -> Meeting:
    """Meeting at T0 in planning with a 30 minute reminder."""
    return Meeting(
        id="m1",
        name="Weekly sync",
        owner="alice",
        state=MeetingState.PLANNING,
        start_time=T0,
        duration=60,
        reminder_advance=30,
    )


@pytest.fixture
def repository() -> InMemoryMeetingRepository:
    return InMemoryMeetingRepository()
