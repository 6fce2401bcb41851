"""Collaborator protocols and in-process adapters."""

from meetingdesk.adapters.base import (
    DocumentRegistry,
    LinkedReference,
    MailDispatcher,
    MeetingRepository,
    ReminderEmail,
    RoleDirectory,
)
from meetingdesk.adapters.memory import (
    InMemoryMeetingRepository,
    RecordingMailDispatcher,
    StaticRoleDirectory,
)

__all__ = [
    "DocumentRegistry",
    "LinkedReference",
    "MailDispatcher",
    "MeetingRepository",
    "ReminderEmail",
    "RoleDirectory",
    "InMemoryMeetingRepository",
    "RecordingMailDispatcher",
    "StaticRoleDirectory",
]
