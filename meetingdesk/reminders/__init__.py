"""Reminder scheduling: timing rules, composition, polling.

Provides:
- MeetingReminder: when a meeting's reminder is due, and sending it
- ReminderComposer: the reminder e-mail and its recipients
- ReminderPoller: one poll cycle over all meetings
- reminder_scheduler_lifespan: APScheduler job running the poller
"""

from meetingdesk.reminders.composer import ReminderComposer
from meetingdesk.reminders.notification import (
    NEVER,
    MeetingReminder,
    needs_sending,
    time_to_send,
)
from meetingdesk.reminders.poller import ReminderPoller
from meetingdesk.reminders.scheduler import (
    get_scheduler,
    poll_meeting_reminders,
    reminder_scheduler_lifespan,
    reset_scheduler,
)
from meetingdesk.reminders.schemas import ReminderRecord

__all__ = [
    "NEVER",
    "MeetingReminder",
    "ReminderComposer",
    "ReminderPoller",
    "ReminderRecord",
    "get_scheduler",
    "needs_sending",
    "poll_meeting_reminders",
    "reminder_scheduler_lifespan",
    "reset_scheduler",
    "time_to_send",
]
