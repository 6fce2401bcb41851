"""Reminder timing for a single meeting.

A meeting may be scheduled in the future or (rarely) in the past, and the
reminder advance may put the send time before or after now. The reminder
may already have gone out, and the meeting time may have changed since.

The rules that cover all of this:
- Reminders only go out while the meeting is in planning.
- The target time is start_time minus the advance; no advance, no reminder.
- The reminder is due while reminder_sent is earlier than the target time.
- Changing the start time clears reminder_sent, so a rescheduled meeting
  is reminded again, even if the new target time has already passed.
- Sending records reminder_sent = now, which is at or after the target,
  so it goes out once per schedule.
"""

import structlog

from meetingdesk.adapters.base import MailDispatcher, ReminderEmail
from meetingdesk.exceptions import ContractViolationError
from meetingdesk.models.base import MILLIS_PER_MINUTE
from meetingdesk.models.meeting import Meeting, MeetingState
from meetingdesk.reminders.composer import ReminderComposer

logger = structlog.get_logger()

NEVER = -1


def time_to_send(meeting: Meeting) -> int:
    """Epoch millis the reminder is due, or NEVER when it is not scheduled."""
    if meeting.state != MeetingState.PLANNING:
        return NEVER
    advance = meeting.reminder_advance
    if advance <= 0:
        return NEVER
    return meeting.start_time - advance * MILLIS_PER_MINUTE


def needs_sending(meeting: Meeting) -> bool:
    """Whether the reminder for the current schedule is still outstanding."""
    if meeting.state != MeetingState.PLANNING:
        return False
    target = time_to_send(meeting)
    return target > 0 and meeting.reminder_sent < target


class MeetingReminder:
    """The scheduled reminder of one meeting.

    The caller must hold the meeting's lock from needs_sending() through
    send_it() and the save that follows.
    """

    def __init__(
        self,
        meeting: Meeting,
        composer: ReminderComposer,
        dispatcher: MailDispatcher,
    ):
        self.meeting = meeting
        self._composer = composer
        self._dispatcher = dispatcher
        self.last_message: ReminderEmail | None = None

    def time_to_send(self) -> int:
        return time_to_send(self.meeting)

    def needs_sending(self) -> bool:
        return needs_sending(self.meeting)

    def is_due(self, now: int) -> bool:
        """Outstanding and the target time has passed."""
        return self.needs_sending() and self.time_to_send() <= now

    async def send_it(self, now: int) -> bool:
        """Send the reminder and record when it went out.

        reminder_sent only advances after the dispatcher reports success;
        a failed delivery stays due for the next poll.

        Args:
            now: Epoch millis of this poll cycle

        Returns:
            True if the dispatcher delivered the reminder

        Raises:
            ContractViolationError: If the meeting is not in planning or
                the target time is still in the future
            InvalidConfigurationError: If no sender or recipients resolve
        """
        meeting = self.meeting
        if meeting.state != MeetingState.PLANNING:
            msg = (
                f"Attempting to send reminder for meeting {meeting.id} "
                f"while not in planning. State={meeting.state.name}"
            )
            raise ContractViolationError(msg)

        target = self.time_to_send()
        if target > now:
            msg = (
                f"Request to send reminder for meeting {meeting.id} when "
                f"its send time ({target}) is still in the future ({now})"
            )
            raise ContractViolationError(msg)

        message = self._composer.compose(meeting)
        self.last_message = message
        logger.info(
            "sending meeting reminder",
            meeting_id=meeting.id,
            target_time=target,
            start_time=meeting.start_time,
            recipients=len(message.recipients),
        )
        delivered = await self._dispatcher.send(message)
        if not delivered:
            logger.warning("reminder delivery failed", meeting_id=meeting.id)
            return False

        meeting.mark_reminder_sent(now)
        if self.needs_sending():
            logger.warning(
                "reminder still due right after sending",
                meeting_id=meeting.id,
                target_time=target,
                reminder_sent=meeting.reminder_sent,
            )
        return True
