"""ReminderPoller sends due meeting reminders on each poll cycle.

Every cycle walks all meetings. For each one it takes the meeting's lock,
reloads it, and if its reminder is due sends it and saves the meeting.
Failures are isolated per meeting and recorded in an audit log.
"""

from datetime import UTC, datetime

import structlog

from meetingdesk.adapters.base import MailDispatcher, MeetingRepository
from meetingdesk.exceptions import ContractViolationError, InvalidConfigurationError
from meetingdesk.locks import MeetingLocks
from meetingdesk.models.base import now_ms
from meetingdesk.reminders.composer import ReminderComposer
from meetingdesk.reminders.notification import MeetingReminder
from meetingdesk.reminders.schemas import ReminderRecord

logger = structlog.get_logger()


class ReminderPoller:
    """Finds meetings whose reminder is due and sends it.

    Singleton pattern with class-level instance for scheduler access.
    """

    _instance: "ReminderPoller | None" = None

    def __init__(
        self,
        repository: MeetingRepository,
        composer: ReminderComposer,
        dispatcher: MailDispatcher,
        locks: MeetingLocks | None = None,
    ):
        """Initialize ReminderPoller with dependencies.

        Args:
            repository: Meeting persistence
            composer: Builds reminder messages
            dispatcher: Delivers reminder messages
            locks: Per-meeting locks shared with MeetingService
        """
        self._repository = repository
        self._composer = composer
        self._dispatcher = dispatcher
        self._locks = locks or MeetingLocks()
        self._audit_log: list[ReminderRecord] = []

    @classmethod
    def get_instance(cls) -> "ReminderPoller":
        """Get the singleton instance.

        Raises:
            RuntimeError: If ReminderPoller not initialized
        """
        if cls._instance is None:
            raise RuntimeError("ReminderPoller not initialized")
        return cls._instance

    @classmethod
    def set_instance(cls, instance: "ReminderPoller") -> None:
        cls._instance = instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None

    async def poll_once(self, now: int | None = None) -> list[ReminderRecord]:
        """Run one poll cycle over every meeting.

        Args:
            now: Epoch millis of the cycle, defaults to the current time

        Returns:
            Audit records for the reminders attempted in this cycle

        Raises:
            ContractViolationError: If a send was attempted outside its
                preconditions, which indicates a bug
        """
        if now is None:
            now = now_ms()

        meetings = await self._repository.list_meetings()
        logger.debug("polling meeting reminders", meetings=len(meetings), now=now)

        records = []
        for listed in meetings:
            record = await self._poll_meeting(listed.id, now)
            if record is not None:
                records.append(record)

        if records:
            logger.info(
                "reminder poll finished",
                attempted=len(records),
                sent=sum(1 for r in records if r.success),
            )
        return records

    async def _poll_meeting(self, meeting_id: str, now: int) -> ReminderRecord | None:
        async with self._locks.hold(meeting_id):
            meeting = await self._repository.get(meeting_id)
            if meeting is None or meeting.is_backlog:
                return None

            reminder = MeetingReminder(meeting, self._composer, self._dispatcher)
            if not reminder.is_due(now):
                return None

            target = reminder.time_to_send()
            try:
                delivered = await reminder.send_it(now)
            except ContractViolationError:
                raise
            except InvalidConfigurationError as e:
                logger.error(
                    "reminder cannot be sent for meeting",
                    meeting_id=meeting_id,
                    error=str(e),
                )
                return self._record(meeting_id, target, False, error=str(e))
            except Exception as e:
                logger.error(
                    "reminder dispatch raised",
                    meeting_id=meeting_id,
                    error=str(e),
                )
                return self._record(meeting_id, target, False, error=str(e))

            if not delivered:
                return self._record(meeting_id, target, False, error="delivery_failed")

            await self._repository.save(meeting)
            sent = reminder.last_message
            recipient_count = len(sent.recipients) if sent else 0
            return self._record(meeting_id, target, True, recipient_count=recipient_count)

    def _record(
        self,
        meeting_id: str,
        target: int,
        success: bool,
        recipient_count: int = 0,
        error: str | None = None,
    ) -> ReminderRecord:
        record = ReminderRecord(
            meeting_id=meeting_id,
            target_time=target,
            attempted_at=datetime.now(UTC),
            recipient_count=recipient_count,
            success=success,
            error=error,
        )
        self._audit_log.append(record)
        return record

    def get_audit_log(self) -> list[ReminderRecord]:
        """Return copy of audit log."""
        return list(self._audit_log)

    def clear_audit_log(self) -> None:
        self._audit_log.clear()
