"""Meeting model: lifecycle state, schedule, attendance and owned children."""

from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator

from meetingdesk.exceptions import ContractViolationError
from meetingdesk.models.agenda_item import AgendaItem
from meetingdesk.models.base import MILLIS_PER_MINUTE, BaseEntity, StrippedStr
from meetingdesk.models.proposed_time import ProposedTime, SlotList
from meetingdesk.models.user import UserRef

logger = structlog.get_logger()


class MeetingState(int, Enum):
    """Lifecycle state of a meeting."""

    DRAFT = 0
    PLANNING = 1
    RUNNING = 2
    COMPLETED = 3


class MeetingType(int, Enum):
    """Kind of meeting, used only for display."""

    CIRCLE = 1
    OPERATIONAL = 2


class RollCallEntry(BaseModel):
    """A participant's stated intention to attend."""

    model_config = ConfigDict(str_strip_whitespace=True)

    uid: str = Field(description="User id")
    attend: str = Field(default="", description="yes, no, maybe")
    situation: str = Field(default="", description="Comment about their situation")


class Meeting(BaseEntity):
    """A scheduled group meeting.

    Meetings are the aggregate root. They own, exclusively:
    - The agenda items
    - Both lists of proposed times (current and future)
    - Attendance and roll call

    Fields with coupled invariants are changed through the mutators below
    rather than by assignment: set_start_time, mark_reminder_sent and
    add_attendee_if_needed.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    name: StrippedStr = Field(default="", description="Display name")
    description: str = Field(default="", description="Free-text description")
    owner: StrippedStr = Field(
        default="",
        description="User who created the meeting; reminders are sent as them",
    )
    state: MeetingState = Field(default=MeetingState.DRAFT)
    start_time: int = Field(default=0, description="Epoch millis, 0 = unscheduled")
    duration: int = Field(default=60, ge=0, description="Length in minutes")
    meeting_type: MeetingType = Field(default=MeetingType.CIRCLE)
    target_role: StrippedStr = Field(
        default="",
        description="Role invited when there is no explicit participant list",
    )
    participants: list[str] = Field(default_factory=list)
    reminder_advance: int = Field(
        default=0,
        description="Minutes before start to send the reminder, <=0 disables",
    )
    reminder_sent: int = Field(
        default=0,
        description="Epoch millis the reminder was last sent, 0 = never",
    )
    attended: list[str] = Field(default_factory=list)
    roll_call: list[RollCallEntry] = Field(default_factory=list)
    agenda: list[AgendaItem] = Field(default_factory=list)
    time_slots: list[ProposedTime] = Field(default_factory=list)
    future_slots: list[ProposedTime] = Field(default_factory=list)
    previous_meeting: str | None = Field(
        default=None,
        description="Prior meeting in the series, for minutes continuity",
    )
    minutes_id: str | None = Field(default=None, description="Linked minutes document")
    is_backlog: bool = Field(
        default=False,
        description="Special container meeting that only holds backlog items",
    )

    @model_validator(mode="after")
    def check_single_running_timer(self) -> "Meeting":
        """Reject a meeting whose agenda has more than one timer running."""
        running = [item.id for item in self.agenda if item.timer_running]
        if len(running) > 1:
            msg = (
                f"Meeting {self.id} has {len(running)} agenda timers running "
                f"({', '.join(running)}); at most one may run"
            )
            raise ValueError(msg)
        return self

    @property
    def is_scheduled(self) -> bool:
        """Check if the meeting has a start time."""
        return self.start_time > 0

    @property
    def end_time(self) -> int:
        """Start time plus duration, in epoch millis."""
        return self.start_time + self.duration * MILLIS_PER_MINUTE

    def slots(self, slot_list: SlotList) -> list[ProposedTime]:
        """Return the live list of proposed times for a collection."""
        return getattr(self, slot_list.value)

    def set_state(self, state: MeetingState | int) -> None:
        """Move the meeting to a new lifecycle state."""
        new_state = MeetingState(state)
        if new_state != self.state:
            logger.debug(
                "meeting state changed",
                meeting_id=self.id,
                old=self.state.name,
                new=new_state.name,
            )
        self.state = new_state

    def set_start_time(self, new_time: int) -> bool:
        """Set the start time, invalidating any reminder already sent.

        The reminder marker is cleared on every change, including a move
        to an earlier time, so the reminder fires again for the new
        schedule.

        Returns:
            True if the start time actually changed
        """
        if new_time == self.start_time:
            return False
        self.start_time = new_time
        self.reminder_sent = 0
        return True

    def mark_reminder_sent(self, now: int) -> None:
        """Record that the reminder went out at now.

        Raises:
            ContractViolationError: If the meeting is not in planning
        """
        if self.state != MeetingState.PLANNING:
            msg = (
                f"Reminder for meeting {self.id} marked sent while in "
                f"state {self.state.name}"
            )
            raise ContractViolationError(msg)
        self.reminder_sent = now

    def clear_reminder_sent(self) -> None:
        """Forget the last send so the reminder is eligible again."""
        self.reminder_sent = 0

    def add_attendee_if_needed(self, user: UserRef) -> bool:
        """Add the user to the attendee list while the meeting runs.

        Nothing happens unless the meeting is running, or when any existing
        attendee entry matches one of the user's ids.

        Returns:
            True if the attendee list changed
        """
        if self.state != MeetingState.RUNNING:
            return False
        if any(user.has_any_id(attendee) for attendee in self.attended):
            return False
        self.attended.append(user.universal_id)
        return True

    def add_unique_attendee(self, user_id: str) -> None:
        """Append an attendee id unless already listed, in any state."""
        if user_id not in self.attended:
            self.attended.append(user_id)

    def remove_attendee(self, user_id: str) -> None:
        """Remove every occurrence of an attendee id."""
        self.attended = [a for a in self.attended if a != user_id]

    def upsert_roll_call(self, entry: RollCallEntry) -> None:
        """Insert or replace the roll call entry for entry.uid."""
        for existing in self.roll_call:
            if existing.uid == entry.uid:
                existing.attend = entry.attend
                existing.situation = entry.situation
                return
        self.roll_call.append(entry)
