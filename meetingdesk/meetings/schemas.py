"""Read snapshots and sparse update payloads for meetings.

Snapshots come in three sizes:
- MeetingSummary: scalar fields, for notification lists
- MeetingListing: adds description and attendance, for meeting lists
- MeetingDetail: adds the sorted agenda, proposed times and participants

Update payloads are sparse: only fields present in the payload are
applied, so a field explicitly set to its default still counts.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from meetingdesk.models.agenda_item import AgendaItem
from meetingdesk.models.meeting import Meeting, MeetingState, MeetingType, RollCallEntry
from meetingdesk.models.proposed_time import ProposedTime

NEW_ITEM_ID = "~new~"


class MeetingSummary(BaseModel):
    """Smallest meeting snapshot."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    target_role: str
    state: MeetingState
    start_time: int
    duration: int
    meeting_type: MeetingType
    reminder_advance: int
    reminder_sent: int
    owner: str
    previous_meeting: str | None
    minutes_id: str | None

    @classmethod
    def from_meeting(cls, meeting: Meeting) -> "MeetingSummary":
        return cls.model_validate(meeting)


class MeetingListing(MeetingSummary):
    """Meeting snapshot suitable for lists of meetings."""

    description: str
    roll_call: list[RollCallEntry]
    attended: list[str]


class MeetingDetail(MeetingListing):
    """Complete meeting snapshot including children."""

    agenda: list[AgendaItem] = Field(description="Agenda in display order")
    time_slots: list[ProposedTime]
    future_slots: list[ProposedTime]
    participants: list[str]
    previous_minutes: str | None = Field(
        default=None,
        description="Minutes id of the previous meeting, when it exists",
    )


class AgendaItemUpdate(BaseModel):
    """Sparse changes to one agenda item; id '~new~' creates an item."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Existing item id or '~new~'")
    subject: str | None = None
    description: str | None = None
    position: int | None = None
    proposed: bool | None = None
    is_spacer: bool | None = None
    duration: int | None = Field(default=None, ge=0)
    presenters: list[str] | None = None
    doc_list: list[str] | None = None
    action_items: list[str] | None = None
    topic_link: str | None = None
    notes: str | None = None
    minutes: str | None = None
    selected: bool = Field(
        default=False,
        description="Whether to copy this item when cloning an agenda",
    )

    @property
    def is_new(self) -> bool:
        return self.id == NEW_ITEM_ID

    def changes(self) -> dict[str, Any]:
        """Fields present in the payload, excluding id and selection."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name not in {"id", "selected"}
        }


class MeetingUpdate(BaseModel):
    """Sparse batch update of a meeting.

    Fields accept either their Python name or the camelCase key used by
    the JSON clients, e.g. start_time or startTime.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    state: MeetingState | None = None
    reminder_sent: int | None = Field(
        default=None,
        alias="reminderSent",
        description="Usually 0, to force the reminder to be sent again",
    )
    start_time: int | None = Field(default=None, alias="startTime")
    target_role: str | None = Field(default=None, alias="targetRole")
    duration: int | None = Field(default=None, ge=0)
    meeting_type: MeetingType | None = Field(default=None, alias="meetingType")
    reminder_advance: int | None = Field(default=None, alias="reminderTime")
    description: str | None = Field(default=None, alias="meetingInfo")
    previous_meeting: str | None = Field(default=None, alias="previousMeeting")
    owner: str | None = None
    roll_call: list[RollCallEntry] | None = Field(default=None, alias="rollCall")
    attended: list[str] | None = None
    attended_add: str | None = None
    attended_remove: str | None = None
    participants: list[str] | None = None
    time_slots: list[ProposedTime] | None = Field(default=None, alias="timeSlots")
    future_slots: list[ProposedTime] | None = Field(default=None, alias="futureSlots")
    start_timer: str | None = Field(
        default=None,
        alias="startTimer",
        description="Agenda item id to time",
    )
    stop_timer: bool | None = Field(default=None, alias="stopTimer")
    agenda: list[AgendaItemUpdate] | None = None

    def has(self, name: str) -> bool:
        """Check whether the payload carried a field."""
        return name in self.model_fields_set


class MeetingNoteEntry(BaseModel):
    """Per-item minutes and timer snapshot for note taking."""

    id: str
    title: str
    position: int
    duration: int
    timer_running: bool
    timer_start: int
    timer_elapsed: int
    minutes: str


class MinutesChange(BaseModel):
    """Edit of one item's minutes made against a known earlier copy."""

    id: str
    old: str = ""
    new: str
