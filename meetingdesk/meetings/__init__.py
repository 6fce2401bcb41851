"""Meeting lifecycle commands, snapshots and batch updates."""

from meetingdesk.meetings.lifecycle import (
    describe,
    format_time,
    name_and_date,
    resolve_timezone,
    sort_chrono,
    verify_target_role,
)
from meetingdesk.meetings.schemas import (
    NEW_ITEM_ID,
    AgendaItemUpdate,
    MeetingDetail,
    MeetingListing,
    MeetingNoteEntry,
    MeetingSummary,
    MeetingUpdate,
    MinutesChange,
)
from meetingdesk.meetings.service import (
    MeetingService,
    apply_meeting_update,
    clone_agenda,
    get_meeting_notes,
    update_agenda,
    update_meeting_notes,
)

__all__ = [
    # Lifecycle
    "verify_target_role",
    "sort_chrono",
    "describe",
    "name_and_date",
    "format_time",
    "resolve_timezone",
    # Schemas
    "NEW_ITEM_ID",
    "MeetingSummary",
    "MeetingListing",
    "MeetingDetail",
    "MeetingUpdate",
    "AgendaItemUpdate",
    "MeetingNoteEntry",
    "MinutesChange",
    # Service
    "MeetingService",
    "apply_meeting_update",
    "update_agenda",
    "clone_agenda",
    "get_meeting_notes",
    "update_meeting_notes",
]
