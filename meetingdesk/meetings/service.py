"""MeetingService applies commands to stored meetings.

Every mutating call loads the meeting graph, changes it and saves it back
while holding that meeting's lock. A command that raises is never saved,
so callers observe it as not applied at all.
"""

from typing import Any

import structlog

from meetingdesk.adapters.base import MeetingRepository
from meetingdesk.agenda.ordering import (
    create_agenda_item,
    find_agenda_item,
    renumber_items,
    sorted_agenda,
)
from meetingdesk.agenda.timer import start_timer, stop_timer
from meetingdesk.exceptions import NotFoundError
from meetingdesk.locks import MeetingLocks
from meetingdesk.meetings.lifecycle import sort_chrono
from meetingdesk.meetings.schemas import (
    AgendaItemUpdate,
    MeetingDetail,
    MeetingListing,
    MeetingNoteEntry,
    MeetingUpdate,
    MinutesChange,
)
from meetingdesk.models.agenda_item import AgendaItem
from meetingdesk.models.base import now_ms
from meetingdesk.models.meeting import Meeting
from meetingdesk.models.user import UserRef
from meetingdesk.negotiation.schemas import ProposedTimeCommand
from meetingdesk.negotiation.service import act_on_proposed_time

logger = structlog.get_logger()

# Fields whose change counts as editing the meeting's description.
_DESCRIPTIVE_FIELDS = ("name", "duration", "meeting_type", "reminder_advance", "description")


def apply_meeting_update(
    meeting: Meeting,
    update: MeetingUpdate,
    actor: str,
    now: int | None = None,
) -> None:
    """Apply the fields present in update to meeting.

    Args:
        meeting: Meeting to change in place
        update: Sparse update payload
        actor: User making the change; becomes owner if none is set
        now: Epoch millis for timer changes

    Raises:
        NotFoundError: If an agenda update or start_timer names an
            unknown agenda item
    """
    edited_info = False

    if update.has("name") and update.name is not None:
        meeting.name = update.name
    if update.has("state") and update.state is not None:
        meeting.set_state(update.state)
    if update.has("reminder_sent") and update.reminder_sent is not None:
        meeting.reminder_sent = update.reminder_sent
    if update.has("start_time") and update.start_time is not None:
        if meeting.set_start_time(update.start_time):
            edited_info = True
    if update.has("target_role") and update.target_role is not None:
        meeting.target_role = update.target_role
    for field in ("duration", "meeting_type", "reminder_advance", "description"):
        value = getattr(update, field)
        if update.has(field) and value is not None:
            setattr(meeting, field, value)
    if update.has("previous_meeting"):
        meeting.previous_meeting = update.previous_meeting or None
    if update.has("owner") and update.owner is not None:
        meeting.owner = update.owner

    edited_info = edited_info or any(
        update.has(field) and getattr(update, field) is not None
        for field in _DESCRIPTIVE_FIELDS
    )

    for entry in update.roll_call or []:
        meeting.upsert_roll_call(entry)

    if update.attended is not None:
        meeting.attended = list(update.attended)
    if update.attended_add:
        meeting.add_unique_attendee(update.attended_add)
    if update.attended_remove:
        meeting.remove_attendee(update.attended_remove)
    if update.participants is not None:
        meeting.participants = list(update.participants)

    if update.time_slots is not None:
        meeting.time_slots = [slot.model_copy(deep=True) for slot in update.time_slots]
    if update.future_slots is not None:
        meeting.future_slots = [slot.model_copy(deep=True) for slot in update.future_slots]

    if edited_info and not meeting.owner:
        meeting.owner = actor

    if update.agenda is not None:
        update_agenda(meeting, update.agenda)

    if update.start_timer:
        start_timer(meeting, update.start_timer, now)
    if update.stop_timer:
        stop_timer(meeting, now)


def update_agenda(meeting: Meeting, items: list[AgendaItemUpdate]) -> None:
    """Upsert agenda items, then renumber.

    Items with id '~new~' are created at the end; any other id must
    exist. Items not mentioned are left alone.
    """
    for change in items:
        if change.is_new:
            item = create_agenda_item(meeting)
        else:
            item = find_agenda_item(meeting, change.id)
        _apply_item_changes(item, change)
    renumber_items(meeting)


def clone_agenda(meeting: Meeting, items: list[AgendaItemUpdate]) -> list[AgendaItem]:
    """Create new items copied from the selected entries of a template agenda."""
    created = []
    for template in items:
        if not template.selected:
            continue
        item = create_agenda_item(meeting)
        _apply_item_changes(item, template)
        created.append(item)
    renumber_items(meeting)
    return created


def get_meeting_notes(meeting: Meeting) -> list[MeetingNoteEntry]:
    """Per-item minutes and timer state in display order."""
    return [
        MeetingNoteEntry(
            id=item.id,
            title=item.subject,
            position=item.position,
            duration=item.duration,
            timer_running=item.timer_running,
            timer_start=item.timer_start,
            timer_elapsed=item.timer_elapsed,
            minutes=item.minutes,
        )
        for item in sorted_agenda(meeting)
    ]


def update_meeting_notes(meeting: Meeting, changes: list[MinutesChange]) -> None:
    """Merge minutes edits made by note takers working concurrently.

    An edit replaces the stored minutes when they still equal the copy the
    editor started from; otherwise the new text is appended so no one's
    notes are lost.

    Raises:
        NotFoundError: If a change names an unknown agenda item
    """
    items = [(find_agenda_item(meeting, change.id), change) for change in changes]
    for item, change in items:
        if item.minutes == change.old:
            item.minutes = change.new
        elif change.new and change.new != change.old and change.new not in item.minutes:
            item.minutes = f"{item.minutes}\n\n{change.new}" if item.minutes else change.new


class MeetingService:
    """Loads, mutates and saves meetings under their per-meeting lock."""

    def __init__(self, repository: MeetingRepository, locks: MeetingLocks | None = None):
        """Initialize with the meeting store.

        Args:
            repository: Persistence collaborator
            locks: Lock registry shared with the reminder poller
        """
        self._repository = repository
        self.locks = locks or MeetingLocks()

    async def create_meeting(self, owner: str, **fields: Any) -> Meeting:
        """Create and store a new draft meeting."""
        meeting = Meeting(owner=owner, **fields)
        renumber_items(meeting)
        await self._repository.save(meeting)
        logger.info("meeting created", meeting_id=meeting.id, owner=owner)
        return meeting

    async def load(self, meeting_id: str) -> Meeting:
        """Load a meeting.

        Raises:
            NotFoundError: If the meeting does not exist
        """
        meeting = await self._repository.get(meeting_id)
        if meeting is None:
            msg = f"Meeting {meeting_id} does not exist"
            raise NotFoundError(msg)
        return meeting

    async def get_detail(self, meeting_id: str) -> MeetingDetail:
        """Full snapshot with sorted agenda and previous minutes link."""
        meeting = await self.load(meeting_id)
        previous_minutes = None
        if meeting.previous_meeting:
            previous = await self._repository.get(meeting.previous_meeting)
            if previous is not None and previous.minutes_id:
                previous_minutes = previous.minutes_id
        data = meeting.model_dump()
        data["agenda"] = [item.model_dump() for item in sorted_agenda(meeting)]
        data["previous_minutes"] = previous_minutes
        return MeetingDetail.model_validate(data)

    async def list_meetings(self, now: int | None = None) -> list[MeetingListing]:
        """List every real meeting, newest first, without children."""
        meetings = await self._repository.list_meetings()
        return [MeetingListing.from_meeting(m) for m in sort_chrono(meetings, now)]

    async def apply_update(
        self,
        meeting_id: str,
        update: MeetingUpdate | dict[str, Any],
        actor: str,
        now: int | None = None,
    ) -> Meeting:
        """Apply a sparse batch update and save.

        Raises:
            NotFoundError: If the meeting, a referenced agenda item, or the
                linked previous meeting does not exist
        """
        if isinstance(update, dict):
            update = MeetingUpdate.model_validate(update)

        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            if update.has("previous_meeting") and update.previous_meeting:
                if await self._repository.get(update.previous_meeting) is None:
                    msg = f"Previous meeting {update.previous_meeting} does not exist"
                    raise NotFoundError(msg)
            apply_meeting_update(meeting, update, actor, now)
            await self._repository.save(meeting)

        logger.info(
            "meeting updated",
            meeting_id=meeting_id,
            actor=actor,
            fields=sorted(update.model_fields_set),
        )
        return meeting

    async def act_on_proposed_time(
        self,
        meeting_id: str,
        command: ProposedTimeCommand | dict[str, Any],
    ) -> Meeting:
        """Apply one negotiation command and save."""
        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            act_on_proposed_time(meeting, command)
            await self._repository.save(meeting)
        return meeting

    async def start_timer(
        self,
        meeting_id: str,
        item_id: str,
        now: int | None = None,
    ) -> Meeting:
        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            start_timer(meeting, item_id, now)
            await self._repository.save(meeting)
        return meeting

    async def stop_timer(self, meeting_id: str, now: int | None = None) -> Meeting:
        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            stop_timer(meeting, now)
            await self._repository.save(meeting)
        return meeting

    async def record_attendance(self, meeting_id: str, user: UserRef) -> bool:
        """Add the user to a running meeting's attendees.

        Returns:
            True if the attendee list changed and was saved
        """
        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            changed = meeting.add_attendee_if_needed(user)
            if changed:
                await self._repository.save(meeting)
        if changed:
            logger.info("attendee added", meeting_id=meeting_id, user=user.universal_id)
        return changed

    async def update_notes(self, meeting_id: str, changes: list[MinutesChange]) -> Meeting:
        async with self.locks.hold(meeting_id):
            meeting = await self.load(meeting_id)
            update_meeting_notes(meeting, changes)
            await self._repository.save(meeting)
        return meeting


def _apply_item_changes(item: AgendaItem, change: AgendaItemUpdate) -> None:
    for name, value in change.changes().items():
        if value is None and name != "topic_link":
            continue
        setattr(item, name, value)
