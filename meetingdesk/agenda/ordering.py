"""Stable ordering and renumbering of a meeting's agenda.

Accepted items come first, then proposed ones; within each group items
keep their relative position. Renumbering turns that order into dense
positions 1..N and user-visible numbers that skip spacer items.
"""

from typing import Any

import structlog

from meetingdesk.exceptions import NotFoundError
from meetingdesk.models.agenda_item import NEW_ITEM_POSITION, SPACER_NUMBER, AgendaItem
from meetingdesk.models.meeting import Meeting

logger = structlog.get_logger()


def agenda_sort_key(item: AgendaItem) -> tuple[bool, int]:
    """Sort key placing accepted items before proposed ones, then by position.

    Items that tie on both parts keep their incoming order, since
    sorted() is stable.
    """
    return (item.proposed, item.position)


def sorted_agenda(meeting: Meeting) -> list[AgendaItem]:
    """Return the agenda in display order without changing anything."""
    return sorted(meeting.agenda, key=agenda_sort_key)


def renumber_items(meeting: Meeting) -> None:
    """Give every agenda item a dense position and a sequential number.

    Must run after each structural change to the agenda: insert, remove,
    reorder, or flipping the proposed flag. Running it twice in a row
    changes nothing the second time.
    """
    ordered = sorted_agenda(meeting)
    number = 0
    for position, item in enumerate(ordered, start=1):
        item.position = position
        if item.is_spacer:
            item.number = SPACER_NUMBER
        else:
            number += 1
            item.number = number
    meeting.agenda = ordered
    logger.debug("agenda renumbered", meeting_id=meeting.id, items=len(ordered))


def open_position(meeting: Meeting, position: int) -> None:
    """Shift every item at or after position down by one.

    To insert at position 5: call open_position(meeting, 5), set the new
    item's position to 5, then renumber_items to close remaining gaps.
    """
    for item in meeting.agenda:
        if item.position >= position:
            item.position += 1


def create_agenda_item(meeting: Meeting, **fields: Any) -> AgendaItem:
    """Create an agenda item placed after everything else.

    The item keeps the out-of-range position until the next renumber.
    """
    fields.setdefault("position", NEW_ITEM_POSITION)
    item = AgendaItem(**fields)
    meeting.agenda.append(item)
    return item


def find_agenda_item_or_none(meeting: Meeting, item_id: str) -> AgendaItem | None:
    for item in meeting.agenda:
        if item.id == item_id:
            return item
    return None


def find_agenda_item(meeting: Meeting, item_id: str) -> AgendaItem:
    """Find an agenda item by id.

    Raises:
        NotFoundError: If the meeting has no such item
    """
    item = find_agenda_item_or_none(meeting, item_id)
    if item is None:
        msg = f"Agenda item {item_id} does not exist in meeting {meeting.id}"
        raise NotFoundError(msg)
    return item


def remove_agenda_item(meeting: Meeting, item_id: str) -> bool:
    """Remove an agenda item and renumber what is left.

    Returns:
        True if an item was removed
    """
    before = len(meeting.agenda)
    meeting.agenda = [item for item in meeting.agenda if item.id != item_id]
    removed = len(meeting.agenda) != before
    if removed:
        renumber_items(meeting)
    return removed


def move_agenda_item(meeting: Meeting, item_id: str, position: int) -> AgendaItem:
    """Move an existing item to position, shifting the rest down."""
    item = find_agenda_item(meeting, item_id)
    open_position(meeting, position)
    item.position = position
    renumber_items(meeting)
    return item


def document_linked_items(meeting: Meeting, doc_id: str) -> list[AgendaItem]:
    """All agenda items, in display order, that link the given document."""
    return [item for item in sorted_agenda(meeting) if item.links_document(doc_id)]
