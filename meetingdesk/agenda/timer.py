"""Discussion timers for agenda items.

Only one agenda item per meeting may have its timer running. Starting a
timer on any item stops the others and puts the meeting into the
running state.
"""

import structlog

from meetingdesk.agenda.ordering import find_agenda_item
from meetingdesk.models.agenda_item import AgendaItem
from meetingdesk.models.base import now_ms
from meetingdesk.models.meeting import Meeting, MeetingState

logger = structlog.get_logger()


def start_timer(meeting: Meeting, item_id: str, now: int | None = None) -> AgendaItem:
    """Start the timer of one item and stop every other item's timer.

    The item is looked up before anything changes, so an unknown id
    leaves the meeting untouched.

    Args:
        meeting: Meeting owning the item
        item_id: Agenda item to start
        now: Epoch millis, defaults to the current time

    Returns:
        The item whose timer is now running

    Raises:
        NotFoundError: If no agenda item has item_id
    """
    target = find_agenda_item(meeting, item_id)
    if now is None:
        now = now_ms()

    if meeting.state != MeetingState.RUNNING:
        meeting.set_state(MeetingState.RUNNING)

    for item in meeting.agenda:
        if item is not target:
            item.stop_timer(now)
    target.start_timer(now)

    logger.info("agenda timer started", meeting_id=meeting.id, item_id=item_id)
    return target


def stop_timer(meeting: Meeting, now: int | None = None) -> AgendaItem | None:
    """Stop whichever item's timer is running.

    Returns:
        The item that was stopped, or None if nothing was running
    """
    if now is None:
        now = now_ms()
    stopped = None
    for item in meeting.agenda:
        if item.timer_running:
            item.stop_timer(now)
            stopped = item
    if stopped is not None:
        logger.info("agenda timer stopped", meeting_id=meeting.id, item_id=stopped.id)
    return stopped


def running_item(meeting: Meeting) -> AgendaItem | None:
    """The item currently being timed, if any."""
    for item in meeting.agenda:
        if item.timer_running:
            return item
    return None
