"""Agenda ordering and discussion timers.

Provides:
- renumber_items / open_position: stable position and number assignment
- start_timer / stop_timer: exclusive per-meeting item timers
"""

from meetingdesk.agenda.ordering import (
    agenda_sort_key,
    create_agenda_item,
    document_linked_items,
    find_agenda_item,
    find_agenda_item_or_none,
    move_agenda_item,
    open_position,
    remove_agenda_item,
    renumber_items,
    sorted_agenda,
)
from meetingdesk.agenda.timer import running_item, start_timer, stop_timer

__all__ = [
    # Ordering
    "agenda_sort_key",
    "sorted_agenda",
    "renumber_items",
    "open_position",
    "create_agenda_item",
    "find_agenda_item",
    "find_agenda_item_or_none",
    "remove_agenda_item",
    "move_agenda_item",
    "document_linked_items",
    # Timers
    "start_timer",
    "stop_timer",
    "running_item",
]
