"""Apply negotiation commands to a meeting's proposed times.

Every command is applied as a whole or not at all. Callers must hold the
meeting's lock while applying a command.
"""

from typing import Any

import structlog

from meetingdesk.exceptions import NotFoundError, UnsupportedOperationError
from meetingdesk.models.meeting import Meeting
from meetingdesk.models.proposed_time import ProposedTime, SlotList
from meetingdesk.negotiation.schemas import (
    COMMAND_TYPES,
    AddTime,
    ChangeTime,
    ProposedTimeCommand,
    RemoveTime,
    RemoveUser,
    SetValue,
    SlotCommand,
    SlotTally,
)

logger = structlog.get_logger()


def parse_command(payload: dict[str, Any]) -> SlotCommand:
    """Validate a raw command payload.

    Raises:
        UnsupportedOperationError: If the action name is unknown
        pydantic.ValidationError: If a known action has bad fields
    """
    action = payload.get("action")
    command_type = COMMAND_TYPES.get(action) if isinstance(action, str) else None
    if command_type is None:
        msg = f"Proposed time negotiation does not understand the command: {action}"
        raise UnsupportedOperationError(msg)
    return command_type.model_validate(payload)


def find_proposed_time(
    meeting: Meeting,
    slot_list: SlotList,
    time_value: int,
) -> ProposedTime | None:
    for slot in meeting.slots(slot_list):
        if slot.proposed_time == time_value:
            return slot
    return None


def find_or_create_proposed_time(
    meeting: Meeting,
    slot_list: SlotList,
    time_value: int,
) -> ProposedTime:
    """Return the slot with this time, creating it if absent."""
    slot = find_proposed_time(meeting, slot_list, time_value)
    if slot is None:
        slot = _add_slot(meeting, slot_list, time_value)
    return slot


def act_on_proposed_time(
    meeting: Meeting,
    command: ProposedTimeCommand | dict[str, Any],
) -> None:
    """Apply one negotiation command to the meeting.

    Args:
        meeting: Meeting to change
        command: A command model or its raw wire payload

    Raises:
        UnsupportedOperationError: For unknown commands
        NotFoundError: When SetValue names a slot that does not exist
    """
    if isinstance(command, dict):
        command = parse_command(command)

    slot_list = command.slot_list

    if isinstance(command, SetValue):
        slot = find_proposed_time(meeting, slot_list, command.time)
        if slot is None:
            msg = (
                f"Meeting {meeting.id} does not have a {slot_list.value} "
                f"time of {command.time}"
            )
            raise NotFoundError(msg)
        slot.set_person_value(command.user, command.value)
    elif isinstance(command, AddTime):
        _add_slot(meeting, slot_list, command.time)
    elif isinstance(command, RemoveTime):
        remaining = [
            slot
            for slot in meeting.slots(slot_list)
            if slot.proposed_time != command.time
        ]
        setattr(meeting, slot_list.value, remaining)
    elif isinstance(command, ChangeTime):
        # Additive: the slot at command.time stays.
        _add_slot(meeting, slot_list, command.new_time)
    elif isinstance(command, RemoveUser):
        for slot in meeting.slots(slot_list):
            slot.clear_person_value(command.user)
    else:
        msg = f"Proposed time negotiation does not understand {type(command).__name__}"
        raise UnsupportedOperationError(msg)

    logger.debug(
        "proposed time command applied",
        meeting_id=meeting.id,
        action=command.action,
        slots=slot_list.value,
    )


def tally_votes(meeting: Meeting, slot_list: SlotList) -> list[SlotTally]:
    """Summarize votes per slot, in slot order.

    Purely advisory; the highest total does not select a time.
    """
    return [
        SlotTally(
            proposed_time=slot.proposed_time,
            total=sum(slot.people.values()),
            voters=len(slot.people),
        )
        for slot in meeting.slots(slot_list)
    ]


def _add_slot(meeting: Meeting, slot_list: SlotList, time_value: int) -> ProposedTime:
    slot = ProposedTime(proposed_time=time_value)
    meeting.slots(slot_list).append(slot)
    return slot
