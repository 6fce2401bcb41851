"""Proposed-time negotiation among meeting participants."""

from meetingdesk.negotiation.schemas import (
    AddTime,
    ChangeTime,
    ProposedTimeCommand,
    RemoveTime,
    RemoveUser,
    SetValue,
    SlotTally,
)
from meetingdesk.negotiation.service import (
    act_on_proposed_time,
    find_or_create_proposed_time,
    find_proposed_time,
    parse_command,
    tally_votes,
)

__all__ = [
    # Commands
    "ProposedTimeCommand",
    "SetValue",
    "AddTime",
    "RemoveTime",
    "ChangeTime",
    "RemoveUser",
    "SlotTally",
    # Operations
    "act_on_proposed_time",
    "parse_command",
    "find_proposed_time",
    "find_or_create_proposed_time",
    "tally_votes",
]
