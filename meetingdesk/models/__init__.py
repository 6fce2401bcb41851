"""Canonical data models for meetingdesk.

This module exports all domain models used throughout the application:
- BaseEntity: Base class with id
- Meeting: Meeting aggregate with lifecycle state and schedule
- AgendaItem: Ordered agenda entries with timers
- ProposedTime: Candidate meeting times with per-user votes
- UserRef / UserProfile: Directory-supplied user identities
"""

from meetingdesk.models.agenda_item import NEW_ITEM_POSITION, SPACER_NUMBER, AgendaItem
from meetingdesk.models.base import BaseEntity, ms_to_datetime, now_ms
from meetingdesk.models.meeting import (
    Meeting,
    MeetingState,
    MeetingType,
    RollCallEntry,
)
from meetingdesk.models.proposed_time import ProposedTime, SlotList
from meetingdesk.models.user import UserProfile, UserRef

__all__ = [
    # Base
    "BaseEntity",
    "now_ms",
    "ms_to_datetime",
    # Meeting
    "Meeting",
    "MeetingState",
    "MeetingType",
    "RollCallEntry",
    # Agenda
    "AgendaItem",
    "NEW_ITEM_POSITION",
    "SPACER_NUMBER",
    # Negotiation
    "ProposedTime",
    "SlotList",
    # Users
    "UserRef",
    "UserProfile",
]
