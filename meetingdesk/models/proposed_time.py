"""ProposedTime model for candidate meeting times and their votes."""

from enum import Enum

from pydantic import BaseModel, Field


class SlotList(str, Enum):
    """Which of a meeting's two candidate-time collections to act on.

    The value is the name of the Meeting field holding the collection.
    """

    CURRENT = "time_slots"
    FUTURE = "future_slots"

    @classmethod
    def from_is_current(cls, is_current: bool) -> "SlotList":
        """Map the wire-level isCurrent flag to a collection."""
        return cls.CURRENT if is_current else cls.FUTURE


class ProposedTime(BaseModel):
    """A candidate meeting time carrying per-participant votes.

    Vote values are small caller-defined integers; no meaning is attached
    to their magnitude here.
    """

    proposed_time: int = Field(description="Candidate start time in epoch millis")
    people: dict[str, int] = Field(
        default_factory=dict,
        description="Participant id -> vote value",
    )

    def set_person_value(self, user: str, value: int) -> None:
        """Record a user's vote, replacing any earlier vote."""
        self.people[user] = value

    def clear_person_value(self, user: str) -> None:
        """Remove a user's vote if present."""
        self.people.pop(user, None)
