"""Command schemas for the proposed-time negotiation protocol.

Each command acts on one of a meeting's two slot collections, chosen by
the isCurrent flag. Payloads use the wire names (isCurrent, newTime);
Python code may use the field names.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from meetingdesk.models.proposed_time import SlotList


class SlotCommand(BaseModel):
    """Fields shared by every negotiation command."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_current: bool = Field(
        alias="isCurrent",
        description="True for the current slots, False for future slots",
    )

    @property
    def slot_list(self) -> SlotList:
        """Collection this command applies to."""
        return SlotList.from_is_current(self.is_current)


class SetValue(SlotCommand):
    """Record one user's vote on an existing slot."""

    action: Literal["SetValue"] = "SetValue"
    time: int = Field(description="Timestamp of the slot to vote on")
    user: str = Field(min_length=1)
    value: int = Field(description="Vote value, meaning defined by the caller")


class AddTime(SlotCommand):
    """Add a slot; duplicates are not checked."""

    action: Literal["AddTime"] = "AddTime"
    time: int


class RemoveTime(SlotCommand):
    """Remove every slot with this timestamp."""

    action: Literal["RemoveTime"] = "RemoveTime"
    time: int


class ChangeTime(SlotCommand):
    """Add a slot at new_time. The slot at time is left in place."""

    action: Literal["ChangeTime"] = "ChangeTime"
    time: int | None = Field(default=None, description="Slot being changed from")
    new_time: int = Field(alias="newTime")


class RemoveUser(SlotCommand):
    """Clear one user's votes from every slot."""

    action: Literal["RemoveUser"] = "RemoveUser"
    user: str = Field(min_length=1)


ProposedTimeCommand = Annotated[
    SetValue | AddTime | RemoveTime | ChangeTime | RemoveUser,
    Field(discriminator="action"),
]

COMMAND_TYPES: dict[str, type[SlotCommand]] = {
    "SetValue": SetValue,
    "AddTime": AddTime,
    "RemoveTime": RemoveTime,
    "ChangeTime": ChangeTime,
    "RemoveUser": RemoveUser,
}


class SlotTally(BaseModel):
    """Advisory vote summary for one slot."""

    proposed_time: int
    total: int = Field(description="Sum of all vote values")
    voters: int = Field(description="Number of users who voted")
