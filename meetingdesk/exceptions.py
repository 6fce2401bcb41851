"""Exception hierarchy for meeting operations."""


class MeetingDeskError(Exception):
    """Base class for all meetingdesk errors."""


class NotFoundError(MeetingDeskError):
    """A referenced agenda item, time slot, or meeting does not exist."""


class UnsupportedOperationError(MeetingDeskError):
    """A time negotiation command name is not recognized."""


class InvalidConfigurationError(MeetingDeskError):
    """A meeting cannot be acted on because its setup is incomplete.

    Raised, for example, when no role exists to invite or the meeting has
    no owner to send a reminder from. Fatal for that meeting's notification
    path only.
    """


class ContractViolationError(MeetingDeskError):
    """An internal precondition was broken by the caller.

    This signals a bug in the calling code, such as sending a reminder
    outside of the planning state. It must never be swallowed.
    """
