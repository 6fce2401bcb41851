"""Lifecycle helpers that need collaborators or span several meetings."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from meetingdesk.adapters.base import RoleDirectory
from meetingdesk.config import settings
from meetingdesk.exceptions import InvalidConfigurationError
from meetingdesk.models.base import ms_to_datetime, now_ms
from meetingdesk.models.meeting import Meeting

logger = structlog.get_logger()

TO_BE_DETERMINED = "(to be determined)"


def verify_target_role(meeting: Meeting, directory: RoleDirectory) -> str:
    """Make sure the meeting targets a role that exists.

    Falls back to the default role, then to the first role in the
    directory, updating the meeting when it does.

    Returns:
        The role name now stored on the meeting

    Raises:
        InvalidConfigurationError: If the directory has no roles at all
    """
    if meeting.target_role and directory.get_role_members(meeting.target_role) is not None:
        return meeting.target_role

    fallback = settings.default_target_role
    if directory.get_role_members(fallback) is None:
        roles = directory.list_roles()
        if not roles:
            msg = (
                f"No roles exist to invite to meeting {meeting.id}; "
                "at least one is required"
            )
            raise InvalidConfigurationError(msg)
        fallback = roles[0]

    logger.info(
        "target role replaced",
        meeting_id=meeting.id,
        old=meeting.target_role,
        new=fallback,
    )
    meeting.target_role = fallback
    return fallback


def sort_chrono(meetings: list[Meeting], now: int | None = None) -> list[Meeting]:
    """Order meetings newest first.

    Unscheduled meetings sort as though they start now. Backlog containers
    are not real meetings and are left out.
    """
    if now is None:
        now = now_ms()
    return sorted(
        (m for m in meetings if not m.is_backlog),
        key=lambda m: m.start_time if m.start_time > 0 else now,
        reverse=True,
    )


def resolve_timezone(name: str | None) -> ZoneInfo:
    """ZoneInfo for name, or UTC when missing or unknown."""
    if not name:
        return ZoneInfo("UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown timezone, using UTC", timezone=name)
        return ZoneInfo("UTC")


def format_time(
    value: int,
    tz: ZoneInfo,
    fmt: str = "%Y-%m-%d %H:%M",
    unset: str = TO_BE_DETERMINED,
) -> str:
    """Format epoch millis in a timezone, or unset when not positive."""
    if value <= 0:
        return unset
    return ms_to_datetime(value).astimezone(tz).strftime(fmt)


def describe(meeting: Meeting, tz: ZoneInfo) -> str:
    """One-line description used in logs and notification lists."""
    return f"(Meeting) {meeting.name} @ {format_time(meeting.start_time, tz)}"


def name_and_date(meeting: Meeting, tz: ZoneInfo) -> str:
    """Meeting name with its start, e.g. 'Review @ 14:00 UTC on 05-Mar-2026'."""
    when = format_time(meeting.start_time, tz, "%H:%M %Z on %d-%b-%Y")
    return f"{meeting.name} @ {when}"
