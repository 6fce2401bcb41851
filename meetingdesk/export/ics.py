"""Single-event iCalendar export of a meeting."""

from meetingdesk.config import settings
from meetingdesk.exceptions import InvalidConfigurationError
from meetingdesk.models.base import ms_to_datetime, now_ms
from meetingdesk.models.meeting import Meeting
from meetingdesk.models.user import UserProfile

ICS_TIME_FORMAT = "%Y%m%dT%H%M%SZ"


def ics_time(value: int) -> str:
    """Format epoch millis as a UTC iCalendar timestamp."""
    return ms_to_datetime(value).strftime(ICS_TIME_FORMAT)


def escape_text(value: str) -> str:
    """Escape text for an iCalendar property value.

    Newlines become a literal backslash-n and other control characters
    are dropped.
    """
    out = []
    for ch in value:
        if ch == "\n":
            out.append("\\n")
        elif ch < " ":
            continue
        else:
            out.append(ch)
    return "".join(out)


def param_value(value: str) -> str:
    """Format text as an iCalendar parameter value.

    Double quotes cannot appear in a parameter and are dropped; values
    containing a colon, semicolon or comma are quoted.
    """
    text = escape_text(value).replace('"', "")
    if any(ch in text for ch in ":;,"):
        return f'"{text}"'
    return text


def build_ics(
    meeting: Meeting,
    organizer: UserProfile | None = None,
    uid_prefix: str = "",
    now: int | None = None,
) -> str:
    """Render the meeting as a VCALENDAR with one VEVENT.

    Args:
        meeting: Meeting to export
        organizer: Profile of the owner; the raw owner id is used if None
        uid_prefix: Prefix making the UID unique across sites
        now: Epoch millis for DTSTAMP, defaults to the current time

    Returns:
        iCalendar text with CRLF line endings

    Raises:
        InvalidConfigurationError: If the meeting has no start time
    """
    if not meeting.is_scheduled:
        msg = f"Meeting {meeting.id} has no start time and cannot be exported"
        raise InvalidConfigurationError(msg)
    if now is None:
        now = now_ms()
    name = organizer.name if organizer else meeting.owner
    email = organizer.email if organizer and organizer.email else meeting.owner

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{settings.ics_product_id}",
        "BEGIN:VEVENT",
        f"UID:{uid_prefix}{meeting.id}",
        f"DTSTAMP:{ics_time(now)}",
        f"ORGANIZER;CN={param_value(name)}:mailto:{email}",
        f"DTSTART:{ics_time(meeting.start_time)}",
        f"DTEND:{ics_time(meeting.end_time)}",
        f"SUMMARY:{escape_text(meeting.name)}",
        f"DESCRIPTION:{escape_text(meeting.description)}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"
