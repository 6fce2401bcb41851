"""Exports of a single meeting: iCalendar event and Markdown documents."""

from meetingdesk.export.ics import build_ics, escape_text, ics_time, param_value
from meetingdesk.export.renderer import MeetingRenderer

__all__ = ["MeetingRenderer", "build_ics", "escape_text", "ics_time", "param_value"]
