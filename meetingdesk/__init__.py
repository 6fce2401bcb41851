"""meetingdesk: meeting lifecycle, agenda ordering, time negotiation and reminders."""

__version__ = "0.1.0"
