"""Schemas for reminder delivery results and the audit trail."""

from datetime import datetime

from pydantic import BaseModel, Field


class ReminderRecord(BaseModel):
    """Audit record of one reminder delivery attempt."""

    meeting_id: str = Field(description="Meeting the reminder was for")
    target_time: int = Field(description="Epoch millis the reminder was due")
    attempted_at: datetime = Field(description="When the attempt was made")
    recipient_count: int = Field(default=0)
    success: bool = Field(description="Whether the dispatcher accepted the mail")
    error: str | None = Field(default=None, description="Error message if failed")
