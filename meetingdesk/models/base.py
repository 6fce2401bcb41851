"""Base entity class and time helpers for all domain models."""

from datetime import UTC, datetime
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# Agenda positions, meeting times and timers are all kept in epoch millis.
MILLIS_PER_MINUTE = 60_000

# Identifiers and short labels lose surrounding whitespace; free text keeps it.
StrippedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(datetime.now(UTC).timestamp() * 1000)


def ms_to_datetime(value: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=UTC)


def new_id() -> str:
    """Generate a short unique identifier."""
    return uuid4().hex[:12]


class BaseEntity(BaseModel):
    """Base class for all domain entities.

    Provides:
    - Unique string ID
    - Standard serialization config
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_default=True,
        from_attributes=True,
    )

    id: StrippedStr = Field(default_factory=new_id, description="Unique entity identifier")
