# This project was developed with assistance from AI tools.
"""Guardian-facing ward summaries."""

import enum
from datetime import date

from pydantic import BaseModel


class WardSource(str, enum.Enum):
    LINKED_ACCOUNT = "LINKED_ACCOUNT"
    APPLICATION = "APPLICATION"
    RESIDENT = "RESIDENT"


class WardSummary(BaseModel):
    """What a guardian may see about one ward. No credentials or staff remarks."""

    id: str
    user_id: str | None = None
    name: str
    vertical: str | None = None
    room: str | None = None
    status: str
    source: WardSource
    tracking_number: str | None = None
    joining_date: date | None = None


class WardListResponse(BaseModel):
    data: list[WardSummary]
    count: int
