# This project was developed with assistance from AI tools.
"""Schemas for application status display."""

from pydantic import BaseModel


class StatusInfo(BaseModel):
    """Human-readable metadata for an effective status."""

    label: str
    description: str
    next_step: str
