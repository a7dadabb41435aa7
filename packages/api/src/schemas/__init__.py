# This project was developed with assistance from AI tools.
"""Response components shared by every router: list paging and error bodies."""

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Offset window over a list (audit trails are returned oldest first)."""

    total: int
    offset: int
    limit: int
    has_more: bool


class ErrorResponse(BaseModel):
    """RFC 7807 problem details returned for every non-2xx response.

    ``detail`` carries the service message verbatim, e.g. the current status
    and the statuses an action requires, or the list of missing fields.
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str = ""
    request_id: str = Field(default="", description="Echo of X-Request-ID, or a generated id.")
    instance: str = Field(default="", description="Request path that failed.")
