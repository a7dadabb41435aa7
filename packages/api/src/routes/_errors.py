# This project was developed with assistance from AI tools.
"""Map service-layer errors onto HTTP responses.

main.py renders every HTTPException as RFC 7807 problem details, so routes
only need to pick the status code. The service message is passed through
unchanged because it names the exact cause (status mismatch, missing field).
"""

from fastapi import HTTPException, status

from ..services.errors import (
    HostelError,
    IncompleteEvaluationError,
    InvalidTransitionError,
    MissingFieldError,
    NotFoundError,
    UpstreamUnavailableError,
)

_STATUS_BY_ERROR: list[tuple[type[HostelError], int]] = [
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (MissingFieldError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (IncompleteEvaluationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UpstreamUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_error(exc: HostelError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
