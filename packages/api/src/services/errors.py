# This project was developed with assistance from AI tools.
"""Error taxonomy shared by the lifecycle, interview and guardian services."""

from collections.abc import Iterable


class HostelError(Exception):
    """Base class for service-level failures."""


class InvalidTransitionError(HostelError, ValueError):
    """Raised when the current status does not permit the requested action."""

    def __init__(self, current, required: Iterable, action: str):
        self.current = current
        self.required = tuple(required)
        self.action = action
        required_str = ", ".join(_value(s) for s in self.required) or "none (terminal status)"
        super().__init__(
            f"Cannot {action}: application is {_value(current)}; "
            f"requires one of: {required_str}."
        )


class MissingFieldError(HostelError, ValueError):
    """Raised when required input is absent."""

    def __init__(self, fields: Iterable[str], message: str | None = None):
        self.fields = tuple(fields)
        super().__init__(message or f"Missing required field(s): {', '.join(self.fields)}.")


class IncompleteEvaluationError(HostelError, ValueError):
    """Raised when an interview evaluation is missing or has out-of-range fields."""

    def __init__(self, fields: Iterable[str]):
        self.fields = tuple(fields)
        super().__init__(
            f"Interview evaluation is incomplete or invalid: {', '.join(self.fields)}."
        )


class NotFoundError(HostelError, LookupError):
    """Raised when a referenced application, interview, entry or guardian is unknown."""


class UpstreamUnavailableError(HostelError):
    """Raised when storage or a downstream collaborator cannot be reached."""


def _value(status) -> str:
    return getattr(status, "value", str(status))
