# This project was developed with assistance from AI tools.
"""Notification dispatch to applicants and guardians.

Delivery (SMS / WhatsApp / email) belongs to an external dispatcher. The
lifecycle only hands it events after a transition has committed, so a
dispatch failure is logged and reported as a warning, never a rollback.

Delivery is active when NOTIFICATION_WEBHOOK_URL is set and degrades to
log-only when it is not.
"""

import logging
from typing import Any, Protocol

import httpx
from pydantic import BaseModel, Field

from ..core.config import Settings
from ..schemas.application import ApplicationRecord
from .errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class NotificationEvent(BaseModel):
    """One outbound notification about an application."""

    kind: str
    application_id: str
    tracking_number: str
    recipients: list[str] = Field(default_factory=list)
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class NotificationDispatcher(Protocol):
    async def dispatch(self, event: NotificationEvent) -> None: ...


class LoggingNotificationDispatcher:
    """Log-only dispatcher used when no delivery endpoint is configured."""

    async def dispatch(self, event: NotificationEvent) -> None:
        logger.info(
            "Notification %s for %s to %d recipient(s): %s",
            event.kind,
            event.tracking_number,
            len(event.recipients),
            event.message,
        )


class WebhookNotificationDispatcher:
    """POSTs events as JSON to the delivery service."""

    def __init__(self, url: str, timeout: float = 5.0):
        self._url = url
        self._timeout = timeout

    async def dispatch(self, event: NotificationEvent) -> None:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._url, json=event.model_dump(mode="json"))
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"Notification dispatcher unreachable: {exc}") from exc


def build_event(
    kind: str,
    application: ApplicationRecord,
    message: str,
    **details: Any,
) -> NotificationEvent:
    """Address an event to every contact number on the application."""
    recipients = [
        m
        for m in (application.applicant_mobile, application.father_mobile, application.mother_mobile)
        if m
    ]
    return NotificationEvent(
        kind=kind,
        application_id=application.id,
        tracking_number=application.tracking_number,
        recipients=list(dict.fromkeys(recipients)),
        message=message,
        details=details,
    )


async def notify_safely(
    dispatcher: NotificationDispatcher | None,
    event: NotificationEvent,
) -> str | None:
    """Dispatch an event; return a warning string instead of raising."""
    dispatcher = dispatcher or get_notification_dispatcher()
    try:
        await dispatcher.dispatch(event)
    except Exception:
        logger.warning(
            "Notification %s for application %s failed",
            event.kind,
            event.application_id,
            exc_info=True,
        )
        return f"Notification '{event.kind}' could not be delivered."
    return None


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_dispatcher: NotificationDispatcher | None = None


def init_notification_dispatcher(cfg: Settings) -> NotificationDispatcher:
    """Initialise the singleton (called once from app lifespan)."""
    global _dispatcher  # noqa: PLW0603
    if cfg.NOTIFICATION_WEBHOOK_URL:
        _dispatcher = WebhookNotificationDispatcher(
            cfg.NOTIFICATION_WEBHOOK_URL, timeout=cfg.NOTIFICATION_TIMEOUT_SECONDS
        )
    else:
        _dispatcher = LoggingNotificationDispatcher()
    return _dispatcher


def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the initialised dispatcher, falling back to log-only."""
    global _dispatcher  # noqa: PLW0603
    if _dispatcher is None:
        _dispatcher = LoggingNotificationDispatcher()
    return _dispatcher


def log_notification_status(cfg: Settings) -> None:
    """Log whether notification delivery is active or log-only. Call at startup."""
    if cfg.NOTIFICATION_WEBHOOK_URL:
        logger.warning("Notification delivery: ACTIVE (url=%s)", cfg.NOTIFICATION_WEBHOOK_URL)
    else:
        logger.warning("Notification delivery: LOG-ONLY (NOTIFICATION_WEBHOOK_URL not set)")
