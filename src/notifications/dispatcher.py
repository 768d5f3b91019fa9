"""Fire-and-forget notification dispatch.

The dispatcher renders a template and hands delivery to a worker thread. The
caller gets control back immediately: it never sees the delivery outcome, and
a failed delivery is only logged. There is no retry and nothing is persisted.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait

import structlog

from notifications.channel.email_port import EmailPort
from notifications.message import NotificationType
from notifications.templates import get_template
from shared.config import Settings

logger = structlog.get_logger(__name__)


class DeliveryFailed(Exception):
    """The email channel reported that a message was not sent."""


class NotificationDispatcher:
    def __init__(self, email_channel: EmailPort, settings: Settings, max_workers: int = 4):
        self.email_channel = email_channel
        self.settings = settings
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def submit(self, to: str, notification_type: str, context: dict) -> Future:
        """Schedule an email and return without waiting for it."""
        full_context = {
            "store_name": self.settings.store_name,
            "currency": self.settings.currency,
            "tracking_url": self.settings.tracking_url,
            **context,
        }
        future = self._executor.submit(self._deliver, to, notification_type, full_context)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(lambda f: self._on_done(f, to, notification_type))
        return future

    def order_placed(self, order, items: list[dict], shipping_address: str | None) -> Future:
        """Send the order confirmation for a freshly persisted order."""
        return self.submit(
            order.customer_email,
            NotificationType.ORDER_CONFIRMATION.value,
            {
                "order_id": str(order.id),
                "items": items,
                "total_price": order.total_price,
                "tracking_id": order.tracking_id,
                "shipping_address": shipping_address or "Not provided",
            },
        )

    def verification_requested(self, email: str, token: str) -> Future:
        link = f"{self.settings.frontend_url}/verify-email?token={token}"
        return self.submit(email, NotificationType.ACCOUNT_VERIFICATION.value, {"verification_link": link})

    def password_reset_requested(self, email: str, name: str | None, token: str) -> Future:
        link = f"{self.settings.frontend_url}/reset-password?token={token}"
        return self.submit(email, NotificationType.PASSWORD_RESET.value, {"name": name, "reset_link": link})

    # -------------------------------------------------------------------
    # Worker side
    # -------------------------------------------------------------------
    def _deliver(self, to: str, notification_type: str, context: dict) -> dict:
        content = get_template(notification_type).render(context)
        result = self.email_channel.send(
            to=to,
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
        if result.get("status") != "sent":
            raise DeliveryFailed(result.get("error", "Unknown dispatch error"))
        return result

    def _on_done(self, future: Future, to: str, notification_type: str) -> None:
        with self._lock:
            self._pending.discard(future)

        if future.cancelled():
            return

        exc = future.exception()
        if exc is not None:
            logger.error(
                "Notification delivery failed",
                notification_type=notification_type,
                recipient=to,
                error=str(exc),
            )
            return

        logger.info(
            "Notification sent",
            notification_type=notification_type,
            recipient=to,
            message_id=future.result().get("message_id"),
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def wait_idle(self, timeout: float | None = None) -> None:
        """Block until every submitted notification has finished."""
        with self._lock:
            pending = set(self._pending)
        wait(pending, timeout=timeout)

    def shutdown(self, wait_for_pending: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_pending)
