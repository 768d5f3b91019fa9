"""Fake email adapter: records sent emails for testing."""

import threading
from uuid import uuid4

from notifications.channel.email_port import DeliveryReceipt, EmailPort


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions.

    ``configure`` can make it report a failed delivery, raise outright, or hold
    every send until ``release()`` is called.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.should_raise = False
        self.failure_reason = "Email delivery failed"
        self._gate = threading.Event()
        self._gate.set()
        self._lock = threading.Lock()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        should_raise: bool = False,
        hold: bool = False,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.should_raise = should_raise
        if hold:
            self._gate.clear()
        else:
            self._gate.set()

    def release(self):
        """Let held sends proceed."""
        self._gate.set()

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryReceipt:
        self._gate.wait(timeout=10)

        if self.should_raise:
            raise ConnectionError(self.failure_reason)

        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"email-{uuid4().hex[:12]}"
        record = {
            "message_id": message_id,
            "to": to,
            "subject": subject,
            "body": body,
            "html_body": html_body,
        }
        with self._lock:
            self.sent_emails.append(record)

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent emails (useful between tests)."""
        with self._lock:
            self.sent_emails.clear()
        self.configure()
