"""Outbound email port.

Adapters return a delivery receipt instead of raising for ordinary delivery
failures; the dispatcher decides what a failure means.
"""

from abc import ABC, abstractmethod
from typing import TypedDict


class DeliveryReceipt(TypedDict, total=False):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: str


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> DeliveryReceipt:
        """Deliver one message with a plain-text body and an optional HTML alternative."""

    def verify(self) -> bool:
        """Check that the channel can reach its server; channels without one are always ready."""
        return True
