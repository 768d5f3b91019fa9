"""Notification kinds sent by the storefront."""

from enum import Enum


class NotificationType(Enum):
    ORDER_CONFIRMATION = "OrderConfirmation"
    ACCOUNT_VERIFICATION = "AccountVerification"
    PASSWORD_RESET = "PasswordReset"
