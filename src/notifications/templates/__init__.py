"""Template registry: maps NotificationType to template classes."""

from notifications.message import NotificationType
from notifications.templates.account_verification import AccountVerificationTemplate
from notifications.templates.order_confirmation import OrderConfirmationTemplate
from notifications.templates.password_reset import PasswordResetTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationType.ACCOUNT_VERIFICATION.value: AccountVerificationTemplate,
    NotificationType.PASSWORD_RESET.value: PasswordResetTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
