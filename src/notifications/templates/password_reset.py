"""Password reset template: sent on a forgot-password request."""

from html import escape

from notifications.message import NotificationType


class PasswordResetTemplate:
    notification_type = NotificationType.PASSWORD_RESET.value

    @staticmethod
    def render(context: dict) -> dict:
        store_name = context.get("store_name", "The Ordnery")
        name = context.get("name") or "Customer"
        link = context.get("reset_link", "")
        return {
            "subject": f"Password Reset for {store_name}",
            "body": (
                f"Dear {name},\n\nYou requested a password reset. Set a new password here: {link}\n\n"
                "This link will expire in 1 hour. If you did not request this, please ignore this email."
            ),
            "html_body": (
                f"<p>Dear {escape(name)},</p>"
                "<p>You requested a password reset. Click the link to set a new password:</p>"
                f'<p><a href="{escape(link)}">{escape(link)}</a></p>'
                "<p>This link will expire in 1 hour.</p>"
                "<p>If you did not request this, please ignore this email.</p>"
                f"<p>Best regards,<br/>{escape(store_name)} Team</p>"
            ),
        }
