"""Account verification template: sent on registration."""

from html import escape

from notifications.message import NotificationType


class AccountVerificationTemplate:
    notification_type = NotificationType.ACCOUNT_VERIFICATION.value

    @staticmethod
    def render(context: dict) -> dict:
        store_name = context.get("store_name", "The Ordnery")
        link = context.get("verification_link", "")
        return {
            "subject": f"Verify Your Account for {store_name}",
            "body": (
                f"Thank you for registering with {store_name}!\n\n"
                f"Verify your email and set your password: {link}\n\n"
                "This link will expire in 1 hour. If you did not register, please ignore this email."
            ),
            "html_body": (
                "<p>Dear User,</p>"
                f"<p>Thank you for registering with {escape(store_name)}!</p>"
                "<p>Please click on the following link to verify your email and set your password:</p>"
                f'<p><a href="{escape(link)}">{escape(link)}</a></p>'
                "<p>This link will expire in 1 hour.</p>"
                "<p>If you did not register for this account, please ignore this email.</p>"
                f"<p>Best regards,<br/>{escape(store_name)} Team</p>"
            ),
        }
