"""Email channel construction.

The composition root builds one channel at startup and hands it to the
``NotificationDispatcher``. An SMTP adapter is used when ``EMAIL_HOST`` is
configured; otherwise mail is recorded in memory by the fake adapter.
"""

from notifications.channel.email_port import EmailPort
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.smtp_email import SmtpEmailAdapter
from shared.config import Settings


def build_email_channel(settings: Settings) -> EmailPort:
    """Return the email adapter described by ``settings``."""
    if settings.email_host:
        return SmtpEmailAdapter(
            host=settings.email_host,
            port=settings.email_port,
            username=settings.email_user,
            password=settings.email_pass,
            sender_name=settings.store_name,
            reply_to=settings.support_email,
        )
    return FakeEmailAdapter()


__all__ = ["EmailPort", "FakeEmailAdapter", "SmtpEmailAdapter", "build_email_channel"]
