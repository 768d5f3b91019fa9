"""SMTP email adapter: delivers mail through a configured SMTP server."""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid

import structlog

from notifications.channel.email_port import DeliveryReceipt, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Send mail over SMTP; port 465 uses implicit TLS, anything else STARTTLS."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str | None = None,
        password: str | None = None,
        sender_name: str = "The Ordnery",
        reply_to: str | None = None,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender_name = sender_name
        self.reply_to = reply_to
        self.timeout = timeout

    @property
    def secure(self) -> bool:
        return self.port == 465

    def _connect(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)

        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        server.starttls()
        return server

    def _build_message(self, to: str, subject: str, body: str, html_body: str | None) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self.sender_name, self.username or ""))
        message["To"] = to
        message["Message-ID"] = make_msgid()
        if self.reply_to:
            message["Reply-To"] = self.reply_to

        message.attach(MIMEText(body, "plain", "utf-8"))
        if html_body:
            message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def verify(self) -> bool:
        """Open and close a connection to check host and credentials."""
        try:
            with self._connect() as server:
                if self.username:
                    server.login(self.username, self.password or "")
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP verify failed", host=self.host, port=self.port, error=str(exc))
            return False

        logger.info("SMTP connection verified", host=self.host, port=self.port)
        return True

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryReceipt:
        message = self._build_message(to, subject, body, html_body)
        try:
            with self._connect() as server:
                if self.username:
                    server.login(self.username, self.password or "")
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
