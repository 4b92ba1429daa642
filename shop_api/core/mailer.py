"""
Email adapter for the seller accounts backend.

The default implementation uses SMTP, reading credentials from Settings.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import html
import logging
import smtplib
import ssl

from .config import Settings

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Mailer:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _configured(self) -> bool:
        s = self.settings
        return bool(s.smtp_host and s.smtp_user and s.smtp_password and s.smtp_from and s.smtp_port)

    def send(self, recipient: str, subject: str, message: str) -> None:
        """
        Send a plain-text message (with an escaped HTML alternative).
        Raises MailDeliveryError when SMTP is not configured or the transport fails.
        """
        if not self._configured():
            raise MailDeliveryError("SMTP configuration missing; email not sent")
        settings = self.settings
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = settings.smtp_from
        msg["To"] = recipient
        msg.attach(MIMEText(message, "plain", "utf-8"))
        msg.attach(MIMEText(f"<p>{html.escape(message)}</p>", "html", "utf-8"))
        port = settings.smtp_port or 465
        try:
            if port == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.smtp_host, port, context=context) as server:
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [recipient], msg.as_string())
            else:
                with smtplib.SMTP(settings.smtp_host, port) as server:
                    server.ehlo()
                    server.starttls(context=ssl.create_default_context())
                    server.login(settings.smtp_user, settings.smtp_password)
                    server.sendmail(settings.smtp_from, [recipient], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("SMTP delivery to %s failed: %s", recipient, exc)
            raise MailDeliveryError(str(exc) or "Email delivery failed") from exc
