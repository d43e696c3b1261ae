import abc
import logging
import smtplib
from email.message import EmailMessage

from ..core.config import settings

logger = logging.getLogger(__name__)

class NotificationSender(abc.ABC):
    """Fire-and-forget message delivery. No delivery guarantee, no retry."""

    @abc.abstractmethod
    def send(self, to: str, subject: str, body: str) -> None:
        ...

class LogNotificationSender(NotificationSender):
    """Writes the message to the application log instead of delivering it."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info("===== SIMULATED EMAIL =====")
        logger.info(f"To: {to}")
        logger.info(f"Subject: {subject}")
        logger.info(f"Body: {body}")
        logger.info("===========================")

class SmtpNotificationSender(NotificationSender):
    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str = None,
        password: str = None,
        sender: str = "no-reply@medibook.local",
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
                smtp.starttls()
                if self.user:
                    smtp.login(self.user, self.password or "")
                smtp.send_message(message)
            logger.info(f"Notification sent to {to}")
        except (smtplib.SMTPException, OSError) as e:
            # Best effort: a failed confirmation never fails the booking
            logger.error(f"Failed to send notification to {to}: {str(e)}")

def get_notification_sender() -> NotificationSender:
    """Notification sender selected by ``NOTIFICATION_BACKEND``."""
    if settings.NOTIFICATION_BACKEND == "smtp":
        if not settings.SMTP_HOST:
            raise RuntimeError("NOTIFICATION_BACKEND is 'smtp' but SMTP_HOST is not set")
        return SmtpNotificationSender(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.SMTP_SENDER,
        )
    return LogNotificationSender()
