# mailer.py

import logging
import smtplib
from email.mime.text import MIMEText

from fastapi import Request

from config import Settings

logger = logging.getLogger(__name__)


class Mailer:
    """Plain-text mail over an SMTP relay (STARTTLS + login)."""

    def __init__(self, host: str, port: int, user: str, password: str, sender: str):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.EMAIL_FROM,
        )

    def send(self, to: str, subject: str, text: str) -> None:
        """Send one message. SMTP and socket errors propagate to the caller."""
        message = MIMEText(text, "plain")
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to

        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            if self.user:
                server.login(self.user, self.password)
            server.sendmail(self.sender, [to], message.as_string())
        logger.info("Email sent to %s: %s", to, subject)


def order_confirmation(total) -> tuple[str, str]:
    return "Order Confirmation", f"Thank you for your order! Order total: ${total / 100}."


def contact_notification(name, email, message) -> tuple[str, str]:
    text = (
        "You have a new contact form submission:\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Message: {message}"
    )
    return "New Contact Form Submission", text


def send_best_effort(mailer: Mailer, to: str, subject: str, text: str) -> bool:
    # For notifications whose loss must not fail the request
    try:
        mailer.send(to, subject, text)
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Error sending email to %s: %s", to, e)
        return False


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
