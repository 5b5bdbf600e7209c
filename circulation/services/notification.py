import asyncio
import logging
from decimal import Decimal
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

import aiosmtplib

from circulation.core.config import Settings
from circulation.db.models.item import Item
from circulation.db.models.member import Member

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound member notifications. Fire-and-forget: nothing is returned."""

    def notify_checkout(self, member: Member, item: Item) -> None: ...

    def notify_return(self, member: Member, item: Item, fee: Decimal) -> None: ...


def checkout_text(member: Member, item: Item) -> str:
    return f"Hello {member.name},\n\n'{item.title}' is checked out to you. It is due on {item.due_date}.\n"


def return_text(member: Member, item: Item, fee: Decimal) -> str:
    if fee > 0:
        return f"Hello {member.name},\n\n'{item.title}' was returned late. Late fee: ${fee:.2f}\n"
    return f"Hello {member.name},\n\n'{item.title}' was returned. No late fee.\n"


class LoggingNotifier:
    """Writes notifications to the log. Used when SMTP is not configured."""

    def notify_checkout(self, member: Member, item: Item) -> None:
        logger.info(f"Email to {member.email}: '{item.title}' checked out. Due {item.due_date}")

    def notify_return(self, member: Member, item: Item, fee: Decimal) -> None:
        if fee > 0:
            logger.info(f"Email to {member.email}: '{item.title}' returned. Late fee ${fee:.2f}")
        else:
            logger.info(f"Email to {member.email}: '{item.title}' returned. No late fee")


class EmailNotifier:
    """Sends notifications over SMTP with aiosmtplib."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def notify_checkout(self, member: Member, item: Item) -> None:
        self._send(member.email, "Item checked out", checkout_text(member, item))

    def notify_return(self, member: Member, item: Item, fee: Decimal) -> None:
        self._send(member.email, "Item returned", return_text(member, item, fee))

    def _send(self, to_email: str, subject: str, text: str) -> None:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = self.settings.smtp_from_email
        message["To"] = to_email
        message.attach(MIMEText(text, "plain"))

        send_kwargs = {
            "hostname": self.settings.smtp_host,
            "port": self.settings.smtp_port,
            "username": self.settings.smtp_user,
            "password": self.settings.smtp_password,
        }

        # Handle TLS based on smtp_use_tls configuration
        if self.settings.smtp_use_tls:
            # Port 465 uses direct TLS, everything else STARTTLS
            if self.settings.smtp_port == 465:
                send_kwargs["use_tls"] = True
            else:
                send_kwargs["start_tls"] = True

        asyncio.run(aiosmtplib.send(message, **send_kwargs))


def build_notifier(settings: Settings) -> Notifier:
    if settings.smtp_configured:
        return EmailNotifier(settings)
    logger.warning("SMTP not configured - notifications will only be logged")
    return LoggingNotifier()
