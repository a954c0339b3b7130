"""
Contact-form business logic.

The notification goes out *from the visitor's own address* to the fixed site
recipient, so replying in a mail client answers the visitor directly.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage

from fastapi import HTTPException, status

from core.config import Settings

from .mailer import Mailer, MailerError
from .schemas import ContactMessage
from .template import render_contact_email

logger = logging.getLogger(__name__)


def subject_for(payload: ContactMessage) -> str:
    return f"New Contact Form Message from {payload.full_name}"


def build_message(payload: ContactMessage, *, settings: Settings) -> EmailMessage:
    subject = subject_for(payload)
    sender_email = str(payload.email)

    message = EmailMessage()
    message["From"] = sender_email
    message["To"] = settings.contact_recipient
    message["Subject"] = subject
    message["Reply-To"] = sender_email
    # The configured account is the one actually handing the mail to SMTP.
    message["Sender"] = settings.sender_address

    message.set_content(payload.message)
    message.add_alternative(
        render_contact_email(
            sender_name=payload.full_name,
            sender_email=sender_email,
            subject=subject,
            message=payload.message,
        ),
        subtype="html",
    )
    return message


async def send_contact_message(payload: ContactMessage, *, settings: Settings, mailer: Mailer) -> None:
    message = build_message(payload, settings=settings)
    try:
        await mailer.send(message)
    except MailerError as exc:
        logger.exception("contact_email_failed recipient=%s", message["To"])
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to send email: {exc}",
        ) from exc

    logger.info("contact_email_sent recipient=%s", message["To"])
