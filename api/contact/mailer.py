"""
SMTP client for outgoing mail (aiosmtplib).

One connection per message: connect, optionally authenticate, send, quit.
Failures of any kind leave as `MailerError` carrying the underlying reason.
"""

from __future__ import annotations

from email.message import EmailMessage

import aiosmtplib

from core.config import Settings


class MailerError(RuntimeError):
    pass


class Mailer:
    def __init__(
        self,
        *,
        host: str,
        port: int,
        secure: bool = False,
        username: str | None = None,
        password: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        # True: implicit TLS (usually 465). False: plain connect, STARTTLS when offered.
        self.secure = secure
        self.username = username
        self.password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> Mailer:
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            secure=settings.smtp_secure,
            username=settings.smtp_user,
            password=settings.smtp_pass,
        )

    async def send(self, message: EmailMessage) -> None:
        smtp = aiosmtplib.SMTP(hostname=self.host, port=self.port, use_tls=self.secure)
        try:
            async with smtp:
                if self.username and self.password:
                    await smtp.login(self.username, self.password)
                # MAIL FROM is the author; aiosmtplib would otherwise prefer the Sender header.
                await smtp.send_message(message, sender=message["From"])
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise MailerError(str(exc)) from exc
