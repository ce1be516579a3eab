"""
SMTP mailer

Sends templated email through an SMTP relay. When no relay is
configured (local development) the message is logged instead.
"""

import asyncio
import logging
import smtplib
import ssl
from email.mime.text import MIMEText
from typing import Optional

import jinja2

from src.adapter.services.email_templates import render
from src.app.services.mailer import IMailer, MailOptions

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class SmtpMailer(IMailer):
    """IMailer implementation over smtplib"""

    def __init__(
        self,
        *,
        host: Optional[str] = None,
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        sender: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.sender = sender or user

    @classmethod
    def from_config(cls, config) -> "SmtpMailer":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            user=config.SMTP_USER,
            password=config.SMTP_PASS,
            use_tls=config.SMTP_USE_TLS,
            sender=config.SMTP_FROM,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.sender)

    async def send_mail(
        self, template: str, context: dict, options: MailOptions, mode: str = "text"
    ) -> bool:
        mode = mode.lower()
        try:
            body = render(template, context, mode)
        except jinja2.TemplateNotFound:
            logger.error(f"Email template not found: {template} ({mode})")
            return False

        if not self.is_configured:
            logger.info(
                f"SMTP not configured, email to {redact_email(options.to)} "
                f"not sent: {options.subject}"
            )
            return True

        message = MIMEText(body, "html" if mode == "html" else "plain", "utf-8")
        message["Subject"] = options.subject
        message["From"] = self.sender
        message["To"] = options.to

        try:
            await asyncio.to_thread(self._deliver, options.to, message.as_string())
        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            logger.error(
                f"Email delivery to {redact_email(options.to)} failed: "
                f"{type(e).__name__}: {e}"
            )
            return False

        logger.info(f"Email sent to {redact_email(options.to)}: {options.subject}")
        return True

    def _deliver(self, to: str, raw_message: str) -> None:
        context = ssl.create_default_context()

        if self.use_tls:
            with smtplib.SMTP(self.host, self.port, timeout=30) as server:
                server.starttls(context=context)
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.sendmail(self.sender, to, raw_message)
        else:
            with smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=30) as server:
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.sendmail(self.sender, to, raw_message)
