"""Outbound mail: verification email templates and the SMTP sender."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from typing import Protocol

from onboarding.core.config import settings
from onboarding.core.exceptions import MailError
from onboarding.core.links import build_resend_url, build_verify_url

logger = logging.getLogger(__name__)

COMPANY_FOOTER = "Carbeeza Inc. 10180 101 St NW Suite 620, Edmonton, AB T5J 3S4"


class Mailer(Protocol):
    def send(self, to: str, subject: str, body: str, *, html_body: str | None = None) -> None:
        ...


def _cta_button(label: str, href: str) -> str:
    safe_label = escape(label)
    safe_href = escape(href, quote=True)
    return (
        '<table border="0" cellspacing="0" cellpadding="0" style="margin-left:auto;margin-right:auto;">'
        "<tr>"
        '<td style="padding:12px 18px;border-radius:5px;background-color:#FFD750;" align="center">'
        f'<a rel="noopener" target="_blank" href="{safe_href}" '
        'style="font-size:18px;font-family:Helvetica,Arial,sans-serif;font-weight:bold;'
        'color:#826441;text-decoration:none;display:inline-block;">'
        f"{safe_label}</a>"
        "</td>"
        "</tr>"
        "</table>"
    )


def build_verification_email(contact_name: str, email: str, secret: str) -> tuple[str, str, str]:
    verify_url = build_verify_url(email, secret)
    resend_url = build_resend_url(email)
    subject = "Please Verify Your Email"
    body = (
        f"Welcome to Carbeeza, {contact_name}!\n\n"
        "There are a few items to take care of before we get started.\n"
        "Here's what you need to do:\n\n"
        "1. Verify Your Email: Go to the URL below to verify your account.\n"
        "2. Activate Free Trial: Once your email is verified, you can proceed to the checkout page "
        "to add a payment method and activate your free trial.\n\n"
        f"{verify_url}\n\n"
        "If you did not request this account, you can safely ignore this message.\n"
        f"Please note this validation link is valid for {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours. "
        f"In the event the link has expired, please go to: {resend_url}\n\n"
        f"Need help? Contact support: {settings.SUPPORT_URL}\n\n"
        f"--\n{COMPANY_FOOTER}\n"
    )
    html_body = f"""\
<html>
  <body style="font-family: Arial, Helvetica, sans-serif;padding: 20px;">
    <p><img src="{escape(settings.LOGO_URL, quote=True)}" alt="" /></p>
    <p style="padding-top: 30px;">Welcome to Carbeeza, {escape(contact_name)}!</p>
    <p>There are a few items to take care of before we get started.<br />Here's what you need to do:</p>
    <ol>
      <li>Verify Your Email: Click the button below to verify your account.</li>
      <li>Activate Free Trial: Once your email is verified, you can proceed to the checkout page
      to add a payment method and activate your free trial.</li>
    </ol>
    {_cta_button("Verify Your Email", verify_url)}
    <p>
      If you did not request this account, you can safely ignore this message.<br />
      Please note this validation link is valid for {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours.
      In the event the link has expired,
      <a href="{escape(resend_url, quote=True)}">click here to resend verification email</a>.
    </p>
    <p>Need help? <a href="{escape(settings.SUPPORT_URL, quote=True)}">Contact support</a>.</p>
    <hr style="margin-top: 50px;" />
    <p>{escape(COMPANY_FOOTER)}</p>
  </body>
</html>
"""
    return subject, body, html_body


class SmtpMailer:
    def __init__(
        self,
        *,
        host: str,
        port: int,
        user: str = "",
        password: str = "",
        sender: str = "",
        sender_name: str = "",
        use_tls: bool = True,
        timeout: int = 30,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.sender_name = sender_name
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls) -> "SmtpMailer":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.SMTP_FROM or settings.SMTP_USER,
            sender_name=settings.MAIL_FROM_NAME,
            use_tls=settings.SMTP_TLS,
        )

    def send(self, to: str, subject: str, body: str, *, html_body: str | None = None) -> None:
        if not self.host:
            # Local development without SMTP: the record is stored, resend recovers later.
            logger.info("SMTP not configured; skipping send to %s", to)
            return
        if not self.sender:
            logger.error("SMTP_FROM not configured; cannot send to %s", to)
            raise MailError()

        message = EmailMessage()
        message["From"] = formataddr((self.sender_name, self.sender)) if self.sender_name else self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.ehlo()
                if self.use_tls:
                    server.starttls()
                    server.ehlo()
                if self.user:
                    server.login(self.user, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.exception("Email send failed: %s", to)
            raise MailError() from exc
        logger.info("Email sent: %s", to)


def send_verification_email(mailer: Mailer, *, email: str, contact_name: str, secret: str) -> None:
    subject, body, html_body = build_verification_email(contact_name, email, secret)
    mailer.send(email, subject, body, html_body=html_body)
