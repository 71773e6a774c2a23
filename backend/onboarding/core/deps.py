"""Common FastAPI dependencies shared by the routers."""

from __future__ import annotations

from onboarding.services.email import Mailer, SmtpMailer


def get_mailer() -> Mailer:
    return SmtpMailer.from_settings()
