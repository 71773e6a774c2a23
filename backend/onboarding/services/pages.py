"""Server-rendered result pages for the verification links."""

from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from onboarding.core.config import settings
from onboarding.core.links import build_resend_url

ERROR_MSG_HEADING = "Hmm... There seems to be a problem."


def _support_link(label: str = "contact support") -> str:
    return f"<a href='{escape(settings.SUPPORT_URL, quote=True)}' class='text-primary'>{escape(label)}</a>"


def error_msg_try_again() -> str:
    return f"Please try again later. If the problem persists, {_support_link()}."


def error_msg_bad_link() -> str:
    return (
        "It looks like you're using a badly formed link. Make sure you are visiting the full URL "
        f"provided in your verification email.<br><br>If the problem persists, {_support_link()}."
    )


def error_msg_support() -> str:
    return f"Please {_support_link()}."


def build_page(heading: str, body: str) -> str:
    """Wrap a heading and an HTML body fragment in the branded page shell.

    `heading` is escaped; `body` is trusted markup built by this module.
    """
    return f"""\
<html>
<body style="font-family: Arial, Helvetica, sans-serif;">
  <p><img src="{escape(settings.LOGO_URL, quote=True)}" alt="" /></p>
  <div style="padding-left: 20px;padding-right: 20px;">
    <h1>{escape(heading)}</h1>
    <p>{body}</p>
  </div>
</body>
</html>
"""


def error_page(reference: int, body: str) -> str:
    return build_page(f"{ERROR_MSG_HEADING} ({reference})", body)


def link_expired_page(email: str) -> str:
    resend_url = escape(build_resend_url(email), quote=True)
    return build_page(
        "Oops! Your link has expired.",
        f'Click here to <a href="{resend_url}" class=\'text-primary\'>resend verification email</a>.'
        f"<br><br>Make sure you click the link in the email within {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} "
        f"hours. If the problem persists, {_support_link()}.",
    )


def already_verified_page() -> str:
    return build_page(
        "Oops! You're already verified.",
        "Looks like this email address was already verified. If you think this is a mistake, "
        f"please {_support_link()}.",
    )


def checkout_url(country: str | None, billing_email: str | None) -> str:
    base = settings.checkout_url_for(country)
    return f"{base}?{urlencode({'prefilled_email': billing_email or ''})}"


def verified_page(country: str | None, billing_email: str | None) -> str:
    href = escape(checkout_url(country, billing_email), quote=True)
    return build_page(
        "Thank You! Your email has been verified.",
        "To complete your account setup and start your free trial, add a payment method by clicking "
        "the button below.</p>"
        '<table border="0" cellspacing="0" cellpadding="0" style="margin-left: auto;margin-right: auto;">'
        "<tr>"
        '<td style="padding: 12px 18px; border-radius:5px; background-color: #FFD750;" align="center">'
        f'<a rel="noopener" target="_blank" href="{href}" '
        'style="font-size: 18px; font-family: Helvetica, Arial, sans-serif; font-weight: bold; '
        'color: #826441; text-decoration: none; display: inline-block;">Activate Free Trial</a>'
        "</td>"
        "</tr>"
        "</table>"
        "<p>You will be brought to the check out page, where you can add a payment method for your new "
        "account. No charges will be processed during the trial period, and you can cancel anytime "
        "before it ends.",
    )


def resent_page() -> str:
    return build_page(
        "Verification Email Resent",
        "We've sent a new verification email to your email address originally provided during sign-up. "
        f"Make sure to click the link in the email within {settings.VERIFICATION_TOKEN_EXPIRE_HOURS} hours. "
        "Any previous verification emails will no longer work.<br><br>If you think you may have provided "
        f"the wrong email address, or have any other issues, please {_support_link()}.",
    )
