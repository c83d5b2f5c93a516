"""Outbound e-mail through the Resend HTTP API."""

from __future__ import annotations

import hashlib
import logging
from html import escape

import httpx

from lingopal.config.settings import get_settings
from lingopal.middleware.error_handlers import ExternalServiceError


_RESEND_SEND_EMAILS_URL = "https://api.resend.com/emails"

logger = logging.getLogger(__name__)


def _build_idempotency_key(*, purpose: str, email: str, token: str) -> str:
    material = f"{purpose}:{email}:{token}"
    digest = hashlib.sha256(material.encode("utf-8")).hexdigest()[:24]
    return f"{purpose}/{digest}"


def render_verification_email(verification_url: str) -> str:
    safe_url = escape(verification_url, quote=True)
    return f"""\
<p>Click the link below to verify your email:</p>
<a href="{safe_url}">Click here to verify account!</a>
"""


async def send_email(
    *,
    email_to: str,
    subject: str,
    html_content: str,
    idempotency_key: str | None = None,
) -> str | None:
    """Send an email through the Resend API and return its id.

    Raises
    ------
    ExternalServiceError
        Mail is not configured or the API rejected the message.
    """
    settings = get_settings()
    if not settings.RESEND_API_KEY or not settings.EMAILS_FROM_EMAIL:
        raise ExternalServiceError("Mail", "mail transport is not configured")

    from_email = settings.EMAILS_FROM_EMAIL
    if settings.EMAILS_FROM_NAME:
        from_email = f'"{settings.EMAILS_FROM_NAME}" <{settings.EMAILS_FROM_EMAIL}>'

    headers: dict[str, str] = {
        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
        "Content-Type": "application/json",
    }
    if idempotency_key:
        headers["Idempotency-Key"] = idempotency_key

    payload = {
        "from": from_email,
        "to": [email_to],
        "subject": subject,
        "html": html_content,
    }

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(_RESEND_SEND_EMAILS_URL, headers=headers, json=payload)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.exception("Failed to send email via Resend API")
        raise ExternalServiceError("Mail", "failed to send email") from e

    email_id = data.get("id") if isinstance(data, dict) else None
    logger.info("Sent email via Resend API", extra={"resend_email_id": email_id, "email_to": email_to})
    return email_id if isinstance(email_id, str) else None


async def send_verification_email(*, email: str, verification_url: str) -> str | None:
    """Send the account verification link."""
    return await send_email(
        email_to=email,
        subject="Verify Your Email Address",
        html_content=render_verification_email(verification_url),
        idempotency_key=_build_idempotency_key(purpose="verify", email=email, token=verification_url),
    )
