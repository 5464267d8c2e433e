"""Email sending via the Resend HTTP API."""

import httpx
import structlog

logger = structlog.get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
RESEND_TIMEOUT = 10.0


async def send_email(api_key: str, to: str, subject: str, html: str, sender: str) -> tuple[bool, str | None]:
    """Send an HTML email.

    Args:
        api_key: Resend API key
        to: Recipient address
        subject: Subject line
        html: HTML body
        sender: From header, e.g. "Chat App <noreply@example.com>"

    Returns:
        Tuple of (success: bool, error_message: str | None)
        - (True, None) on success
        - (False, error_message) on failure
    """
    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                RESEND_API_URL,
                headers={"Authorization": f"Bearer {api_key}"},
                json={"from": sender, "to": to, "subject": subject, "html": html},
                timeout=RESEND_TIMEOUT,
            )
    except httpx.HTTPError as e:
        logger.exception("email_send_error", error=str(e))
        return False, "Failed to send email"

    if response.is_error:
        logger.error("email_send_failed", status_code=response.status_code, body=response.text)
        return False, f"Failed to send email: {response.status_code}"

    logger.debug("email_sent", status_code=response.status_code)
    return True, None
