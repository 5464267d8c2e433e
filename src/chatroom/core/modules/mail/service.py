from urllib.parse import urlencode

import structlog

from chatroom.core.core import Service
from chatroom.core.modules.mail.sender import send_email
from chatroom.core.modules.mail.templates import VERIFICATION_SUBJECT, render_verification_email
from chatroom.errors import ConfigurationError, DependencyError

logger = structlog.get_logger(__name__)


class MailService(Service):
    """Outbound email. Failures are reported to the caller, never retried."""

    def build_verify_url(self, base_url: str, token: str) -> str:
        return f"{base_url.rstrip('/')}/verify?{urlencode({'token': token})}"

    async def send_verification_email(self, to: str, verify_url: str) -> None:
        api_key = self.core.config.resend_api_key
        if not api_key:
            logger.error("email_not_configured")
            raise ConfigurationError("Email service is not configured")

        html = render_verification_email(verify_url, self.core.config.verification_token_ttl_minutes)
        success, error = await send_email(api_key, to, VERIFICATION_SUBJECT, html, self.core.config.email_from)
        if not success:
            raise DependencyError(error or "Failed to send email")
