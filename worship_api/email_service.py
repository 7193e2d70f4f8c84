"""
Email Service using Resend
MJML templates are compiled to HTML before sending
"""

import logging
from typing import Union

import resend
from mjml import mjml_to_html

from .config import EMAIL_FROM_ADDRESS, PASSWORD_RESET_EXPIRY_MINUTES, RESEND_API_KEY
from .email_templates import password_reset_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailError(Exception):
    """Raised when an email cannot be compiled or delivered"""


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailError(f"Failed to compile MJML template: {str(e)}") from e

    # Newer releases return an object with .html/.errors, older ones a dict
    if isinstance(result, dict):
        errors, html = result.get("errors"), result.get("html", "")
    else:
        errors, html = getattr(result, "errors", None), getattr(result, "html", str(result))
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return html


async def send_email(to: Union[str, list[str]], subject: str, mjml_content: str) -> dict:
    """Compile mjml_content and deliver it through Resend; raises EmailError on failure"""
    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(
            {
                "from": EMAIL_FROM_ADDRESS,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email '{subject}' sent to {recipients}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailError(f"Failed to send email: {str(e)}") from e


async def send_password_reset_email(to: str, reset_link: str) -> dict:
    """Send password reset link"""
    return await send_email(
        to=to,
        subject="Reset your password",
        mjml_content=password_reset_template(reset_link, PASSWORD_RESET_EXPIRY_MINUTES),
    )
