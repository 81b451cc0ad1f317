"""
Email service for generation notifications.
Supports async email sending with Jinja2 templates.
"""

import re
from pathlib import Path
from typing import Optional
from datetime import datetime
import logging

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.config import settings

logger = logging.getLogger(__name__)

# Get the templates directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates" / "email"

# Initialize Jinja2 environment
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(['html', 'xml'])
)


async def send_email(
    to_email: Optional[str],
    subject: str,
    html_content: str,
    text_content: Optional[str] = None
) -> bool:
    """
    Send an email using aiosmtplib.

    Args:
        to_email: Recipient email address
        subject: Email subject
        html_content: HTML content of the email
        text_content: Plain text content (optional, falls back to stripped HTML)

    Returns:
        True if email was sent successfully, False otherwise
    """
    # Validate SMTP settings
    if not settings.SMTP_HOST or not settings.EMAIL_FROM or not to_email:
        logger.info(f"Email not configured, skipping '{subject}'")
        logger.debug(f"Email content preview: {html_content[:200]}...")
        return False

    try:
        # Create message
        message = MIMEMultipart("alternative")
        message["From"] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM}>"
        message["To"] = to_email
        message["Subject"] = subject

        if not text_content:
            text_content = re.sub('<[^<]+?>', '', html_content)

        message.attach(MIMEText(text_content, "plain"))
        message.attach(MIMEText(html_content, "html"))

        # Port 587: Use STARTTLS (start_tls=True)
        # Port 465: Use implicit TLS (use_tls=True)
        await aiosmtplib.send(
            message,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=True if settings.SMTP_PORT == 465 else False,
            start_tls=True if settings.SMTP_PORT == 587 else False,
        )

        logger.info(f"Email sent successfully to {to_email}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {str(e)}")
        return False


async def send_generation_success_email(title: str, url: str) -> bool:
    """
    Notify the editor that a blog was generated.

    Args:
        title: Title the generation was requested for
        url: Public URL of the new blog

    Returns:
        True if email was sent successfully
    """
    template = jinja_env.get_template("blog_generated.html")
    html_content = template.render(
        title=title,
        url=url,
        current_year=datetime.now().year
    )

    return await send_email(
        to_email=settings.NOTIFY_EMAIL_TO,
        subject="Blog Generated",
        html_content=html_content
    )


async def send_generation_failure_email(title: str, reason: Optional[str] = None) -> bool:
    """Notify the editor that generation for `title` failed."""
    template = jinja_env.get_template("blog_failed.html")
    html_content = template.render(
        title=title,
        reason=reason,
        current_year=datetime.now().year
    )

    return await send_email(
        to_email=settings.NOTIFY_EMAIL_TO,
        subject="Blog Failed",
        html_content=html_content
    )
