"""
SoYummy Email Service
Verification and newsletter emails over async SMTP
"""

from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formatdate, make_msgid
from typing import Optional, Dict, Any
from datetime import datetime
from pathlib import Path
import logging
import re

import aiosmtplib
import jinja2

from core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME or "So Yummy"

        # Initialize Jinja2 template environment
        template_dir = Path(__file__).parent.parent / "templates" / "emails"
        self.template_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(template_dir),
            autoescape=jinja2.select_autoescape(['html', 'xml'])
        )

        # Email templates
        self.templates = {
            'email_verification': 'email_verification.html',
            'subscription_confirmation': 'subscription_confirmation.html',
        }

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Send email using async SMTP

        Args:
            to_email: Recipient email
            subject: Email subject
            html_content: HTML email content
            text_content: Plain text content (optional)

        Returns:
            True if sent successfully, False otherwise
        """
        try:
            message = MIMEMultipart('alternative')
            message['Subject'] = subject
            message['From'] = f"{self.from_name} <{self.from_email}>"
            message['To'] = to_email
            message['Message-ID'] = make_msgid()
            message['Date'] = formatdate(localtime=True)

            if text_content:
                message.attach(MIMEText(text_content, 'plain', 'utf-8'))
            message.attach(MIMEText(html_content, 'html', 'utf-8'))

            await aiosmtplib.send(
                message,
                hostname=self.smtp_server,
                port=self.smtp_port,
                username=self.smtp_username or None,
                password=self.smtp_password or None,
                use_tls=self.smtp_port == 465,
                start_tls=self.smtp_port == 587,
            )

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False

    def _render_template(
        self,
        template_name: str,
        context: Dict[str, Any]
    ) -> tuple[str, str]:
        """
        Render email template

        Returns:
            Tuple of (html_content, text_content)
        """
        template = self.template_env.get_template(template_name)

        context.update({
            'app_name': self.from_name,
            'current_year': datetime.now().year,
            'website_url': settings.BASE_URL,
        })

        html_content = template.render(**context)
        return html_content, self._html_to_text(html_content)

    def _html_to_text(self, html_content: str) -> str:
        """Convert HTML to plain text (simplified)"""
        text = re.sub(r'<[^>]+>', '', html_content)
        text = text.replace('&nbsp;', ' ')
        text = text.replace('&amp;', '&')
        text = text.replace('&lt;', '<')
        text = text.replace('&gt;', '>')
        text = text.replace('&quot;', '"')
        return re.sub(r'\s+', ' ', text).strip()

    def verification_url(self, token: str) -> str:
        return f"{settings.BASE_URL.rstrip('/')}/api/users/verify/{token}"

    async def send_email_verification(self, email: str, name: str, token: str) -> bool:
        """Send the link that redeems a verification token"""
        context = {
            'user_name': name,
            'verification_url': self.verification_url(token),
        }
        html_content, text_content = self._render_template(
            self.templates['email_verification'], context
        )

        return await self.send_email(
            to_email=email,
            subject="Verify email",
            html_content=html_content,
            text_content=text_content
        )

    async def send_subscription_confirmation(self, email: str, name: str) -> bool:
        """Confirm a newsletter subscription"""
        html_content, text_content = self._render_template(
            self.templates['subscription_confirmation'], {'user_name': name}
        )

        return await self.send_email(
            to_email=email,
            subject=f"Welcome to the {self.from_name} newsletter",
            html_content=html_content,
            text_content=text_content
        )


# Create singleton instance
email_service = EmailService()
