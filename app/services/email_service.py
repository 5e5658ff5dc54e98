"""Service for sending account verification emails."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

logger = logging.getLogger(__name__)


def verification_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/account/verify/{token}"


class EmailService:
    """Service for sending emails via SMTP."""

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: str = "Account Verification",
    ):
        self.smtp_host = smtp_host or ""
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username or ""
        self.smtp_password = smtp_password or ""
        self.from_email = from_email or ""
        self.from_name = from_name
        self.enabled = bool(self.smtp_host and self.smtp_username and self.from_email)

    def send_verification_email(self, to_email: str, verification_token: str, base_url: str) -> bool:
        """
        Send account verification email.

        Args:
            to_email: Recipient email
            verification_token: Verification token
            base_url: Base URL for verification link

        Returns:
            True if sent successfully, False otherwise
        """
        url = verification_url(base_url, verification_token)

        if not self.enabled:
            # No SMTP configured; surface the link for development
            logger.info("Verification URL for %s: %s", to_email, url)
            return True

        subject = "Account Verification Email"
        html_body = f"""
        <html>
            <body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2 style="color: #1e293b; margin-bottom: 20px;">Hello, Verify your account</h2>

                <p style="color: #475569; line-height: 1.6; margin-bottom: 20px;">
                    Click the button below to verify your account
                </p>

                <div style="text-align: center; margin: 30px 0;">
                    <a href="{url}"
                       style="background-color: #3b82f6; color: white; padding: 15px 30px;
                              text-decoration: none; border-radius: 5px; display: inline-block;
                              font-weight: bold;">
                        Verify account
                    </a>
                </div>

                <p style="color: #64748b; font-size: 14px; margin-top: 30px;">
                    Thank you for using our application!
                </p>
            </body>
        </html>
        """

        text_body = f"""
        Hello, Verify your account

        Open the link below to verify your account:
        {url}

        Thank you for using our application!
        """

        return self._send_email(to_email, subject, html_body, text_body)

    def _send_email(self, to_email: str, subject: str, html_body: str, text_body: str) -> bool:
        """
        Send an email via SMTP.

        Args:
            to_email: Recipient email
            subject: Email subject
            html_body: HTML body
            text_body: Plain text body

        Returns:
            True if sent successfully, False otherwise
        """
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = f"{self.from_name} <{self.from_email}>"
            msg["To"] = to_email

            part1 = MIMEText(text_body, "plain", "utf-8")
            part2 = MIMEText(html_body, "html", "utf-8")

            msg.attach(part1)
            msg.attach(part2)

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(msg)

            return True

        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send email to %s: %s", to_email, exc)
            return False
