"""Password reset mail over SMTP, simulated in the log when no credentials are configured."""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from hr_console.config import settings

logger = logging.getLogger(__name__)

HTML_TEMPLATE_BASE = """
<!DOCTYPE html>
<html>
<head>
    <style>
        body { font-family: -apple-system, sans-serif; background-color: #f3f4f6; color: #1f2937; margin: 0; padding: 0; }
        .container { max-width: 560px; margin: 40px auto; background: #ffffff; border-radius: 10px; overflow: hidden; }
        .header { background: #2563eb; padding: 24px 32px; text-align: center; }
        .header h1 { color: #ffffff; margin: 0; font-size: 22px; }
        .content { padding: 32px; line-height: 1.6; }
        .btn { display: inline-block; background: #2563eb; color: #ffffff; text-decoration: none; padding: 12px 24px; border-radius: 6px; font-weight: 600; }
        .footer { background: #f9fafb; padding: 16px; text-align: center; color: #6b7280; font-size: 12px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header"><h1>{app_name}</h1></div>
        <div class="content">{body}</div>
        <div class="footer"><p>You received this email because a password reset was requested for your account.</p></div>
    </div>
</body>
</html>
"""


def send_email(recipient_email: str, subject: str, html_body: str) -> bool:
    """Send the message, or print it when SMTP credentials are blank. Returns False on SMTP failure."""
    if not settings.smtp_username or not settings.smtp_password:
        print("\n" + "=" * 60)
        print(f"SIMULATED EMAIL TO: {recipient_email}")
        print(f"SUBJECT: {subject}")
        print(f"CONTENT:\n{html_body}")
        print("=" * 60 + "\n")
        logger.info(f"Simulated email sent to {recipient_email}")
        return True

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.mail_sender
    msg["To"] = recipient_email
    msg.attach(MIMEText(html_body, "html"))

    try:
        with smtplib.SMTP(settings.smtp_server, settings.smtp_port, timeout=30) as server:
            server.starttls()
            server.login(settings.smtp_username, settings.smtp_password)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}")
        return False
    logger.info(f"Email sent to {recipient_email}")
    return True


def send_password_reset_email(recipient_email: str, reset_link: str) -> bool:
    """Mail the recovery link to a registered user."""
    body = f"""
    <h2>Reset your password</h2>
    <p>Follow the link below to choose a new password. The link expires in
    {settings.password_reset_expire_minutes} minutes.</p>
    <p style="text-align: center;"><a href="{reset_link}" class="btn">Reset Password</a></p>
    <p>If you did not request this, you can ignore this email.</p>
    """
    html = HTML_TEMPLATE_BASE.replace("{app_name}", settings.app_name).replace("{body}", body)
    return send_email(recipient_email, f"{settings.app_name}: reset your password", html)
