"""
Email service for account emails sent via SMTP.

Rendering is a pure function of (template id, locale, variables); sending
happens in a background thread unless the caller needs the result.
"""
import smtplib
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from flask import current_app
from jinja2 import Environment, PackageLoader, select_autoescape

from digitaltests.common.i18n import MESSAGES, t
from digitaltests.config import config


# template id -> message key of the subject line
EMAIL_SUBJECTS = {
    "activation": "User.account_activation_subject",
    "activation_success": "User.account_activation_success_subject",
    "forget_password": "Auth.reset_password_subject",
    "reset_password_success": "Auth.password_reset_success",
    "account_deleted": "User.goodbye_subject",
}

_env = Environment(
    loader=PackageLoader("digitaltests", "templates/emails"),
    autoescape=select_autoescape(["html"]),
)


def render_email(template_id: str, locale: str, variables: dict) -> tuple[str, str]:
    """
    Render an email for the given locale.

    Returns:
        Tuple of (subject, html body)
    """
    if template_id not in EMAIL_SUBJECTS:
        raise ValueError(f"Unknown email template: {template_id}")
    if locale not in MESSAGES:
        locale = "en"
    template = _env.get_template(f"{template_id}_{locale}.html")
    subject = t(EMAIL_SUBJECTS[template_id], locale=locale)
    return subject, template.render(**variables)


def _send_email_sync(to_email: str, subject: str, html_content: str) -> tuple[bool, Optional[str]]:
    """Internal synchronous email sending function."""
    if config.EMAIL_SUPPRESS_SEND:
        current_app.logger.info(f"Email to {to_email} suppressed: {subject}")
        return True, None

    try:
        if not config.SMTP_USERNAME or not config.SMTP_PASSWORD:
            return False, "Email configuration is missing."

        msg = MIMEMultipart('alternative')
        msg['From'] = config.SMTP_FROM_EMAIL or config.SMTP_USERNAME
        msg['To'] = to_email
        msg['Subject'] = subject
        msg.attach(MIMEText(html_content, 'html', 'utf-8'))

        if config.SMTP_USE_SSL:
            server = smtplib.SMTP_SSL(config.SMTP_SERVER, config.SMTP_PORT, timeout=10)
        else:
            server = smtplib.SMTP(config.SMTP_SERVER, config.SMTP_PORT, timeout=10)
        with server:
            if config.SMTP_USE_TLS and not config.SMTP_USE_SSL:
                server.starttls()
            server.login(config.SMTP_USERNAME, config.SMTP_PASSWORD)
            server.send_message(msg)

        current_app.logger.info(f"Email '{subject}' sent successfully to {to_email}")
        return True, None

    except smtplib.SMTPAuthenticationError as e:
        error_msg = f"SMTP authentication failed: {str(e)}"
        current_app.logger.error(error_msg)
        return False, error_msg
    except (smtplib.SMTPException, OSError) as e:
        error_msg = f"Failed to send email: {str(e)}"
        current_app.logger.error(error_msg)
        return False, error_msg


def send_email(to_email: Optional[str], template_id: str, locale: str, variables: dict,
               async_send: Optional[bool] = None) -> tuple[bool, Optional[str]]:
    """
    Render and send an email to the user.

    Args:
        to_email: Recipient email address; nothing is sent when empty
        template_id: One of EMAIL_SUBJECTS
        locale: 'en' or 'ar'
        variables: Template variables (name, token, frontend_url)
        async_send: If True, send in a background thread and return immediately.
            Defaults to the EMAIL_ASYNC setting.

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not to_email:
        return False, "No recipient"

    subject, html_content = render_email(template_id, locale, variables)

    if async_send is None:
        async_send = config.EMAIL_ASYNC

    if async_send:
        app = current_app._get_current_object()

        def send_in_background():
            with app.app_context():
                ok, error = _send_email_sync(to_email, subject, html_content)
                if not ok:
                    app.logger.error(f"Background email sending failed: {error}")

        thread = threading.Thread(target=send_in_background, daemon=True)
        thread.start()
        return True, None

    return _send_email_sync(to_email, subject, html_content)
