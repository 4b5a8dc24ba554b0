"""
NotificationService - outbound email.

Sends the invitation email that carries a verification link. Delivery goes
through the SMTP server configured by SMTP_HOST / SMTP_PORT / SMTP_TLS /
SMTP_USERNAME / SMTP_PASSWORD. A delivery failure never raises: the caller
gets False and the failure is logged, so that an unreachable mail server
cannot undo an already committed invitation.
"""

import logging
import smtplib
from email.message import EmailMessage

from flask import current_app, render_template_string

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = 'Invitation to Join {company_name}'

INVITATION_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; color: #333;">
  <div style="background-color: #4CAF50; color: white; padding: 20px; text-align: center;">
    <h2 style="margin: 0;">{{ inviter_name }} has invited you to join {{ company_name }}</h2>
  </div>
  <div style="padding: 20px;">
    <p style="font-size: 16px;">Hi {{ first_name }}, {{ inviter_name }} has invited you to join
      <strong>{{ company_name }}</strong> on the {{ platform_name }} platform. Do your best work:</p>
    <ul style="list-style: none; padding: 0;">
      <li style="margin-bottom: 10px;">View your schedule and get notified of changes</li>
      <li style="margin-bottom: 10px;">Access job details and checklists</li>
      <li style="margin-bottom: 10px;">Add notes and photos from the job site</li>
      <li style="margin-bottom: 10px;">Track your work hours</li>
    </ul>
    <p style="font-size: 16px;">Click below to finish your profile setup and join your team!</p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{{ link }}" style="background-color: #4CAF50; color: white; padding: 14px 28px;
         text-decoration: none; border-radius: 4px; font-size: 16px;">Accept the Invitation</a>
    </div>
  </div>
</div>
"""

INVITATION_TEXT = (
    "Hi {first_name}, {inviter_name} has invited you to join {company_name} "
    "on the {platform_name} platform.\n\n"
    "Accept the invitation: {link}\n"
)


class NotificationService:
    """Invitation and verification emails."""

    @staticmethod
    def build_verification_link(token: str) -> str:
        base_url = current_app.config['FRONTEND_URL'].rstrip('/')
        return f"{base_url}/auth/verify/{token}"

    @staticmethod
    def build_invitation_message(
        email: str,
        token: str,
        first_name: str,
        company_name: str,
        inviter_name: str
    ) -> EmailMessage:
        """
        Render the invitation email for one recipient.

        Args:
            email: Recipient address
            token: Verification token embedded in the accept link
            first_name: Recipient's first name
            company_name: Company the recipient is invited to
            inviter_name: Full name of the inviting administrator

        Returns:
            EmailMessage with a plain-text part and an HTML alternative
        """
        config = current_app.config
        context = {
            'first_name': first_name or '',
            'company_name': company_name or '',
            'inviter_name': inviter_name or '',
            'platform_name': config.get('PLATFORM_NAME', 'Adrevolution'),
            'link': NotificationService.build_verification_link(token),
        }

        msg = EmailMessage()
        msg['Subject'] = INVITATION_SUBJECT.format(company_name=context['company_name'])
        msg['From'] = config.get('MAIL_FROM') or config.get('SMTP_USERNAME')
        msg['To'] = email
        msg.set_content(INVITATION_TEXT.format(**context))
        msg.add_alternative(render_template_string(INVITATION_TEMPLATE, **context), subtype='html')
        return msg

    @staticmethod
    def send(msg: EmailMessage) -> bool:
        """
        Deliver msg over SMTP.

        Returns:
            True if the server accepted the message, False if mail is disabled
            or delivery failed
        """
        config = current_app.config
        if not config.get('MAIL_ENABLED', True):
            logger.info(f"Mail disabled; not sending '{msg['Subject']}' to {msg['To']}")
            return False

        host = config.get('SMTP_HOST')
        if not host or not msg['From']:
            logger.warning(f"SMTP is not configured; cannot send '{msg['Subject']}' to {msg['To']}")
            return False

        username = config.get('SMTP_USERNAME')
        password = config.get('SMTP_PASSWORD')
        try:
            with smtplib.SMTP(host, config.get('SMTP_PORT', 587),
                              timeout=config.get('SMTP_TIMEOUT', 10)) as s:
                if config.get('SMTP_TLS', True):
                    s.starttls()
                if username and password:
                    s.login(username, password)
                s.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning(f"Failed to send '{msg['Subject']}' to {msg['To']}: {str(e)}")
            return False

        logger.info(f"Sent '{msg['Subject']}' to {msg['To']}")
        return True

    @staticmethod
    def send_invitation(
        email: str,
        token: str,
        first_name: str,
        company_name: str,
        inviter_name: str
    ) -> bool:
        msg = NotificationService.build_invitation_message(
            email, token, first_name, company_name, inviter_name
        )
        return NotificationService.send(msg)
