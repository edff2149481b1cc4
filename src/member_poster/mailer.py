"""Designation-specific poster emails sent over SMTP."""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from html import escape
from pathlib import Path

from .config import MailSettings
from .constants import BRAND_NAME
from .errors import MailDeliveryError
from .models import Member, slugify

logger = logging.getLogger(__name__)

POSTER_CID = "personalizedCard"

_HEALTH = "health"
_WEALTH = "wealth"


def _category(designation: str) -> str | None:
    lower = designation.lower()
    if _HEALTH in lower:
        return _HEALTH
    if _WEALTH in lower:
        return _WEALTH
    return None


def generate_subject(designation: str) -> str:
    category = _category(designation)
    if category == _HEALTH:
        return "Reach More Families – Build Trust in Health Planning 💡"
    if category == _WEALTH:
        return "This Simple Step Can Boost Your Wealth Advisory Reach 📈"
    return "Your Clients Trust You – Here’s a Way to Grow That Trust 🤝"


_INTRO = {
    _HEALTH: "Your expertise in protecting families is more valuable than ever.",
    _WEALTH: "Financial confidence begins with trust, and you are the bridge to that confidence.",
    None: "You help your clients build both security and prosperity. Now it's time to amplify your impact.",
}

_BENEFIT = {
    _HEALTH: (
        "This message reminds families of the power of proactive health planning. "
        "When shared consistently, it builds confidence and connections."
    ),
    _WEALTH: (
        "This message highlights smart monthly income and long-term growth, "
        "a perfect conversation starter with new and existing clients."
    ),
    None: (
        "This message touches both financial growth and health security, "
        "a tool that opens doors for deeper client relationships."
    ),
}

_PARAGRAPH = '<p style="font-size: 16px; line-height: 1.6; color: #444;">{}</p>'


def generate_email_html(member: Member, brand: str = BRAND_NAME) -> str:
    """Build the HTML body; the poster is referenced inline by content id."""
    category = _category(member.designation)
    name = escape(member.name)
    brand_html = escape(brand)
    paragraphs = [
        _INTRO[category],
        "We've created a professional visual tool personalized just for you, not just for display, "
        "but to <strong>spark client conversations and drive trust</strong>.",
        _BENEFIT[category],
        "You can forward this to your customers, share it on WhatsApp, or use it during client "
        "meetings. The possibilities are endless when trust is visual.",
    ]
    return "\n".join(
        [
            '<div style="font-family: Arial, sans-serif; max-width: 640px; margin: 0 auto; '
            'background-color: #ffffff; padding: 24px; border-radius: 10px; border: 1px solid #e0e0e0;">',
            f'<h2 style="color: #2b2b2b; text-align: center;">Hello {name},</h2>',
            *(_PARAGRAPH.format(p) for p in paragraphs),
            '<div style="margin: 20px 0; text-align: center;">',
            f'<img src="cid:{POSTER_CID}" alt="Poster" '
            'style="max-width: 100%; border-radius: 8px; border: 1px solid #ccc;" />',
            "</div>",
            '<div style="font-size: 14px; color: #666; line-height: 1.6; margin-top: 20px;">',
            "<strong>Your Info:</strong><br/>",
            f"Name: {name}<br/>",
            f"Designation: {escape(member.designation)}<br/>",
            f"Phone: {escape(member.phone)}<br/>",
            f"Email: {escape(member.email)}<br/>",
            f"Company: <strong>{brand_html}</strong>",
            "</div>",
            '<p style="font-size: 14px; color: #888; text-align: center; margin-top: 30px;">',
            "Stay consistent. Share with confidence. Build stronger relationships.<br/>",
            f"<strong>{brand_html} Team</strong>",
            "</p>",
            "</div>",
        ]
    )


def poster_attachment_name(member: Member, brand: str = BRAND_NAME, extension: str = "jpg") -> str:
    return f"{slugify(brand, 'poster')}-poster-{slugify(member.name)}.{extension}"


def build_message(
    member: Member,
    poster_bytes: bytes,
    settings: MailSettings,
    brand: str = BRAND_NAME,
    extension: str = "jpg",
) -> EmailMessage:
    """Assemble the email with the poster as an inline related image."""
    message = EmailMessage()
    message["From"] = settings.sender
    message["To"] = member.email
    message["Subject"] = generate_subject(member.designation)
    message["Message-ID"] = make_msgid(domain=settings.sender.rpartition("@")[2] or None)

    message.set_content(
        f"Hello {member.name},\n\n"
        f"Your personalized {brand} poster is attached.\n"
    )
    message.add_alternative(generate_email_html(member, brand), subtype="html")
    html_part = message.get_payload()[1]
    html_part.add_related(
        poster_bytes,
        maintype="image",
        subtype="jpeg" if extension in ("jpg", "jpeg") else extension,
        cid=f"<{POSTER_CID}>",
        disposition="inline",
        filename=poster_attachment_name(member, brand, extension),
    )
    return message


class Mailer:
    """Sends poster emails through one SMTP account."""

    def __init__(self, settings: MailSettings, brand: str = BRAND_NAME, timeout: float = 30.0):
        self.settings = settings
        self.brand = brand
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        if self.settings.port == 587:
            client = smtplib.SMTP(self.settings.host, self.settings.port, timeout=self.timeout)
            client.starttls()
        else:
            client = smtplib.SMTP_SSL(self.settings.host, self.settings.port, timeout=self.timeout)
        client.login(self.settings.sender, self.settings.password)
        return client

    def verify(self) -> bool:
        """Return True when the SMTP account accepts a login."""
        try:
            with self._connect():
                pass
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email configuration check failed: %s", e)
            return False
        return True

    def send(self, member: Member, poster_path: str | Path) -> None:
        """
        Email the poster to the member.

        Raises:
            MailDeliveryError: If the poster cannot be read or SMTP fails
        """
        try:
            poster_bytes = Path(poster_path).read_bytes()
        except OSError as e:
            raise MailDeliveryError(f"Cannot read poster '{poster_path}': {e}") from e

        extension = Path(poster_path).suffix.lower().lstrip(".") or "jpg"
        message = build_message(member, poster_bytes, self.settings, self.brand, extension)
        try:
            with self._connect() as client:
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"Email to {member.email} failed: {e}") from e
        logger.info("Email sent to %s", member.email)
