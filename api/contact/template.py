"""
HTML rendering for contact-form notifications.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
CONTACT_TEMPLATE = "contact_message.html"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
    )


def message_to_html(message: str) -> Markup:
    """
    Escape the message and turn line breaks into <br>.
    """
    return Markup("<br>").join(message.splitlines())


def render_contact_email(*, sender_name: str, sender_email: str, subject: str, message: str) -> str:
    template = _environment().get_template(CONTACT_TEMPLATE)
    return template.render(
        subject=subject,
        sender=f"{sender_name} <{sender_email}>",
        sender_email=sender_email,
        message_html=message_to_html(message),
    )
