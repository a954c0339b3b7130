"""
Contact-form API endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.config import Settings
from core.dependencies import get_mailer, get_settings

from . import service
from .mailer import Mailer
from .schemas import ContactMessage

router = APIRouter()


@router.post("/email")
async def send_email(
    request: ContactMessage,
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
) -> dict:
    await service.send_contact_message(request, settings=settings, mailer=mailer)
    return {"message": "Email sent successfully"}
