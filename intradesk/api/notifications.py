"""Ad-hoc notification mail endpoint."""

import logging
import smtplib
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from intradesk.errors import DeliveryFailed, ValidationFailed
from intradesk.services.mailer import Mailer, MailNotConfigured, get_mailer

logger = logging.getLogger(__name__)

router = APIRouter()


class EmailRequest(BaseModel):
    to: list[str] = Field(min_length=1)
    subject: str = Field(min_length=1)
    body: str


@router.post("/notifications/email")
async def send_email(body: EmailRequest, mailer: Annotated[Mailer, Depends(get_mailer)]):
    """Send a plain-text mail; delivery problems are reported, not swallowed."""
    recipients = [r for r in body.to if r]
    if not recipients:
        raise ValidationFailed("At least one recipient is required")
    try:
        await mailer.send(recipients, body.subject, body.body)
    except MailNotConfigured as exc:
        logger.error("Mail not sent: %s", exc)
        raise DeliveryFailed("Mail server is not configured") from exc
    except ValueError as exc:
        raise ValidationFailed(f"Invalid mail header: {exc}") from exc
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Mail to %s failed: %s", recipients, exc)
        raise DeliveryFailed("Failed to send mail") from exc
    return {"success": True, "message": "Mail sent"}
