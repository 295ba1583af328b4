"""Outbound notification mail."""

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Sequence

from fastapi.concurrency import run_in_threadpool

from intradesk.config import Settings, settings
from intradesk.schemas.application import (
    APPLICATION_TYPE_LABELS,
    ApplicationType,
    detail_items,
)

logger = logging.getLogger(__name__)


class MailNotConfigured(Exception):
    pass


def header_value(value: str) -> str:
    """Collapse line breaks so user text cannot add header lines."""
    return " ".join(value.splitlines()).strip()


@dataclass
class NotificationResult:
    sent: bool
    warning: str | None = None


class Mailer:
    """Thin SMTP client. Sending blocks, so `send` runs it in the threadpool."""

    def __init__(self, config: Settings = settings):
        self.config = config

    @property
    def configured(self) -> bool:
        return bool(self.config.smtp_host and (self.config.mail_from or self.config.smtp_username))

    def _build(self, recipients: Sequence[str], subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.config.mail_from or self.config.smtp_username
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = header_value(f"{self.config.mail_subject_prefix}{subject}")
        msg.set_content(body)
        return msg

    def _send_sync(self, msg: EmailMessage) -> None:
        cfg = self.config
        with smtplib.SMTP(cfg.smtp_host, cfg.smtp_port, timeout=cfg.smtp_timeout) as smtp:
            if cfg.smtp_use_tls:
                smtp.starttls()
            if cfg.smtp_username and cfg.smtp_password:
                smtp.login(cfg.smtp_username, cfg.smtp_password)
            smtp.send_message(msg)

    async def send(self, recipients: Sequence[str], subject: str, body: str) -> None:
        """Send or raise (MailNotConfigured, ValueError, smtplib.SMTPException, OSError)."""
        if not self.configured:
            raise MailNotConfigured("SMTP host or sender address is not configured")
        msg = self._build(recipients, subject, body)
        await run_in_threadpool(self._send_sync, msg)
        logger.info("Mail sent to %d recipient(s): %s", len(recipients), subject)

    async def notify(self, recipients: Sequence[str], subject: str, body: str) -> NotificationResult:
        """Best-effort send. Failures are logged and reported, never raised."""
        recipients = [r for r in recipients if r]
        if not recipients:
            logger.info("No recipients configured for '%s'; skipping mail", subject)
            return NotificationResult(sent=False)
        try:
            await self.send(recipients, subject, body)
        except MailNotConfigured as exc:
            logger.warning("Notification '%s' not sent: %s", subject, exc)
            return NotificationResult(sent=False, warning=f"Notification not sent: {exc}")
        except ValueError as exc:
            logger.error("Notification '%s' has an invalid header: %s", subject, exc)
            return NotificationResult(sent=False, warning="Notification e-mail could not be built")
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Notification '%s' failed: %s", subject, exc)
            return NotificationResult(sent=False, warning="Notification e-mail could not be delivered")
        return NotificationResult(sent=True)


def application_mail_body(application_type: str, applicant_name: str, details: dict[str, Any]) -> str:
    try:
        type_label = APPLICATION_TYPE_LABELS[ApplicationType(application_type)]
    except ValueError:
        type_label = application_type
    lines = [f"Application type: {type_label}", f"Applicant: {applicant_name}", ""]
    if application_type == ApplicationType.PROPOSAL.value and isinstance(details.get("proposals"), list):
        lines.append(f"Proposal year: {details.get('proposal_year', '')}")
        lines.append("")
        lines.extend(proposal_lines(details["proposals"]))
    else:
        lines.extend(f"{item.label}: {item.value}" for item in detail_items(application_type, details))
    return "\n".join(lines).rstrip() + "\n"


def proposal_lines(items: Sequence[dict[str, Any]]) -> list[str]:
    lines = []
    for i, item in enumerate(items, start=1):
        lines.append(f"--- Proposal {i} ---")
        lines.append(f"Event name: {item.get('event_name', '')}")
        lines.append(f"Timing: {item.get('timing', '')}")
        lines.append(f"Type: {item.get('type', '')}")
        lines.append(f"Content: {item.get('content', '')}")
        lines.append("")
    return lines


def proposal_mail_body(proposer_name: str, proposal_year: str, items: Sequence[dict[str, Any]]) -> str:
    lines = [f"Proposer: {proposer_name}", f"Proposal year: {proposal_year}", ""]
    lines.extend(proposal_lines(items))
    return "\n".join(lines).rstrip() + "\n"


mailer = Mailer()


def get_mailer() -> Mailer:
    """Dependency returning the process-wide mailer."""
    return mailer
