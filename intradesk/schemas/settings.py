"""Typed view over the stored settings document."""

from datetime import date

from pydantic import BaseModel, Field


def _current_year() -> str:
    return str(date.today().year)


def _current_month() -> str:
    return str(date.today().month)


class AppSettings(BaseModel):
    """Feature flags, deadlines, role gates and notification lists.

    The stored document is kept verbatim; this model only reads it, filling
    defaults for keys that were never saved. Unknown keys are ignored here
    but survive in storage.
    """

    model_config = {"extra": "ignore"}

    customer_emails: list[str] = Field(default_factory=list)
    reservation_emails: list[str] = Field(default_factory=list)
    proposal_emails: list[str] = Field(default_factory=list)

    is_proposal_open: bool = True
    proposal_deadline: str = ""
    proposal_year: str = Field(default_factory=_current_year)

    customer_allowed_roles: list[str] = Field(default_factory=list)
    reservation_allowed_roles: list[str] = Field(default_factory=list)
    evaluation_allowed_roles: list[str] = Field(default_factory=list)
    proposal_allowed_roles: list[str] = Field(default_factory=list)

    customer_include_trainees: bool = False
    reservation_include_trainees: bool = False
    evaluation_include_trainees: bool = False
    proposal_include_trainees: bool = False

    evaluation_targets: list[str] = Field(default_factory=list)
    is_evaluation_open: bool = True
    evaluation_month: str = Field(default_factory=_current_month)
    evaluation_deadline: str = ""


class SettingsSaved(BaseModel):
    message: str
