"""Application request/response schemas and per-type detail variants."""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, Field, field_validator


class ApplicationType(str, Enum):
    CUSTOMER_REGISTRATION = "customer_registration"
    CUSTOMER_CHANGE = "customer_change"
    FACILITY_RESERVATION = "facility_reservation"
    PROPOSAL = "proposal"


class ApplicationStatus(str, Enum):
    UNPROCESSED = "unprocessed"
    PROCESSING = "processing"
    PROCESSED = "processed"
    RETURNED = "returned"
    CANCELLED = "cancelled"


APPLICATION_TYPE_LABELS = {
    ApplicationType.CUSTOMER_REGISTRATION: "Customer registration",
    ApplicationType.CUSTOMER_CHANGE: "Customer information change",
    ApplicationType.FACILITY_RESERVATION: "Facility reservation",
    ApplicationType.PROPOSAL: "Event proposal",
}

CUSTOMER_REGISTRATION_LABELS = {
    "salon_type": "Salon type",
    "personal_account": "Personal account",
    "customer_name_full": "Customer name (official)",
    "customer_name_short": "Customer name (short)",
    "zip_code": "Postal code",
    "address1": "Address 1",
    "address2": "Address 2",
    "phone": "Phone",
    "fax": "Fax",
    "representative_name": "Representative",
    "contact_person": "Contact person",
    "closing_day": "Closing day",
    "email": "E-mail",
    "billing_target": "Billing target",
    "billing_customer_name": "Billing customer name",
    "billing_customer_code": "Billing customer code",
    "include_personal_account_in_billing": "Bill personal account to another customer",
    "remarks": "Remarks",
}

CUSTOMER_CHANGE_LABELS = {
    "effective_date": "Effective date",
    "contact_person": "Contact person",
    "customer_code_before": "Current customer code",
    "customer_name_before": "Current customer name",
    "customer_name_full_after": "New customer name (official)",
    "customer_name_short_after": "New customer name (short)",
    "salon_type": "Salon type",
    "zip_code": "Postal code",
    "address1": "Address 1",
    "address2": "Address 2",
    "phone": "Phone",
    "fax": "Fax",
    "representative_name": "Representative",
    "closing_day": "Closing day",
    "email": "E-mail",
    "billing_target": "Billing target",
    "billing_customer_name": "Billing customer name",
    "billing_customer_code": "Billing customer code",
    "remarks": "Remarks",
}

FACILITY_RESERVATION_LABELS = {
    "applicant": "Applicant",
    "usage_date": "Date of use",
    "facility": "Facility",
    "equipment": "Equipment",
    "start_time": "Start time",
    "end_time": "End time",
    "purpose": "Purpose",
}

PROPOSAL_LABELS = {
    "proposal_year": "Proposal year",
    "proposals": "Proposals",
}

DETAIL_LABELS: dict[ApplicationType, dict[str, str]] = {
    ApplicationType.CUSTOMER_REGISTRATION: CUSTOMER_REGISTRATION_LABELS,
    ApplicationType.CUSTOMER_CHANGE: CUSTOMER_CHANGE_LABELS,
    ApplicationType.FACILITY_RESERVATION: FACILITY_RESERVATION_LABELS,
    ApplicationType.PROPOSAL: PROPOSAL_LABELS,
}

_ZIP_RE = re.compile(r"^\d{7}$")


class _Details(BaseModel):
    model_config = {"extra": "allow"}

    @field_validator("zip_code", check_fields=False)
    @classmethod
    def check_zip_code(cls, v: str | None) -> str | None:
        if v and not _ZIP_RE.match(v):
            raise ValueError("zip_code must be 7 digits")
        return v


class CustomerRegistrationDetails(_Details):
    customer_name_full: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    salon_type: str | None = None
    personal_account: str | None = None
    customer_name_short: str | None = None
    zip_code: str | None = None
    address1: str | None = None
    address2: str | None = None
    phone: str | None = None
    fax: str | None = None
    representative_name: str | None = None
    closing_day: str | None = None
    email: str | None = None
    billing_target: str | None = None
    billing_customer_name: str | None = None
    billing_customer_code: str | None = None
    include_personal_account_in_billing: str | None = None
    remarks: str | None = None


class CustomerChangeDetails(_Details):
    effective_date: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    customer_code_before: str = Field(min_length=1)
    customer_name_before: str = Field(min_length=1)
    customer_name_full_after: str | None = None
    customer_name_short_after: str | None = None
    salon_type: str | None = None
    zip_code: str | None = None
    address1: str | None = None
    address2: str | None = None
    phone: str | None = None
    fax: str | None = None
    representative_name: str | None = None
    closing_day: str | None = None
    email: str | None = None
    billing_target: str | None = None
    billing_customer_name: str | None = None
    billing_customer_code: str | None = None
    remarks: str | None = None


class FacilityReservationDetails(_Details):
    applicant: str = Field(min_length=1)
    usage_date: str = Field(min_length=1)
    facility: str = Field(min_length=1)
    start_time: str = Field(min_length=1)
    end_time: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    equipment: str | None = None


class ProposalItemIn(BaseModel):
    """One proposed event."""

    event_name: str = Field(min_length=1)
    timing: str = Field(min_length=1)
    type: str = Field(min_length=1)
    content: str = Field(min_length=1)


class ProposalApplicationDetails(_Details):
    proposal_year: str = Field(pattern=r"^\d{4}$")
    proposals: list[ProposalItemIn] = Field(min_length=1)


class _ApplicationCreate(BaseModel):
    applicant_name: str = Field(min_length=1, max_length=255)
    title: str = Field(min_length=1, max_length=255)


class CustomerRegistrationCreate(_ApplicationCreate):
    application_type: Literal["customer_registration"]
    details: CustomerRegistrationDetails


class CustomerChangeCreate(_ApplicationCreate):
    application_type: Literal["customer_change"]
    details: CustomerChangeDetails


class FacilityReservationCreate(_ApplicationCreate):
    application_type: Literal["facility_reservation"]
    details: FacilityReservationDetails


class ProposalApplicationCreate(_ApplicationCreate):
    application_type: Literal["proposal"]
    details: ProposalApplicationDetails


# Tagged on application_type; the router passes the discriminator to Body()
ApplicationCreate = Union[
    CustomerRegistrationCreate,
    CustomerChangeCreate,
    FacilityReservationCreate,
    ProposalApplicationCreate,
]


class DetailItem(BaseModel):
    label: str
    value: str


def _display_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, list):
        return ", ".join(_display_value(v) for v in value)
    if isinstance(value, dict):
        return ", ".join(f"{k}: {_display_value(v)}" for k, v in value.items())
    return str(value)


def detail_items(application_type: str, details: dict[str, Any]) -> list[DetailItem]:
    """Render stored details as labelled rows.

    Known keys get their label from the per-type table; unknown keys are
    kept with the raw key as label. Proposal items expand to one row each.
    """
    try:
        labels = DETAIL_LABELS[ApplicationType(application_type)]
    except ValueError:
        labels = {}
    items: list[DetailItem] = []
    for key, value in details.items():
        if key == "proposals" and isinstance(value, list):
            for i, proposal in enumerate(value, start=1):
                if isinstance(proposal, dict):
                    text = " / ".join(
                        str(proposal.get(k, ""))
                        for k in ("event_name", "timing", "type", "content")
                    )
                else:
                    text = _display_value(proposal)
                items.append(DetailItem(label=f"Proposal {i}", value=text))
            continue
        items.append(DetailItem(label=labels.get(key, key), value=_display_value(value)))
    return items


class ApplicationOut(BaseModel):
    id: int
    application_type: str
    application_type_label: str
    applicant_name: str
    title: str
    details: dict[str, Any]
    detail_items: list[DetailItem]
    submitted_at: datetime
    status: str
    processed_by: str | None
    processed_at: datetime | None

    @classmethod
    def from_row(cls, row) -> "ApplicationOut":
        try:
            type_label = APPLICATION_TYPE_LABELS[ApplicationType(row.application_type)]
        except ValueError:
            type_label = row.application_type
        return cls(
            id=row.id,
            application_type=row.application_type,
            application_type_label=type_label,
            applicant_name=row.applicant_name,
            title=row.title,
            details=row.details,
            detail_items=detail_items(row.application_type, row.details),
            submitted_at=row.submitted_at,
            status=row.status,
            processed_by=row.processed_by,
            processed_at=row.processed_at,
        )


class ApplicationCreated(BaseModel):
    id: int
    message: str
    notification_sent: bool
    warnings: list[str] = Field(default_factory=list)


class StatusChangeRequest(BaseModel):
    """PUT /v1/applications/{id} request."""

    status: ApplicationStatus | None = None
    processed_by: str | None = Field(default=None, min_length=1, max_length=255)
    confirmed: bool = False


class PendingCount(BaseModel):
    count: int
