"""Proposal and submission-history schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from intradesk.schemas.application import ProposalItemIn


class ProposalSubmission(BaseModel):
    """POST /v1/proposals request - every item becomes its own row."""

    proposer_name: str = Field(min_length=1, max_length=255)
    proposal_year: str = Field(pattern=r"^\d{4}$")
    proposals: list[ProposalItemIn] = Field(min_length=1)


class ProposalOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    proposer_name: str
    proposal_year: str
    event_name: str
    timing: str
    type: str
    content: str
    submitted_at: datetime


class ProposalsCreated(BaseModel):
    ids: list[int]
    message: str
    notification_sent: bool
    warnings: list[str] = Field(default_factory=list)


class EvaluationSubmission(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    submitted_at: datetime
    evaluator_name: str
    target_employee_name: str


class ProposalSubmissionSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    submitted_at: datetime
    proposer_name: str
    event_name: str
