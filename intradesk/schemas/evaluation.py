"""Evaluation request/response schemas."""

import re
from datetime import datetime
from typing import Annotated, NamedTuple

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator


class EvaluationItem(NamedTuple):
    key: str
    label: str
    max_score: int


EVALUATION_ITEMS: tuple[EvaluationItem, ...] = (
    EvaluationItem("accuracy", "Accuracy", 5),
    EvaluationItem("discipline", "Discipline", 5),
    EvaluationItem("cooperation", "Cooperation", 5),
    EvaluationItem("proactiveness", "Proactiveness", 5),
    EvaluationItem("agility", "Agility", 5),
    EvaluationItem("judgment", "Judgment", 5),
    EvaluationItem("expression", "Expression", 5),
    EvaluationItem("comprehension", "Comprehension", 5),
    EvaluationItem("interpersonal", "Interpersonal skills", 5),
    EvaluationItem("potential", "Potential", 10),
)
ITEM_KEYS = tuple(item.key for item in EVALUATION_ITEMS)
ITEM_LABELS = {item.key: item.label for item in EVALUATION_ITEMS}
ITEM_MAX = {item.key: item.max_score for item in EVALUATION_ITEMS}
MIN_ITEM_SCORE = 1
MAX_TOTAL_SCORE = sum(ITEM_MAX.values())

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_month(value: str) -> str:
    """Check the zero-padded YYYY-MM grouping key."""
    if not _MONTH_RE.match(value):
        raise ValueError("evaluation_month must be formatted YYYY-MM")
    return value


Month = Annotated[str, AfterValidator(validate_month)]


class EvaluationCreate(BaseModel):
    """POST /v1/evaluations request."""

    evaluator_name: str = Field(min_length=1)
    target_employee_name: str = Field(min_length=1)
    evaluation_month: Month
    scores: dict[str, int]
    total_score: int
    comment: str | None = None

    @field_validator("scores")
    @classmethod
    def check_items(cls, scores: dict[str, int]) -> dict[str, int]:
        missing = [k for k in ITEM_KEYS if k not in scores]
        unknown = [k for k in scores if k not in ITEM_MAX]
        if missing or unknown:
            raise ValueError(
                f"scores must contain exactly {', '.join(ITEM_KEYS)}"
                f" (missing: {missing}, unknown: {unknown})"
            )
        for key, value in scores.items():
            if not MIN_ITEM_SCORE <= value <= ITEM_MAX[key]:
                raise ValueError(f"{key} must be between {MIN_ITEM_SCORE} and {ITEM_MAX[key]}")
        return scores

    @model_validator(mode="after")
    def check_total(self):
        if self.total_score != sum(self.scores.values()):
            raise ValueError("total_score must equal the sum of scores")
        return self


class EvaluationOut(BaseModel):
    """Stored evaluation."""

    model_config = {"from_attributes": True}

    id: int
    evaluator_name: str
    target_employee_name: str
    evaluation_month: str
    total_score: int
    comment: str | None
    scores: dict[str, int] = Field(validation_alias="scores_json")
    submitted_at: datetime
