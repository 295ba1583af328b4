"""User directory schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    PRESIDENT = "president"
    SALES = "sales"
    CLERICAL = "clerical"


class UserCreate(BaseModel):
    """POST /v1/users request."""

    id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=255)
    role: Role = Role.CLERICAL
    is_trainee: bool = False
    is_active: bool = True


class UserUpdate(BaseModel):
    """PATCH /v1/users/{id} request - only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: Role | None = None
    is_trainee: bool | None = None
    is_active: bool | None = None


class UserOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    role: str
    is_trainee: bool
    is_active: bool


class MenuOut(BaseModel):
    """Which forms a user may see, and whether the time-boxed ones are open."""

    user_id: int
    customer: bool
    reservation: bool
    evaluation: bool
    proposal: bool
    is_evaluation_open: bool
    is_proposal_open: bool
    pending_count: int = 0
