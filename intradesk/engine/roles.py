"""Role ordering and per-form eligibility."""

from enum import Enum
from typing import Iterable, Protocol, TypeVar

from intradesk.schemas.settings import AppSettings
from intradesk.schemas.user import Role


class UserLike(Protocol):
    id: int
    role: str
    is_trainee: bool
    is_active: bool


U = TypeVar("U", bound=UserLike)


class Feature(str, Enum):
    CUSTOMER = "customer"
    RESERVATION = "reservation"
    EVALUATION = "evaluation"
    PROPOSAL = "proposal"


# (role, is_trainee) -> rank; anything unlisted sorts last
ROLE_RANK: dict[tuple[str, bool], int] = {
    (Role.PRESIDENT.value, False): 1,
    (Role.SALES.value, False): 2,
    (Role.CLERICAL.value, False): 3,
    (Role.SALES.value, True): 4,
    (Role.CLERICAL.value, True): 5,
}
UNKNOWN_RANK = 99


def role_rank(user: UserLike) -> int:
    return ROLE_RANK.get((user.role, bool(user.is_trainee)), UNKNOWN_RANK)


def sort_key(user: UserLike) -> tuple[int, int]:
    return role_rank(user), user.id


def sort_users(users: Iterable[U]) -> list[U]:
    """Order users president first, trainees after regular staff, then by id."""
    return sorted(users, key=sort_key)


def _gate(settings: AppSettings, feature: Feature) -> tuple[list[str], bool]:
    prefix = feature.value
    return (
        getattr(settings, f"{prefix}_allowed_roles"),
        getattr(settings, f"{prefix}_include_trainees"),
    )


def is_eligible(user: UserLike, feature: Feature, settings: AppSettings) -> bool:
    """Whether `user` may use the form for `feature`.

    An empty allowed-role list means the form is not restricted by role.
    """
    if not user.is_active:
        return False
    allowed_roles, include_trainees = _gate(settings, feature)
    if user.is_trainee and not include_trainees:
        return False
    return not allowed_roles or user.role in allowed_roles


def eligible_users(users: Iterable[U], feature: Feature, settings: AppSettings) -> list[U]:
    """Eligible users in ascending id order."""
    return sorted(
        (u for u in users if is_eligible(u, feature, settings)),
        key=lambda u: u.id,
    )


def visible_menu(user: UserLike, settings: AppSettings) -> dict[str, bool]:
    menu = {feature.value: is_eligible(user, feature, settings) for feature in Feature}
    menu["is_evaluation_open"] = settings.is_evaluation_open
    menu["is_proposal_open"] = settings.is_proposal_open
    return menu
