"""
Listing moderation rules.

    draft -> pending -> approved
                     -> rejected -> pending

Admins may move a listing between any two states. Everyone else can only
create drafts and submit their own drafts (or rejected listings) for review.
"""
from typing import Optional
from app.models.property import PROPERTY_STATUSES
from app.utils.exceptions import AuthError, ValidationError

ADMIN_ROLE = "admin"
INITIAL_STATUS = "draft"

SUBMITTER_TRANSITIONS = {
    ("draft", "pending"),
    ("rejected", "pending"),
}


def _validate_status(status: str) -> None:
    if status not in PROPERTY_STATUSES:
        raise ValidationError(f"Invalid status '{status}'")


def resolve_initial_status(role: str, requested: Optional[str] = None) -> str:
    """Status a new listing starts in; client supplied values only count for admins"""
    if role != ADMIN_ROLE or requested is None:
        return INITIAL_STATUS
    _validate_status(requested)
    return requested


def can_transition(role: str, current: str, target: str) -> bool:
    if role == ADMIN_ROLE:
        return True
    return (current, target) in SUBMITTER_TRANSITIONS


def check_transition(role: str, current: str, target: str) -> None:
    _validate_status(target)
    if current == target:
        return
    if not can_transition(role, current, target):
        raise AuthError(
            f"Cannot move listing from '{current}' to '{target}'",
            forbidden=True,
        )
