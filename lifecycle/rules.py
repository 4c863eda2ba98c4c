"""Status transition rules for custom requests and projects.

Pure functions over status values: they never touch the database. Each check
either returns (``True`` for a real change, ``False`` for a same-status no-op)
or raises a lifecycle error.

Custom request::

    pending ──► reviewing ──► approved ──► converted   (payment only)
       │            │
       ├──► approved└──► rejected
       └──► rejected

Project::

    pending ──► in_progress ──► review ──► completed   (one step at a time)
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from custom_requests.models import CustomRequest
from projects.models import Project

from .exceptions import AlreadyConverted, InvalidState, MissingField, NotAuthorized

RequestStatus = CustomRequest.Status
ProjectStatus = Project.Status

REQUEST_TRANSITIONS = {
    RequestStatus.PENDING.value: frozenset(
        {RequestStatus.REVIEWING.value, RequestStatus.APPROVED.value, RequestStatus.REJECTED.value}
    ),
    RequestStatus.REVIEWING.value: frozenset(
        {RequestStatus.APPROVED.value, RequestStatus.REJECTED.value}
    ),
    RequestStatus.APPROVED.value: frozenset({RequestStatus.CONVERTED.value}),
    RequestStatus.REJECTED.value: frozenset(),
    RequestStatus.CONVERTED.value: frozenset(),
}

PROJECT_FLOW = (
    ProjectStatus.PENDING.value,
    ProjectStatus.IN_PROGRESS.value,
    ProjectStatus.REVIEW.value,
    ProjectStatus.COMPLETED.value,
)


def require_admin(actor, action: str) -> None:
    if not actor.is_admin:
        raise NotAuthorized(f"Only admin staff users may {action}.")


def parse_approved_price(value) -> Decimal:
    """Return the price as a Decimal; missing, non-numeric or <= 0 is rejected."""
    if value is None or value == "":
        raise MissingField("approved_price", "An approved price is required to approve a request.")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise MissingField("approved_price", "The approved price must be a number.")
    if not price.is_finite() or price <= 0:
        raise MissingField("approved_price", "The approved price must be greater than 0.")
    return price


def check_admin_request_transition(current: str, target: str) -> bool:
    """Validate an admin status change on a custom request."""
    if target not in REQUEST_TRANSITIONS:
        raise InvalidState(f"Unknown request status '{target}'.")
    if target == RequestStatus.CONVERTED:
        if current == RequestStatus.CONVERTED:
            raise AlreadyConverted()
        raise InvalidState("A request is converted by the client's payment, not by an admin.")
    if target == current:
        return False
    if target not in REQUEST_TRANSITIONS.get(current, frozenset()):
        raise InvalidState(f"Cannot move a request from '{current}' to '{target}'.")
    return True


def check_conversion(current: str, approved_price) -> None:
    """Validate that a request can be converted into a project."""
    if current == RequestStatus.CONVERTED:
        raise AlreadyConverted()
    if current != RequestStatus.APPROVED:
        raise InvalidState(f"Only approved requests can be paid; this one is '{current}'.")
    if approved_price is None or approved_price <= 0:
        raise MissingField("approved_price", "The request has no approved price.")


def next_project_status(current: str) -> Optional[str]:
    """The only status a project may move to next, or None once completed."""
    try:
        index = PROJECT_FLOW.index(current)
    except ValueError:
        raise InvalidState(f"Unknown project status '{current}'.")
    if index + 1 < len(PROJECT_FLOW):
        return PROJECT_FLOW[index + 1]
    return None


def check_project_transition(current: str, target: str) -> bool:
    """Accept only the single next step (or the current status as a no-op)."""
    if target not in PROJECT_FLOW:
        raise InvalidState(f"Unknown project status '{target}'.")
    if target == current:
        return False
    expected = next_project_status(current)
    if target != expected:
        if expected is None:
            raise InvalidState("A completed project cannot change status.")
        raise InvalidState(
            f"Projects move one step at a time: '{current}' can only go to '{expected}'."
        )
    return True


def project_progress(current: str) -> int:
    """Delivery progress in percent (25 per stage)."""
    return (PROJECT_FLOW.index(current) + 1) * 100 // len(PROJECT_FLOW)
