"""Lifecycle actions.

Apply the transition rules to stored records. Every function takes the calling
``Actor`` explicitly, validates with ``lifecycle.rules`` and writes with
partial updates by id. Store errors are re-raised as ``RemoteFailure`` with
the original exception chained.

Conversion (request -> project) runs in one transaction. The project row
carries ``source_request`` as an idempotency key: if an earlier run created
the project but never marked the request converted, a retry reuses that
project instead of creating a second one.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from clients.models import Client
from custom_requests.models import CustomRequest
from projects.models import Project
from services.models import Service, category_label

from . import rules
from .exceptions import InvalidState, NotAuthorized, RemoteFailure

logger = logging.getLogger(__name__)


@contextmanager
def _store_call(operation: str):
    """Translate database errors into RemoteFailure."""
    try:
        yield
    except DatabaseError as exc:
        logger.exception("store_failure operation=%s", operation)
        raise RemoteFailure(f"The data store failed during {operation}.") from exc


# ------------------------------- custom requests -------------------------------

def submit_request(actor, **fields) -> CustomRequest:
    """Create a custom request in ``pending``; anonymous submissions carry no user."""
    with _store_call("request submission"):
        request_obj = CustomRequest.objects.create(
            user_id=actor.user_id,
            status=CustomRequest.Status.PENDING,
            approved_price=None,
            converted_project=None,
            **fields,
        )
    logger.info(
        "request_submitted id=%s category=%s user=%s",
        request_obj.id,
        request_obj.category,
        actor.user_id,
    )
    return request_obj


def transition_request(actor, request_obj: CustomRequest, target: str, approved_price=None) -> CustomRequest:
    """Admin status change on a custom request.

    ``approved`` needs a positive ``approved_price`` in the same call. Setting
    the current status again is a no-op; the stored price is kept as is.
    """
    rules.require_admin(actor, "change the status of a request")
    if not rules.check_admin_request_transition(request_obj.status, target):
        return request_obj
    price = rules.parse_approved_price(approved_price) if target == CustomRequest.Status.APPROVED else None

    previous = request_obj.status
    fields = ["status", "updated_at"]
    request_obj.status = target
    if price is not None:
        request_obj.approved_price = price
        fields.append("approved_price")
    with _store_call("request transition"):
        request_obj.save(update_fields=fields)

    logger.info(
        "request_transition id=%s from=%s to=%s admin=%s",
        request_obj.id,
        previous,
        target,
        actor.user_id,
    )
    return request_obj


def ensure_convertible(actor, request_obj: CustomRequest) -> None:
    """Check the paying actor owns the request and the request awaits payment."""
    if not actor.is_authenticated:
        raise NotAuthorized("Please sign in to complete the purchase.")
    if request_obj.user_id is None or request_obj.user_id != actor.user_id:
        raise NotAuthorized("Only the client who submitted this request can pay for it.")
    rules.check_conversion(request_obj.status, request_obj.approved_price)


def resolve_client(user_id: int, company_name: str = "") -> Client:
    """Return the user's Client, creating it on first purchase."""
    client, created = Client.objects.get_or_create(
        user_id=user_id, defaults={"company_name": company_name}
    )
    if created:
        logger.info("client_created id=%s user=%s", client.id, user_id)
    return client


def _create_project_for_request(client: Client, request_obj: CustomRequest) -> Project:
    label = category_label(request_obj.category)
    return Project.objects.create(
        client=client,
        service=None,
        source_request=request_obj,
        title=f"{label} Project",
        description=request_obj.details or f"{label} project",
        amount=request_obj.approved_price,
        status=Project.Status.PENDING,
    )


def _mark_converted(request_obj: CustomRequest, project: Project) -> None:
    request_obj.status = CustomRequest.Status.CONVERTED
    request_obj.converted_project = project
    request_obj.save(update_fields=["status", "converted_project", "updated_at"])


def convert_request(actor, request_obj: CustomRequest) -> Project:
    """Turn a paid, approved request into a pending project."""
    ensure_convertible(actor, request_obj)

    with _store_call("request conversion"):
        with transaction.atomic():
            locked = CustomRequest.objects.select_for_update().get(pk=request_obj.pk)
            rules.check_conversion(locked.status, locked.approved_price)

            client = resolve_client(actor.user_id)
            project = Project.objects.filter(source_request_id=locked.pk).first()
            if project is None:
                project = _create_project_for_request(client, locked)
            else:
                logger.warning(
                    "conversion_reusing_project request=%s project=%s",
                    locked.pk,
                    project.pk,
                )
            _mark_converted(locked, project)

    request_obj.status = CustomRequest.Status.CONVERTED
    request_obj.converted_project = project
    logger.info(
        "request_converted id=%s project=%s amount=%s",
        request_obj.id,
        project.id,
        project.amount,
    )
    return project


# ----------------------------------- projects -----------------------------------

def purchase_service(actor, service: Service) -> Project:
    """Create a pending project for a catalog purchase."""
    if not actor.is_authenticated:
        raise NotAuthorized("Please sign in to complete the purchase.")
    if service.status != Service.Status.ACTIVE:
        raise InvalidState("This service is not available for purchase.")

    with _store_call("catalog purchase"):
        with transaction.atomic():
            client = resolve_client(actor.user_id)
            project = Project.objects.create(
                client=client,
                service=service,
                title=service.title,
                description=service.description,
                amount=service.price,
                status=Project.Status.PENDING,
            )
    logger.info(
        "service_purchased service=%s project=%s amount=%s",
        service.id,
        project.id,
        project.amount,
    )
    return project


def advance_project(actor, project: Project, target: str) -> Project:
    """Admin moves a project exactly one stage forward."""
    rules.require_admin(actor, "move projects on the board")
    if not rules.check_project_transition(project.status, target):
        return project

    previous = project.status
    project.status = target
    with _store_call("project transition"):
        project.save(update_fields=["status", "updated_at"])
    logger.info(
        "project_transition id=%s from=%s to=%s admin=%s",
        project.id,
        previous,
        target,
        actor.user_id,
    )
    return project
