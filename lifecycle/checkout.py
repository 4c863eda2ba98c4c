"""Checkout: pay for a catalog service or an approved custom request.

A purchase is one of two explicit variants, told apart by ``kind``:

- ``CatalogPurchase``: buy an active catalog service at its list price.
- ``CustomRequestPurchase``: pay the approved price of a custom request, which
  converts the request into a project.

The variant is checked before charging so nobody pays for something that
cannot be fulfilled; a successful charge is the only trigger for creating the
project or converting the request.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Union

from custom_requests.models import CustomRequest
from projects.models import Project
from services.models import Service

from . import actions
from .exceptions import InvalidState, LifecycleError, NotAuthorized, PaymentFailed
from .payments import PaymentResult, SimulatedPaymentProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogPurchase:
    service: Service
    kind: ClassVar[str] = "catalog"

    @property
    def amount(self) -> Decimal:
        return self.service.price


@dataclass(frozen=True)
class CustomRequestPurchase:
    request: CustomRequest
    kind: ClassVar[str] = "custom_request"

    @property
    def amount(self) -> Decimal:
        return self.request.approved_price


Purchase = Union[CatalogPurchase, CustomRequestPurchase]

PURCHASE_KINDS = (CatalogPurchase.kind, CustomRequestPurchase.kind)


@dataclass(frozen=True)
class CheckoutResult:
    project: Project
    payment: PaymentResult


def _precheck(actor, purchase: Purchase) -> None:
    if isinstance(purchase, CatalogPurchase):
        if not actor.is_authenticated:
            raise NotAuthorized("Please sign in to complete the purchase.")
        if purchase.service.status != Service.Status.ACTIVE:
            raise InvalidState("This service is not available for purchase.")
    elif isinstance(purchase, CustomRequestPurchase):
        actions.ensure_convertible(actor, purchase.request)
    else:
        raise TypeError(f"Unsupported purchase type: {type(purchase).__name__}")


def checkout(actor, purchase: Purchase, method: str = "card", card_number: str = "", provider=None) -> CheckoutResult:
    """Charge the provider and fulfil the purchase on success."""
    _precheck(actor, purchase)
    provider = provider or SimulatedPaymentProvider()

    payment = provider.charge(purchase.amount, method=method, card_number=card_number)
    if not payment.approved:
        logger.info("checkout_declined kind=%s user=%s", purchase.kind, actor.user_id)
        raise PaymentFailed(payment.message or None)

    try:
        if isinstance(purchase, CatalogPurchase):
            project = actions.purchase_service(actor, purchase.service)
        else:
            project = actions.convert_request(actor, purchase.request)
    except LifecycleError as exc:
        # Charged but not fulfilled; the reference is needed to reconcile by hand.
        logger.error(
            "checkout_fulfilment_failed kind=%s user=%s reference=%s error=%s",
            purchase.kind,
            actor.user_id,
            payment.reference,
            exc.default_code,
        )
        raise

    logger.info(
        "checkout_completed kind=%s project=%s reference=%s",
        purchase.kind,
        project.id,
        payment.reference,
    )
    return CheckoutResult(project=project, payment=payment)
