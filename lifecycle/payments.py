"""Simulated payment provider.

There is no real processor behind the checkout: a charge waits for a short,
configurable delay and then approves. Card payments need a plausible card
number (12 to 19 digits once spaces are removed); cash orders always go
through. ``PAYMENT_SIMULATION_FORCE_DECLINE`` turns every charge into a
decline, which is handy for exercising failure paths.
"""

import logging
import time
import uuid
from dataclasses import dataclass

from django.conf import settings

logger = logging.getLogger(__name__)

PAYMENT_METHODS = ("card", "cash")


@dataclass(frozen=True)
class PaymentResult:
    approved: bool
    reference: str = ""
    message: str = ""


class SimulatedPaymentProvider:
    """Approve or decline charges after a delay."""

    def __init__(self, delay=None, force_decline=None, sleep=time.sleep):
        self.delay = delay
        self.force_decline = force_decline
        self._sleep = sleep

    def _settings_delay(self) -> float:
        if self.delay is not None:
            return self.delay
        return float(getattr(settings, "PAYMENT_SIMULATION_DELAY", 0))

    def _settings_force_decline(self) -> bool:
        if self.force_decline is not None:
            return self.force_decline
        return bool(getattr(settings, "PAYMENT_SIMULATION_FORCE_DECLINE", False))

    def charge(self, amount, method: str = "card", card_number: str = "") -> PaymentResult:
        delay = self._settings_delay()
        if delay > 0:
            self._sleep(delay)

        if method not in PAYMENT_METHODS:
            result = PaymentResult(approved=False, message=f"Unsupported payment method '{method}'.")
        elif self._settings_force_decline():
            result = PaymentResult(approved=False, message="The payment was declined.")
        elif method == "card" and not _plausible_card_number(card_number):
            result = PaymentResult(approved=False, message="The card number is invalid.")
        else:
            result = PaymentResult(approved=True, reference=f"SIM-{uuid.uuid4().hex[:12].upper()}")

        logger.info(
            "payment_%s method=%s amount=%s reference=%s",
            "approved" if result.approved else "declined",
            method,
            amount,
            result.reference,
        )
        return result


def _plausible_card_number(card_number: str) -> bool:
    digits = (card_number or "").replace(" ", "")
    return digits.isdigit() and 12 <= len(digits) <= 19
