"""Lifecycle error taxonomy.

Every rejected transition raises one of these. They are DRF API exceptions so
views can let them propagate; each kind carries its own status code and
machine code, which keeps a validation problem distinguishable from a failed
store call.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class LifecycleError(APIException):
    """Base class for all lifecycle policy errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The requested lifecycle change is not allowed."
    default_code = "lifecycle_error"


class InvalidState(LifecycleError):
    """The transition is not legal from the current status."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Transition not allowed from the current status."
    default_code = "invalid_state"


InvalidTransition = InvalidState


class MissingField(LifecycleError):
    """A field required by the target status is absent or invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "A required field is missing."
    default_code = "missing_field"

    def __init__(self, field: str, detail=None):
        self.field = field
        super().__init__(detail or f"'{field}' is required for this transition.")


class AlreadyConverted(LifecycleError):
    """The custom request has already been converted into a project."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "This request has already been converted into a project."
    default_code = "already_converted"


class NotAuthorized(LifecycleError):
    """The actor may not perform this transition."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not allowed to perform this transition."
    default_code = "not_authorized"


class RemoteFailure(LifecycleError):
    """The data store failed; the original error is chained as ``__cause__``."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The data store could not complete the operation."
    default_code = "remote_failure"


class PaymentFailed(LifecycleError):
    """The payment provider declined the charge."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = "Payment failed. Please try again."
    default_code = "payment_failed"
