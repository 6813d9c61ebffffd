from __future__ import annotations


class PayoutError(Exception):
    """Base class for payout pipeline failures carrying a user-facing message."""

    code = "payout_error"
    http_status = 400

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def as_dict(self) -> dict:
        return {"code": self.code, "detail": self.message, **self.context}


class PayoutNotFound(PayoutError):
    code = "not_found"
    http_status = 404


class PayoutConfigurationError(PayoutError):
    """Rail credentials or debit account missing; never retried automatically."""

    code = "configuration_error"
    http_status = 503


class PayoutValidationError(PayoutError):
    code = "validation_error"
    http_status = 400


class PayoutStateConflict(PayoutError):
    code = "state_conflict"
    http_status = 409


class PayoutGatewayError(PayoutError):
    """The external rail rejected the call, timed out or was unreachable."""

    code = "gateway_error"
    http_status = 502
