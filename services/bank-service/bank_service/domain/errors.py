"""Typed failures raised by the deposit and sign-up flows."""

from __future__ import annotations


class BankError(Exception):
    """Base class for every failure a flow reports back to the user.

    ``code`` identifies the failure in API payloads and metrics,
    ``user_message`` is the text safe to show in a dialog, and ``http_status``
    is the response status used by the HTTP layer.
    """

    code: str = "bank_error"
    user_message: str = "Error occurred."
    http_status: int = 500

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class AccountValidationError(BankError, ValueError):
    """Input rejected locally, before the account store is contacted."""

    http_status = 400


class InvalidAmountError(AccountValidationError):
    code = "invalid_amount"
    user_message = "Please enter a valid amount."


class MissingFieldError(AccountValidationError):
    code = "missing_field"
    user_message = "All fields must be filled out."

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"missing fields: {', '.join(fields)}")
        self.fields = fields


class PinMismatchError(AccountValidationError):
    code = "pin_mismatch"
    user_message = "PINs do not match."


class InvalidEmailError(AccountValidationError):
    code = "invalid_email"
    user_message = "Invalid email address."


class InvalidPinError(AccountValidationError):
    code = "invalid_pin"
    user_message = "PIN must be a four-digit number."


class StoreError(BankError):
    """The account store failed to run an operation.

    The driver exception is chained as ``__cause__``; ``store_message`` keeps
    its text for logs, it is never shown to the user.
    """

    code = "store_error"

    def __init__(self, operation: str, store_message: str) -> None:
        super().__init__(f"{operation} failed: {store_message}")
        self.operation = operation
        self.store_message = store_message


class StoreUnavailableError(StoreError):
    code = "store_unavailable"
    user_message = "The bank is unavailable right now. Please try again later."
    http_status = 503


class StoreRejectedError(StoreError):
    code = "store_rejected"
    user_message = "The bank could not complete the request."
    http_status = 409


class NoAccountCreatedError(BankError):
    """The account-creation routine ran but returned no account."""

    code = "no_account_created"
    user_message = "Error occurred. Please refill the form."
    http_status = 502
