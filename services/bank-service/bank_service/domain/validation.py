"""Form-field validation for the deposit and sign-up flows."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Final

from .contracts import SignUpInput
from .errors import (
    InvalidAmountError,
    InvalidEmailError,
    InvalidPinError,
    MissingFieldError,
    PinMismatchError,
)

# ASCII only: ``\d`` would also accept other Unicode digits.
AMOUNT_PATTERN: Final = re.compile(r"[0-9]+")
# The domain part stops at any line terminator, not only "\n".
EMAIL_PATTERN: Final = re.compile(r"[A-Za-z0-9+_.-]+@[^\n\r\u0085\u2028\u2029]+")
PIN_PATTERN: Final = re.compile(r"[0-9]{4}")

SIGN_UP_FIELDS: Final = ("first_name", "last_name", "email", "pin", "pin_confirmation")


def validate_amount(raw: str) -> int:
    """Return the deposit amount encoded by ``raw`` in whole currency units.

    Raises
    ------
    InvalidAmountError
        When the trimmed input is empty, holds anything but ASCII digits, or
        is too long to convert to an integer.
    """
    amount = raw.strip()
    if not AMOUNT_PATTERN.fullmatch(amount):
        raise InvalidAmountError()
    try:
        return int(amount)
    except ValueError as exc:
        raise InvalidAmountError() from exc


def validate_sign_up(payload: SignUpInput) -> SignUpInput:
    """Validate a sign-up form and return a copy with surrounding whitespace removed.

    Checks run in a fixed order and stop at the first failure: missing
    fields, PIN mismatch, email shape, PIN shape.
    """
    trimmed = replace(
        payload,
        **{name: getattr(payload, name).strip() for name in SIGN_UP_FIELDS},
    )

    missing = [name for name in SIGN_UP_FIELDS if not getattr(trimmed, name)]
    if missing:
        raise MissingFieldError(missing)
    if trimmed.pin != trimmed.pin_confirmation:
        raise PinMismatchError()
    if not EMAIL_PATTERN.fullmatch(trimmed.email):
        raise InvalidEmailError()
    if not PIN_PATTERN.fullmatch(trimmed.pin):
        raise InvalidPinError()
    return trimmed
