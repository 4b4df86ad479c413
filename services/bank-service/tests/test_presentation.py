from __future__ import annotations

import pytest

from bank_service.domain.account import DepositReceipt, SignUpResult
from bank_service.domain.errors import (
    InvalidAmountError,
    InvalidEmailError,
    InvalidPinError,
    MissingFieldError,
    NoAccountCreatedError,
    PinMismatchError,
    StoreRejectedError,
    StoreUnavailableError,
)
from bank_service.presentation import LOGIN_VIEW, present_deposit, present_error, present_sign_up


def test_deposit_presentation_closes_form():
    presentation = present_deposit(DepositReceipt(account_id="1001", amount=100))

    assert presentation.message == "Amount of 100 has been deposited."
    assert presentation.close_form is True
    assert presentation.next_view is None
    assert presentation.level == "info"


def test_sign_up_presentation_shows_credentials_and_moves_to_login():
    presentation = present_sign_up(SignUpResult(account_number="4000", password="8842"))

    assert presentation.message == "Card No: 4000\nPIN: 8842"
    assert presentation.next_view == LOGIN_VIEW
    assert presentation.data == {"account_number": "4000", "password": "8842"}


@pytest.mark.parametrize(
    ("error", "code", "message", "status"),
    [
        (InvalidAmountError(), "invalid_amount", "Please enter a valid amount.", 400),
        (MissingFieldError(["email"]), "missing_field", "All fields must be filled out.", 400),
        (PinMismatchError(), "pin_mismatch", "PINs do not match.", 400),
        (InvalidEmailError(), "invalid_email", "Invalid email address.", 400),
        (InvalidPinError(), "invalid_pin", "PIN must be a four-digit number.", 400),
        (
            StoreUnavailableError("deposit", "server closed the connection"),
            "store_unavailable",
            "The bank is unavailable right now. Please try again later.",
            503,
        ),
        (StoreRejectedError("deposit", "account 9 does not exist"), "store_rejected", "The bank could not complete the request.", 409),
        (NoAccountCreatedError(), "no_account_created", "Error occurred. Please refill the form.", 502),
    ],
)
def test_error_presentation(error, code, message, status):
    presentation = present_error(error)

    assert presentation.error == code
    assert presentation.message == message
    assert presentation.level == "error"
    assert presentation.close_form is False
    assert error.http_status == status


def test_store_details_are_not_shown():
    presentation = present_error(StoreRejectedError("deposit", "relation \"accounts\" does not exist"))
    assert "accounts" not in presentation.message


def test_missing_field_presentation_lists_fields():
    presentation = present_error(MissingFieldError(["first_name", "pin"]))
    assert presentation.data == {"fields": ["first_name", "pin"]}
