"""Translate flow outcomes into the dialogs shown to the user."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from .domain.account import DepositReceipt, SignUpResult
from .domain.errors import BankError, MissingFieldError

LOGIN_VIEW = "login"


@dataclass(slots=True)
class Presentation:
    """A dialog plus the navigation that follows it.

    ``close_form`` tells the front end to hide the submitting form;
    ``next_view`` names the view to open afterwards, if any.
    """

    title: str
    message: str
    level: Literal["info", "error"] = "info"
    close_form: bool = False
    next_view: str | None = None
    error: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


def present_deposit(receipt: DepositReceipt) -> Presentation:
    return Presentation(
        title="Deposit",
        message=f"Amount of {receipt.amount} has been deposited.",
        close_form=True,
        data={"account_id": receipt.account_id, "amount": receipt.amount},
    )


def present_sign_up(result: SignUpResult) -> Presentation:
    return Presentation(
        title="Account created",
        message=f"Card No: {result.account_number}\nPIN: {result.password}",
        close_form=True,
        next_view=LOGIN_VIEW,
        data={"account_number": result.account_number, "password": result.password},
    )


def present_error(exc: BankError) -> Presentation:
    data: dict[str, Any] = {}
    if isinstance(exc, MissingFieldError):
        data["fields"] = list(exc.fields)
    return Presentation(
        title="Error",
        message=exc.user_message,
        level="error",
        error=exc.code,
        data=data,
    )
