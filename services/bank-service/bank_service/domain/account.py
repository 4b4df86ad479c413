from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SignUpResult:
    """Credentials issued by the account store for a new customer."""

    account_number: str
    password: str


@dataclass(slots=True)
class DepositReceipt:
    """Outcome of an accepted deposit."""

    account_id: str
    amount: int
