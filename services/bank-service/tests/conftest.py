"""Shared fixtures and in-memory stand-ins for the account store."""

from __future__ import annotations

import pytest

from bank_service.domain.account import SignUpResult
from bank_service.domain.errors import BankError


class FakeAccountStore:
    """Records every routine call and replays a scripted outcome."""

    def __init__(
        self,
        *,
        result: SignUpResult | None = None,
        error: BankError | None = None,
    ) -> None:
        self.result = result or SignUpResult(account_number="4000123412341234", password="8842")
        self.error = error
        self.deposits: list[tuple[str, int]] = []
        self.sign_ups: list[tuple[str, str, str, str]] = []

    def deposit(self, account_id: str, amount: int) -> None:
        self.deposits.append((account_id, amount))
        if self.error is not None:
            raise self.error

    def create_user_and_account(self, first_name: str, last_name: str, email: str, pin: str) -> SignUpResult:
        self.sign_ups.append((first_name, last_name, email, pin))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def store() -> FakeAccountStore:
    """Provide a fresh fake store that succeeds unless told otherwise."""
    return FakeAccountStore()
