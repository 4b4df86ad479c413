"""Banking service orchestrating validation and account-store calls."""

from __future__ import annotations

import logging
from typing import Protocol

from .account import DepositReceipt, SignUpResult
from .contracts import SignUpInput
from .errors import AccountValidationError, BankError
from .validation import validate_amount, validate_sign_up

logger = logging.getLogger(__name__)


class AccountStore(Protocol):
    """Operations the service needs from the account store."""

    def deposit(self, account_id: str, amount: int) -> None: ...

    def create_user_and_account(
        self, first_name: str, last_name: str, email: str, pin: str
    ) -> SignUpResult: ...


class BankingService:
    """Deposit and sign-up workflows backed by the account store."""

    def __init__(self, store: AccountStore) -> None:
        """Store the account-store client used by every submission."""
        self._store = store

    def deposit(self, account_id: str, raw_amount: str) -> DepositReceipt:
        """Validate ``raw_amount`` and credit it to ``account_id``.

        The store is contacted only when the amount is valid, and then
        exactly once.
        """
        try:
            amount = validate_amount(raw_amount)
        except AccountValidationError as exc:
            logger.warning("deposit to account %s rejected: %s", account_id, exc.code)
            raise

        try:
            self._store.deposit(account_id, amount)
        except BankError:
            logger.error("deposit of %s to account %s failed", amount, account_id, exc_info=True)
            raise

        logger.info("deposited %s to account %s", amount, account_id)
        return DepositReceipt(account_id=account_id, amount=amount)

    def sign_up(self, payload: SignUpInput) -> SignUpResult:
        """Validate a sign-up form and open a new customer account."""
        try:
            form = validate_sign_up(payload)
        except AccountValidationError as exc:
            logger.warning(
                "sign-up for application %s rejected: %s", payload.application_number, exc.code
            )
            raise

        try:
            result = self._store.create_user_and_account(
                form.first_name, form.last_name, form.email, form.pin
            )
        except BankError:
            logger.error(
                "sign-up for application %s failed", form.application_number, exc_info=True
            )
            raise

        logger.info(
            "opened account %s for application %s", result.account_number, form.application_number
        )
        return result
