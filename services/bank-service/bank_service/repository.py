"""Client for the account store's stored routines."""

from __future__ import annotations

import logging

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from .domain.account import SignUpResult
from .domain.errors import NoAccountCreatedError, StoreError, StoreRejectedError, StoreUnavailableError

logger = logging.getLogger(__name__)


def _store_message(exc: psycopg.Error) -> str:
    """Return the server's primary message when available, else the driver text."""
    diag = getattr(exc, "diag", None)
    primary = getattr(diag, "message_primary", None) if diag is not None else None
    return primary or str(exc) or exc.__class__.__name__


def _translate(operation: str, exc: psycopg.Error) -> StoreError:
    # PoolTimeout subclasses OperationalError, so pool exhaustion lands here too.
    if isinstance(exc, psycopg.OperationalError):
        return StoreUnavailableError(operation, _store_message(exc))
    return StoreRejectedError(operation, _store_message(exc))


class AccountStoreClient:
    """Sole point of contact with the account store.

    Every value that originates from a user is sent as a bound parameter;
    routine names come from configuration and are quoted as identifiers.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        *,
        deposit_procedure: str = "deposit",
        create_account_function: str = "create_user_and_account",
        account_number_column: str = "AccountNumber",
        password_column: str = "Password",
    ) -> None:
        """Store the connection pool and the routine and column names used for each operation."""
        self._pool = pool
        self._account_number_column = account_number_column
        self._password_column = password_column
        self._deposit_call = sql.SQL("CALL {}(%s, %s)").format(sql.Identifier(deposit_procedure))
        self._create_account_query = sql.SQL("SELECT {}, {} FROM {}(%s, %s, %s, %s)").format(
            sql.Identifier(account_number_column),
            sql.Identifier(password_column),
            sql.Identifier(create_account_function),
        )

    def deposit(self, account_id: str, amount: int) -> None:
        """Credit ``amount`` whole currency units to ``account_id``."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(self._deposit_call, (account_id, amount))
                    conn.commit()
        except psycopg.Error as exc:
            raise _translate("deposit", exc) from exc

    def create_user_and_account(
        self,
        first_name: str,
        last_name: str,
        email: str,
        pin: str,
    ) -> SignUpResult:
        """Create a customer and their account, returning the issued credentials."""
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(self._create_account_query, (first_name, last_name, email, pin))
                    row = cur.fetchone()
                    conn.commit()
        except psycopg.Error as exc:
            raise _translate("create_user_and_account", exc) from exc

        if not row:
            logger.warning("account store returned no row from create_user_and_account")
            raise NoAccountCreatedError()
        return self._map_result(row)

    def _map_result(self, row: dict) -> SignUpResult:
        """Convert the routine's first row into a ``SignUpResult`` by column name."""
        return SignUpResult(
            account_number=str(row[self._account_number_column]),
            password=str(row[self._password_column]),
        )
