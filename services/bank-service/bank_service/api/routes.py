"""HTTP route definitions for the deposit and sign-up forms."""

from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import get_settings
from ..domain.contracts import SignUpInput
from ..domain.errors import BankError
from ..domain.service import BankingService
from ..metrics import record_outcome
from ..presentation import Presentation, present_deposit, present_error, present_sign_up
from ..security.rate_limiter import SlidingWindowRateLimiter
from ..security.redis_rate_limiter import RedisSlidingWindowRateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")

RATE_LIMITED_MESSAGE = "Too many attempts. Please wait and try again."


class PresentationResponse(BaseModel):
    """Serialised dialog shown to the user after a submission."""

    title: str
    message: str
    level: str
    close_form: bool
    next_view: str | None = None
    error: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, presentation: Presentation) -> "PresentationResponse":
        """Build a response model from a presenter result."""
        return cls(
            title=presentation.title,
            message=presentation.message,
            level=presentation.level,
            close_form=presentation.close_form,
            next_view=presentation.next_view,
            error=presentation.error,
            data=presentation.data,
        )


class SignUpFormResponse(BaseModel):
    """Header data for a freshly opened sign-up form."""

    title: str
    application_number: int


class SignUpRequest(BaseModel):
    """Sign-up form fields; blanks are reported by the validator, not the schema."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    pin: str = ""
    pin_confirmation: str = ""
    application_number: int | None = None


class DepositRequest(BaseModel):
    """Deposit form body carrying the amount exactly as typed."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    amount: str = ""


settings = get_settings()


def _build_rate_limiter() -> SlidingWindowRateLimiter | RedisSlidingWindowRateLimiter:
    """Instantiate the configured rate limiter backend, preferring Redis when available."""
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        try:
            import redis

            client = redis.from_url(settings.redis_url)
            # fail fast so the service still starts with the in-memory backend
            client.ping()
            logger.info("rate limiter configured for redis backend at %s", settings.redis_url)
            return RedisSlidingWindowRateLimiter(
                client,
                max_requests=settings.rate_limit_requests,
                window_seconds=settings.rate_limit_window_seconds,
            )
        except Exception as exc:  # pragma: no cover - depends on a live redis
            logger.warning("redis rate limiter unavailable, falling back to in-memory: %s", exc)

    logger.info("rate limiter using in-memory backend")
    return SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


rate_limiter = _build_rate_limiter()


def get_service(request: Request) -> BankingService:
    """Resolve the `BankingService` stored on the FastAPI application state."""
    service: BankingService = request.app.state.banking_service
    return service


def new_application_number() -> int:
    """Return a four-digit application number for a new sign-up form."""
    return 1000 + secrets.randbelow(9000)


@router.get("/signup/form", response_model=SignUpFormResponse)
def open_sign_up_form() -> SignUpFormResponse:
    """Open a sign-up form stamped with a fresh application number."""
    number = new_application_number()
    return SignUpFormResponse(title=f"Application No.{number}", application_number=number)


@router.post("/signup", response_model=PresentationResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: Request,
    payload: SignUpRequest,
    service: BankingService = Depends(get_service),
) -> PresentationResponse | JSONResponse:
    """Validate the sign-up form and open an account; success leads to the login view."""
    client_host = request.client.host if request.client else "unknown"
    rate_key = f"signup:{client_host}"
    if not rate_limiter.allow(rate_key):
        record_outcome("signup", "rate_limited")
        return _rate_limited_response(rate_key)
    try:
        result = service.sign_up(
            SignUpInput(
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                pin=payload.pin,
                pin_confirmation=payload.pin_confirmation,
                application_number=payload.application_number,
            )
        )
    except BankError as exc:
        record_outcome("signup", exc.code)
        return _error_response(exc)
    record_outcome("signup", "ok")
    return PresentationResponse.from_domain(present_sign_up(result))


@router.post("/accounts/{account_id}/deposits", response_model=PresentationResponse)
def deposit(
    account_id: str,
    payload: DepositRequest,
    service: BankingService = Depends(get_service),
) -> PresentationResponse | JSONResponse:
    """Validate the amount and deposit it into the account."""
    rate_key = f"deposit:{account_id}"
    if not rate_limiter.allow(rate_key):
        record_outcome("deposit", "rate_limited")
        return _rate_limited_response(rate_key)
    try:
        receipt = service.deposit(account_id, payload.amount)
    except BankError as exc:
        record_outcome("deposit", exc.code)
        return _error_response(exc)
    record_outcome("deposit", "ok")
    return PresentationResponse.from_domain(present_deposit(receipt))


def _error_response(exc: BankError) -> JSONResponse:
    body = PresentationResponse.from_domain(present_error(exc))
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())


def _rate_limited_response(rate_key: str) -> JSONResponse:
    body = PresentationResponse(
        title="Error",
        message=RATE_LIMITED_MESSAGE,
        level="error",
        close_form=False,
        error="rate_limited",
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=body.model_dump(),
        headers={"Retry-After": str(rate_limiter.retry_after(rate_key))},
    )
