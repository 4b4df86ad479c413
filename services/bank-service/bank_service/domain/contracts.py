"""Domain-level request contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SignUpInput:
    """Raw sign-up form values, exactly as the user typed them."""

    first_name: str
    last_name: str
    email: str
    pin: str
    pin_confirmation: str
    application_number: int | None = None
