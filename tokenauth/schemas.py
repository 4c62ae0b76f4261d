"""Pydantic schemas for token requests and results."""

from datetime import timedelta
from typing import Annotated, Any

from pydantic import BaseModel, Field

from tokenauth.config import MAX_CLOCK_TOLERANCE, get_settings


NonEmptyStr = Annotated[str, Field(min_length=1)]
Audience = NonEmptyStr | Annotated[list[NonEmptyStr], Field(min_length=1)]


def _default_algorithm() -> str:
    return get_settings().DEFAULT_ALGORITHM


def _default_expiration() -> str:
    return get_settings().DEFAULT_EXPIRATION


def _default_clock_tolerance() -> int:
    return get_settings().clock_tolerance


class GenerateTokenParams(BaseModel):
    payload: dict[str, Any]
    private_key: str = Field(repr=False)  # PKCS#8 PEM
    issuer: NonEmptyStr
    audience: Audience
    alg: str = Field(default_factory=_default_algorithm)
    # "15m", "1h", "7d", a timedelta, or an absolute NumericDate
    expiration: str | timedelta | int = Field(default_factory=_default_expiration)


class ValidateTokenParams(BaseModel):
    token: str = Field(repr=False)
    public_key: str = Field(repr=False)  # SPKI PEM
    issuer: NonEmptyStr
    audience: Audience
    alg: str = Field(default_factory=_default_algorithm)
    subject: str | None = None
    max_token_age: str | timedelta | None = None
    required_claims: list[str] = Field(default_factory=list)
    clock_tolerance: int = Field(default_factory=_default_clock_tolerance, ge=0, le=MAX_CLOCK_TOLERANCE)


class TokenResult(BaseModel):
    success: bool
    token: str | None = None
    error: str | None = None


class ValidationResult(BaseModel):
    success: bool
    payload: dict[str, Any] | None = None
    error: str | None = None
