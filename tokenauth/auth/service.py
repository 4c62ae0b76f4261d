"""Token issuance and verification boundary.

Every public operation returns a tagged result (``TokenResult`` or
``ValidationResult``) and never raises. Failures carry one generic message
so callers cannot tell a bad signature from an expired token or a wrong
audience; the specific cause is only written to the server-side log.

Usage:
    result = await generate_token(GenerateTokenParams(
        payload={"sub": "alice"},
        private_key=private_pem,
        issuer="https://auth.example.com",
        audience="orders-api",
    ))
    if result.success:
        checked = await validate_token(ValidateTokenParams(
            token=result.token,
            public_key=public_pem,
            issuer="https://auth.example.com",
            audience="orders-api",
        ))
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from tokenauth.auth.jwt_handler import create_token, verify_token
from tokenauth.auth.keys import import_signing_key, import_verification_key
from tokenauth.errors import GENERIC_ISSUE_ERROR, GENERIC_VALIDATE_ERROR, TokenError
from tokenauth.schemas import (
    GenerateTokenParams,
    TokenResult,
    ValidateTokenParams,
    ValidationResult,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_unique_id() -> str:
    return str(uuid.uuid4())


class TokenService:
    """Stateless issuer/verifier with an injectable clock and jti source."""

    def __init__(self, clock: Clock | None = None, id_factory: IdFactory | None = None):
        self.clock = clock or utc_now
        self.id_factory = id_factory or generate_unique_id

    def generate(self, params: GenerateTokenParams) -> TokenResult:
        """Import the signing key, build the claim set and sign it."""
        jti = None
        try:
            key = import_signing_key(params.private_key, params.alg)
            jti = self.id_factory()
            token = create_token(
                params.payload,
                key,
                params.alg,
                params.issuer,
                params.audience,
                params.expiration,
                now=self.clock(),
                jti=jti,
            )
        except TokenError as e:
            logger.warning(
                "Token generation failed: %s [%s] (iss=%s, alg=%s, jti=%s, details=%s)",
                e.message, e.code, params.issuer, params.alg, jti, e.details,
            )
            return TokenResult(success=False, error=GENERIC_ISSUE_ERROR)
        except Exception:
            logger.exception("Unexpected error during token generation (iss=%s, alg=%s)", params.issuer, params.alg)
            return TokenResult(success=False, error=GENERIC_ISSUE_ERROR)

        logger.info("Token issued (iss=%s, aud=%s, alg=%s, jti=%s)", params.issuer, params.audience, params.alg, jti)
        return TokenResult(success=True, token=token)

    def validate(self, params: ValidateTokenParams) -> ValidationResult:
        """Import the verification key and run the full verification chain."""
        try:
            key = import_verification_key(params.public_key, params.alg)
            claims = verify_token(
                params.token,
                key,
                params.alg,
                params.issuer,
                params.audience,
                now=self.clock(),
                clock_tolerance=params.clock_tolerance,
                subject=params.subject,
                max_token_age=params.max_token_age,
                required_claims=params.required_claims,
            )
        except TokenError as e:
            logger.warning(
                "Token validation failed: %s [%s] (iss=%s, aud=%s, alg=%s, details=%s)",
                e.message, e.code, params.issuer, params.audience, params.alg, e.details,
            )
            return ValidationResult(success=False, error=GENERIC_VALIDATE_ERROR)
        except Exception:
            logger.exception("Unexpected error during token validation (iss=%s, alg=%s)", params.issuer, params.alg)
            return ValidationResult(success=False, error=GENERIC_VALIDATE_ERROR)

        logger.debug("Token validated (iss=%s, jti=%s)", claims.get("iss"), claims.get("jti"))
        return ValidationResult(success=True, payload=claims)


_default_service = TokenService()


async def generate_token(params: GenerateTokenParams, service: TokenService | None = None) -> TokenResult:
    """Issue a token without blocking the event loop. Never raises."""
    return await asyncio.to_thread((service or _default_service).generate, params)


async def validate_token(params: ValidateTokenParams, service: TokenService | None = None) -> ValidationResult:
    """Validate a token without blocking the event loop. Never raises."""
    return await asyncio.to_thread((service or _default_service).validate, params)
