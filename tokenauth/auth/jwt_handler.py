"""JWT creation and verification for RS256/RS384/RS512 key handles."""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

import jwt

from tokenauth.auth.durations import parse_duration, resolve_expiration
from tokenauth.auth.keys import KeyHandle
from tokenauth.errors import IssueError, ValidateError

REQUIRED_CLAIMS = ("iss", "aud", "iat", "exp", "jti")

# Signature, algorithm, issuer and audience are checked by PyJWT, issuer again
# below as an exact match. Time claims are checked against the caller's clock
# instead of PyJWT's.
_DECODE_OPTIONS = {
    "require": list(REQUIRED_CLAIMS),
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_sub": False,
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def create_token(
    payload: Mapping[str, Any],
    key: KeyHandle,
    alg: str,
    issuer: str,
    audience: str | list[str],
    expiration: str | timedelta | int,
    now: datetime,
    jti: str,
) -> str:
    """Sign a JWT with a private key handle. Returns the compact token string.

    Registered claims overwrite whatever the caller put in ``payload``.

    Raises KeyImportError if the handle is not a private key for ``alg``,
    IssueError on any other failure.
    """
    key.require(alg, "private")

    iat = int(now.timestamp())
    try:
        exp = resolve_expiration(expiration, now)
    except ValueError as exc:
        raise IssueError("Invalid expiration", details={"expiration": str(expiration)}) from exc
    if exp <= iat:
        raise IssueError("Expiration must be after issued-at", details={"iat": iat, "exp": exp})

    claims = dict(payload)
    claims.update(
        iss=issuer,
        aud=audience if isinstance(audience, str) else list(audience),
        iat=iat,
        exp=exp,
        jti=jti,
    )
    try:
        return jwt.encode(claims, key.key, algorithm=alg)
    except (TypeError, ValueError, jwt.PyJWTError) as exc:
        raise IssueError("Signing failed", details={"reason": type(exc).__name__}) from exc


def verify_token(
    token: str,
    key: KeyHandle,
    alg: str,
    issuer: str,
    audience: str | list[str],
    now: datetime,
    clock_tolerance: int = 0,
    subject: str | None = None,
    max_token_age: str | timedelta | None = None,
    required_claims: Iterable[str] = (),
) -> dict:
    """Verify a JWT with a public key handle. Returns the decoded payload.

    Checks run in order and stop at the first failure: header algorithm,
    signature, issuer, audience, required claims, then the time window
    [iat, exp) widened by ``clock_tolerance`` seconds on both sides.

    Raises KeyImportError if the handle is not a public key for ``alg``,
    ValidateError on any other failure.
    """
    key.require(alg, "public")

    try:
        header = jwt.get_unverified_header(token)
    except jwt.PyJWTError as exc:
        raise ValidateError("Malformed token") from exc
    if header.get("alg") != alg:
        raise ValidateError(
            "Algorithm mismatch",
            details={"expected": alg, "received": header.get("alg")},
        )

    try:
        claims = jwt.decode(
            token,
            key.key,
            algorithms=[alg],
            issuer=issuer,
            audience=audience,
            options=_DECODE_OPTIONS,
        )
    except jwt.PyJWTError as exc:
        raise ValidateError(str(exc) or "Token rejected", details={"reason": type(exc).__name__}) from exc

    # PyJWT 2.10.0 matched a str issuer by substring
    if claims["iss"] != issuer:
        raise ValidateError("Issuer mismatch", details={"expected": issuer, "received": claims["iss"]})

    missing = [name for name in required_claims if name not in claims]
    if missing:
        raise ValidateError("Missing required claims", details={"missing": missing})
    if not isinstance(claims["jti"], str) or not claims["jti"]:
        raise ValidateError("Invalid jti claim")
    if subject is not None and claims.get("sub") != subject:
        raise ValidateError("Subject mismatch")

    current = int(now.timestamp())
    iat, exp = claims["iat"], claims["exp"]
    if not _is_number(iat) or not _is_number(exp):
        raise ValidateError("Invalid time claims")
    if iat > current + clock_tolerance:
        raise ValidateError("Token not yet valid (iat)", details={"iat": iat, "now": current})
    if exp <= current - clock_tolerance:
        raise ValidateError("Token expired", details={"exp": exp, "now": current})
    nbf = claims.get("nbf")
    if nbf is not None and (not _is_number(nbf) or nbf > current + clock_tolerance):
        raise ValidateError("Token not yet valid (nbf)", details={"nbf": nbf, "now": current})

    if max_token_age is not None:
        try:
            max_age = parse_duration(max_token_age)
        except ValueError as exc:
            raise ValidateError("Invalid max_token_age") from exc
        if current - iat - clock_tolerance > max_age:
            raise ValidateError("Token too old", details={"iat": iat, "max_age": max_age})

    return claims
