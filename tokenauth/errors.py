"""Error taxonomy for token issuance and verification.

These exceptions never leave the service boundary: ``tokenauth.auth.service``
catches them and returns a tagged result carrying a generic message.
"""

from typing import Any

GENERIC_ISSUE_ERROR = "Failed to generate token"
GENERIC_VALIDATE_ERROR = "Invalid or expired token"


class TokenError(Exception):
    """Base exception for token operations."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class KeyImportError(TokenError):
    """Malformed or mismatched key material, or an unsupported algorithm."""

    def __init__(self, message: str = "Key import failed", details: dict[str, Any] | None = None):
        super().__init__("KEY_IMPORT_ERROR", message, details)


class IssueError(TokenError):
    """Claim construction or signing failed."""

    def __init__(self, message: str = "Token issuance failed", details: dict[str, Any] | None = None):
        super().__init__("ISSUE_ERROR", message, details)


class ValidateError(TokenError):
    """Parsing, signature or policy check failed."""

    def __init__(self, message: str = "Token validation failed", details: dict[str, Any] | None = None):
        super().__init__("VALIDATE_ERROR", message, details)
