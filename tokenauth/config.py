"""Fixed token defaults.

Policy inputs come only from the caller; nothing here is read from the
environment or a .env file.
"""

from functools import lru_cache

MAX_CLOCK_TOLERANCE = 300  # 5 minutes


class Settings:
    # Signing / verification algorithm used when the caller passes none
    DEFAULT_ALGORITHM: str = "RS256"

    # Relative lifetime of issued tokens
    DEFAULT_EXPIRATION: str = "15m"

    # Verification leeway in seconds
    CLOCK_TOLERANCE: int = 0

    @property
    def clock_tolerance(self) -> int:
        """Configured leeway, clamped to [0, MAX_CLOCK_TOLERANCE]."""
        return max(0, min(self.CLOCK_TOLERANCE, MAX_CLOCK_TOLERANCE))


@lru_cache
def get_settings() -> Settings:
    return Settings()
