"""ASN roster engine exception hierarchy."""

from __future__ import annotations


class AsnRosterError(Exception):
    """Base exception for all roster engine errors."""


class ConfigurationError(AsnRosterError):
    """Caller supplied an invalid engine configuration."""


class HorizonError(ConfigurationError):
    """Forecast horizon is non-positive or exceeds the configured maximum."""

    def __init__(self, horizon_years: object, max_years: int) -> None:
        self.horizon_years = horizon_years
        self.max_years = max_years
        super().__init__(
            f"Forecast horizon must be an integer between 1 and {max_years} years, got {horizon_years!r}"
        )
