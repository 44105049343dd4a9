from __future__ import annotations


class InvalidInputError(ValueError):
    """Request cannot be simulated; surfaced to the caller."""


class ProviderUnavailableError(RuntimeError):
    """Career data source failed; callers degrade to the fallback profile."""
