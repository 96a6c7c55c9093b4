"""
Typed domain errors for the life calendar.

Both failure kinds are contained at their collaborator boundary: the
reflection provider and the preference store catch them and substitute a
fallback, so callers of the app service never see them.
"""


class DomainError(Exception):
    """Base class for all domain-specific errors."""


# ---------------------------------------------------------------------------
# Reflection
# ---------------------------------------------------------------------------


class ReflectionFailure(DomainError):
    """The language model returned no usable completion."""


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


class PreferenceStoreUnavailable(DomainError):
    """The backing file for the preference store could not be read or written."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Preference store {path} unavailable: {reason}")
