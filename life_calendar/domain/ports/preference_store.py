"""PreferenceStore port -- abstracts the string key-value store for user inputs."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class PreferenceStore(Protocol):
    """String-keyed store. Implementations must never raise on failure."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when unset or unreadable."""
        ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
