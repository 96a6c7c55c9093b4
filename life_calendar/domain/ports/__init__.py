"""Domain port protocols for decoupling services from infrastructure."""

from .preference_store import PreferenceStore
from .reflection_provider import ReflectionProvider

__all__ = ["PreferenceStore", "ReflectionProvider"]
