"""ReflectionProvider port -- abstracts the generative reflection request."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ReflectionProvider(Protocol):
    """Supplies a short reflection text. Never raises; failures become a fallback string."""

    async def request(
        self, age: int, weeks_remaining: int, expected_lifespan: int
    ) -> str: ...
