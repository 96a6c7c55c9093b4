"""
Application-layer life calendar service.

Orchestrates the pure domain logic (life_weeks_domain) with its
collaborators: the preference store, the reflection provider and the grid
renderer. Holds the two user inputs; everything else is recomputed from
them on demand.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, Optional, Union

from ..core.config import Settings, get_settings
from ..domain.ports import PreferenceStore, ReflectionProvider
from .life_weeks_domain import (
    BirthDateInput,
    LifeStats,
    WeekCell,
    clamp_lifespan,
    classify_weeks,
    compute_life_stats,
    format_life_stats,
    parse_birth_date,
)
from .preferences_store import BIRTH_DATE_KEY, LIFESPAN_KEY
from .reflection_service import DEFAULT_REFLECTION

logger = logging.getLogger(__name__)


class LifeCalendarAppService:
    """Application service wiring domain logic with storage and reflection."""

    def __init__(
        self,
        store: PreferenceStore,
        reflection_provider: ReflectionProvider,
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.reflection_provider = reflection_provider
        self.settings = settings or get_settings()

        self.birth_date: Optional[date] = None
        self.expected_lifespan_years: int = self.settings.default_lifespan_years
        self.reflection: str = ""

        self._reflection_seq = 0
        self._reflections_in_flight = 0

    # -- Inputs --

    def load(self) -> None:
        """Restore inputs from the store. Missing or bad entries mean unset."""
        self.birth_date = parse_birth_date(self.store.get(BIRTH_DATE_KEY))
        self.expected_lifespan_years = self._clamp(self.store.get(LIFESPAN_KEY))
        logger.debug(
            f"Loaded preferences: birth_date={self.birth_date}, "
            f"lifespan={self.expected_lifespan_years}"
        )

    def set_birth_date(self, value: BirthDateInput) -> None:
        self.birth_date = parse_birth_date(value)

    def set_expected_lifespan(self, value: Union[int, str, None]) -> None:
        self.expected_lifespan_years = self._clamp(value)

    def _clamp(self, value: Union[int, str, None]) -> int:
        return clamp_lifespan(
            value,
            default=self.settings.default_lifespan_years,
            minimum=self.settings.min_lifespan_years,
            maximum=self.settings.max_lifespan_years,
        )

    # -- Derived data --

    def _stats(self, now: Optional[datetime]) -> Optional[LifeStats]:
        return compute_life_stats(
            self.birth_date, self.expected_lifespan_years, now or datetime.now()
        )

    def compute_stats(self, now: Optional[datetime] = None) -> Optional[LifeStats]:
        """Compute stats for the current inputs, writing inputs through on success."""
        stats = self._stats(now)
        if stats is None:
            return None

        self.store.set(BIRTH_DATE_KEY, self.birth_date.isoformat())
        self.store.set(LIFESPAN_KEY, str(self.expected_lifespan_years))
        return stats

    def grid(self, now: Optional[datetime] = None) -> Iterator[WeekCell]:
        """Classified grid cells, or nothing when stats are absent."""
        stats = self._stats(now)
        if stats is None:
            return iter(())
        return classify_weeks(stats.weeks_lived, self.expected_lifespan_years)

    def summary(self, now: Optional[datetime] = None) -> Optional[str]:
        stats = self._stats(now)
        if stats is None:
            return None
        return format_life_stats(stats, self.expected_lifespan_years)

    # -- Reflection --

    @property
    def reflection_pending(self) -> bool:
        return self._reflections_in_flight > 0

    @property
    def displayed_reflection(self) -> str:
        return self.reflection or DEFAULT_REFLECTION

    async def request_reflection(self, now: Optional[datetime] = None) -> Optional[str]:
        """Request one new reflection for the current stats.

        Skipped (returns None) when stats are absent or no weeks remain.
        Requests are numbered; a response only replaces ``reflection`` if no
        newer request started while it was in flight.
        """
        stats = self._stats(now)
        if stats is None or stats.weeks_remaining <= 0:
            return None

        self._reflection_seq += 1
        seq = self._reflection_seq
        self._reflections_in_flight += 1
        try:
            text = await self.reflection_provider.request(
                int(stats.current_age),
                int(stats.weeks_remaining),
                self.expected_lifespan_years,
            )
        finally:
            self._reflections_in_flight -= 1

        if seq == self._reflection_seq:
            self.reflection = text
        else:
            logger.debug(f"Discarding stale reflection #{seq} (latest #{self._reflection_seq})")
        return text

    async def refresh(self, now: Optional[datetime] = None) -> Optional[LifeStats]:
        """Recompute stats after an input change and fetch a reflection for them."""
        stats = self.compute_stats(now)
        if stats is not None:
            await self.request_reflection(now)
        return stats

    # -- Reset / render --

    def reset(self) -> None:
        """Clear both inputs, the reflection and the stored entries."""
        self.birth_date = None
        self.expected_lifespan_years = self.settings.default_lifespan_years
        self.reflection = ""
        self._reflection_seq += 1
        self.store.remove(BIRTH_DATE_KEY)
        self.store.remove(LIFESPAN_KEY)
        logger.info("Life calendar reset")

    def render_image(
        self, now: Optional[datetime] = None, output_path: Optional[Path] = None
    ) -> Optional[Path]:
        """Render the grid to PNG, or return None when stats are absent."""
        from .life_weeks_image import render_life_calendar

        stats = self._stats(now)
        if stats is None:
            return None
        return render_life_calendar(
            stats,
            self.expected_lifespan_years,
            output_path=output_path or self._default_image_path(now),
            reflection=self.reflection or None,
        )

    def _default_image_path(self, now: Optional[datetime]) -> Path:
        stamp = (now or datetime.now()).strftime("%Y%m%d")
        return self.settings.image_dir() / f"life-calendar-{stamp}.png"


def build_life_calendar_service(
    settings: Optional[Settings] = None, configure_logging: bool = True
) -> LifeCalendarAppService:
    """Wire the service with the JSON store and LiteLLM provider, then load inputs."""
    from ..utils.logging import setup_logging
    from .preferences_store import JsonPreferenceStore
    from .reflection_service import LLMReflectionProvider, get_reflection_provider

    if settings is None:
        settings = get_settings()
        provider = get_reflection_provider()
    else:
        provider = LLMReflectionProvider(settings)

    if configure_logging:
        setup_logging(
            log_level=settings.log_level,
            log_to_file=settings.log_to_file,
            logs_dir=Path(settings.logs_dir),
        )

    service = LifeCalendarAppService(
        store=JsonPreferenceStore(settings.preferences_file()),
        reflection_provider=provider,
        settings=settings,
    )
    service.load()
    return service
