"""
Life Calendar Image Rendering

Draws the classified week grid as rows of dots, one row per year, with a
caption of the current stats underneath.
"""

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from ..core.config import get_settings
from .life_weeks_domain import (
    MAX_LIFESPAN_YEARS,
    MIN_LIFESPAN_YEARS,
    WEEKS_PER_YEAR,
    CellState,
    LifeStats,
    classify_weeks,
)

logger = logging.getLogger(__name__)

# Constants for grid design
CELL_SIZE = 14  # pixels
DOT_MARGIN = 3  # pixels between dot edge and cell edge
GRID_PADDING = 40  # pixels around the grid
LABEL_WIDTH = 36  # pixels for year labels left of the grid
TEXT_AREA_HEIGHT = 170  # pixels for text overlay at bottom
LABEL_EVERY_YEARS = 5

# Colors (RGBA)
STATE_COLORS = {
    CellState.LIVED: (30, 41, 59, 255),  # slate
    CellState.CURRENT: (34, 211, 238, 255),  # cyan
    CellState.FUTURE: (16, 185, 129, 204),  # emerald, 80% opacity
}
LIVED_OUTLINE_COLOR = (51, 65, 85, 255)
LABEL_COLOR = (100, 116, 139, 255)
TEXT_COLOR = (226, 232, 240, 255)
BACKGROUND_COLOR = (2, 6, 23, 255)

_FONT_CANDIDATES = (
    "/System/Library/Fonts/Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
)


def calculate_image_size(expected_lifespan_years: int) -> Tuple[int, int]:
    """Calculate image dimensions for a grid of the given number of years."""
    width = LABEL_WIDTH + (WEEKS_PER_YEAR * CELL_SIZE) + (2 * GRID_PADDING)
    height = (
        (expected_lifespan_years * CELL_SIZE) + (2 * GRID_PADDING) + TEXT_AREA_HEIGHT
    )
    return width, height


def _load_font(size: int) -> Union[FreeTypeFont, ImageFont.ImageFont]:
    for candidate in _FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default()


def _draw_year_labels(
    draw: ImageDraw.ImageDraw, x_offset: int, y_offset: int, years: int
) -> None:
    """Label year 1 and every fifth year after it."""
    font = _load_font(10)
    for year in range(years):
        if year != 0 and (year + 1) % LABEL_EVERY_YEARS != 0:
            continue
        y = y_offset + (year * CELL_SIZE) + CELL_SIZE // 2
        draw.text(
            (x_offset + LABEL_WIDTH - 8, y),
            str(year + 1),
            fill=LABEL_COLOR,
            font=font,
            anchor="rm",
        )


def _draw_cells(
    draw: ImageDraw.ImageDraw,
    x_offset: int,
    y_offset: int,
    weeks_lived: float,
    years: int,
) -> None:
    """Draw one dot per week, colored by its state."""
    for cell in classify_weeks(weeks_lived, years):
        x = x_offset + (cell.week_index * CELL_SIZE)
        y = y_offset + (cell.year * CELL_SIZE)
        box = [
            x + DOT_MARGIN,
            y + DOT_MARGIN,
            x + CELL_SIZE - DOT_MARGIN,
            y + CELL_SIZE - DOT_MARGIN,
        ]
        outline = LIVED_OUTLINE_COLOR if cell.state is CellState.LIVED else None
        draw.ellipse(box, fill=STATE_COLORS[cell.state], outline=outline)


def _draw_text_overlay(
    draw: ImageDraw.ImageDraw,
    image_width: int,
    image_height: int,
    stats: LifeStats,
    expected_lifespan_years: int,
    reflection: Optional[str],
) -> None:
    """Draw the stats caption and optional reflection below the grid."""
    font_medium = _load_font(18)
    font_small = _load_font(14)

    lines = [
        f"{stats.percent_lived:.1f}% of {expected_lifespan_years} years lived",
        f"{math.floor(stats.weeks_remaining):,} weeks remaining",
        f"Age {stats.current_age:.1f}",
        f"Week {math.floor(stats.weeks_lived):,} / {stats.total_weeks:,}",
    ]

    text_y = image_height - TEXT_AREA_HEIGHT + 10
    for line in lines:
        draw.text(
            (image_width // 2, text_y),
            line,
            fill=TEXT_COLOR,
            font=font_medium,
            anchor="mt",
        )
        text_y += 26

    if reflection:
        draw.text(
            (image_width // 2, text_y + 8),
            reflection,
            fill=LABEL_COLOR,
            font=font_small,
            anchor="mt",
        )


def render_life_calendar(
    stats: LifeStats,
    expected_lifespan_years: int,
    output_path: Optional[Path] = None,
    reflection: Optional[str] = None,
) -> Path:
    """
    Render the life calendar grid to a PNG file.

    Args:
        stats: Computed life statistics
        expected_lifespan_years: Number of grid rows (1-120)
        output_path: Destination file (defaults to the configured image directory)
        reflection: Optional reflection line shown under the stats

    Returns:
        Path to the generated PNG image

    Raises:
        ValueError: If expected_lifespan_years is out of range
    """
    if not MIN_LIFESPAN_YEARS <= expected_lifespan_years <= MAX_LIFESPAN_YEARS:
        raise ValueError(
            f"expected_lifespan_years must be between {MIN_LIFESPAN_YEARS} "
            f"and {MAX_LIFESPAN_YEARS}"
        )

    image_width, image_height = calculate_image_size(expected_lifespan_years)
    image = Image.new("RGBA", (image_width, image_height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    _draw_year_labels(draw, GRID_PADDING, GRID_PADDING, expected_lifespan_years)
    _draw_cells(
        draw,
        GRID_PADDING + LABEL_WIDTH,
        GRID_PADDING,
        stats.weeks_lived,
        expected_lifespan_years,
    )
    _draw_text_overlay(
        draw, image_width, image_height, stats, expected_lifespan_years, reflection
    )

    if output_path is None:
        timestamp = datetime.now().strftime("%Y%m%d")
        output_path = get_settings().image_dir() / f"life-calendar-{timestamp}.png"
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    image.save(output_path, "PNG")
    logger.info(f"Rendered life calendar: {output_path}")

    return output_path
