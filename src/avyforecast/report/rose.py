"""Terrain rose geometry.

The rose is three concentric rings (alpine innermost, below-treeline
outermost) split into eight 45 degree wedges. Angles are compass degrees,
clockwise from north; the SVG coordinate system has y pointing down.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional

from avyforecast.config import settings
from avyforecast.danger.sectors import ALL_SECTOR_KEYS, SectorLike, to_sector_key
from avyforecast.models.enums import Direction, ElevationBand

logger = logging.getLogger(__name__)

# (inner radius, outer radius) in a 100x100 viewbox centred on (50, 50)
BAND_RINGS: dict[ElevationBand, tuple[float, float]] = {
    ElevationBand.ALP: (5, 20),
    ElevationBand.TL: (20, 35),
    ElevationBand.BTL: (35, 49),
}

CENTER = (50.0, 50.0)
WEDGE_DEGREES = 45.0


def _fmt(value: float) -> str:
    # round() then +0.0 folds -0.0 into 0.0
    return f"{round(value, 3) + 0.0:g}"


def polar_to_cart(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    """Point at ``radius`` from (cx, cy) for a compass angle in degrees."""
    rad = math.radians(angle - 90)
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def direction_angle(direction: Direction) -> float:
    """Start angle of the wedge centred on ``direction``."""
    return Direction(direction).index * WEDGE_DEGREES - WEDGE_DEGREES / 2


def sector_path(
    cx: float,
    cy: float,
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
) -> str:
    """SVG path data for an annular wedge between two angles."""
    outer_start = polar_to_cart(cx, cy, outer_radius, end_angle)
    outer_end = polar_to_cart(cx, cy, outer_radius, start_angle)
    inner_start = polar_to_cart(cx, cy, inner_radius, end_angle)
    inner_end = polar_to_cart(cx, cy, inner_radius, start_angle)

    large_arc = 0 if end_angle - start_angle <= 180 else 1

    return " ".join(
        [
            f"M {_fmt(outer_start[0])} {_fmt(outer_start[1])}",
            f"A {_fmt(outer_radius)} {_fmt(outer_radius)} 0 {large_arc} 0 "
            f"{_fmt(outer_end[0])} {_fmt(outer_end[1])}",
            f"L {_fmt(inner_end[0])} {_fmt(inner_end[1])}",
            f"A {_fmt(inner_radius)} {_fmt(inner_radius)} 0 {large_arc} 1 "
            f"{_fmt(inner_start[0])} {_fmt(inner_start[1])}",
            "Z",
        ]
    )


def sector_key_path(sector: SectorLike) -> str:
    key = to_sector_key(sector)
    inner, outer = BAND_RINGS[key.band]
    start = direction_angle(key.direction)
    return sector_path(CENTER[0], CENTER[1], inner, outer, start, start + WEDGE_DEGREES)


def rose_svg(
    sectors: Iterable[SectorLike],
    size: Optional[int] = None,
    variant: str = "primary",
) -> str:
    """Standalone SVG document of the rose with ``sectors`` highlighted."""
    if variant not in ("primary", "secondary"):
        raise ValueError(f"Unknown rose variant: {variant!r}")
    size = size or settings.rose_size
    selected = {to_sector_key(s) for s in sectors}
    fill = settings.rose_primary_color if variant == "primary" else settings.rose_secondary_color
    stroke = settings.rose_stroke_color
    cx, cy = CENTER

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="-2 -2 104 104">',
    ]
    for radius, ring_fill in ((49, "#ffffff"), (35, "none"), (20, "none")):
        parts.append(
            f'<circle cx="{_fmt(cx)}" cy="{_fmt(cy)}" r="{radius}" fill="{ring_fill}" '
            f'stroke="{stroke}" stroke-width="0.5"/>'
        )
    for key in ALL_SECTOR_KEYS:
        color = fill if key in selected else settings.rose_base_color
        parts.append(
            f'<path data-sector="{key}" d="{sector_key_path(key)}" fill="{color}" '
            f'stroke="{stroke}" stroke-width="0.5"/>'
        )
    parts.append('<text x="50" y="8" font-size="8" fill="#aaaaaa" text-anchor="middle">N</text>')
    parts.append("</svg>")

    logger.debug("Rendered rose with %d of %d sectors selected", len(selected), len(ALL_SECTOR_KEYS))
    return "\n".join(parts)
