"""Per-elevation-band danger derivation.

Each avalanche problem contributes its matrix risk to every band in which it
has at least one selected sector. A band's rating is the highest contribution,
or LOW when no active problem touches it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from avyforecast.danger.matrix import risk_level
from avyforecast.danger.sectors import SectorKey
from avyforecast.models.enums import DangerLevel, ElevationBand
from avyforecast.models.schemas import AvalancheProblem, DangerRatings

logger = logging.getLogger(__name__)


def has_sector_in_band(sectors: Iterable[SectorKey], band: ElevationBand) -> bool:
    return any(key.band == band for key in sectors)


def calculate_risk(
    primary: AvalancheProblem,
    secondary: Optional[AvalancheProblem],
    secondary_enabled: bool,
) -> DangerRatings:
    """Combine the primary and (optionally) secondary problem into band ratings.

    A missing secondary problem while ``secondary_enabled`` is set contributes
    nothing; it is not an error.
    """
    primary_risk = risk_level(primary.likelihood, primary.size)

    secondary_active = bool(secondary_enabled) and secondary is not None
    secondary_risk = (
        risk_level(secondary.likelihood, secondary.size) if secondary_active else DangerLevel.LOW
    )

    levels = {}
    for band in ElevationBand:
        max_risk = DangerLevel.LOW
        if has_sector_in_band(primary.sectors, band):
            max_risk = max(max_risk, primary_risk)
        if secondary_active and has_sector_in_band(secondary.sectors, band):
            max_risk = max(max_risk, secondary_risk)
        levels[band.value] = max_risk

    logger.debug(
        "Danger derived: primary=%d secondary=%d -> alp=%d tl=%d btl=%d",
        primary_risk,
        secondary_risk,
        levels["alp"],
        levels["tl"],
        levels["btl"],
    )
    return DangerRatings(**levels)
