"""Terrain rose sector keys.

A sector is one elevation band in one compass direction (24 in total). The
string form ``"alp_N"`` is what the persistence layer stores, as a JSON array
per avalanche problem; everything inside the package works with
:class:`SectorKey` tuples instead.
"""

from __future__ import annotations

import json
from typing import Iterable, NamedTuple, Optional, Union

from avyforecast.models.enums import Direction, ElevationBand


class SectorKey(NamedTuple):
    band: ElevationBand
    direction: Direction

    @classmethod
    def parse(cls, value: str) -> "SectorKey":
        """Parse ``"{band}_{direction}"``, e.g. ``"tl_SW"``."""
        if not isinstance(value, str):
            raise ValueError(f"Sector key must be a string, got {type(value).__name__}")
        band, sep, direction = value.strip().partition("_")
        if not sep:
            raise ValueError(f"Malformed sector key: {value!r}")
        try:
            return cls(ElevationBand(band), Direction(direction))
        except ValueError:
            raise ValueError(f"Unknown sector key: {value!r}") from None

    def __str__(self) -> str:
        return f"{self.band.value}_{self.direction.value}"


ALL_SECTOR_KEYS: tuple[SectorKey, ...] = tuple(
    SectorKey(band, direction) for band in ElevationBand for direction in Direction
)

_SECTOR_ORDER = {key: i for i, key in enumerate(ALL_SECTOR_KEYS)}

SectorLike = Union[SectorKey, str, tuple]


def to_sector_key(value: SectorLike) -> SectorKey:
    """Coerce a key string or (band, direction) pair into a SectorKey."""
    if isinstance(value, SectorKey):
        return value
    if isinstance(value, str):
        return SectorKey.parse(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        try:
            return SectorKey(ElevationBand(value[0]), Direction(value[1]))
        except ValueError:
            raise ValueError(f"Unknown sector key: {tuple(value)!r}") from None
    raise ValueError(f"Cannot interpret {value!r} as a sector key")


def sort_sectors(sectors: Iterable[SectorKey]) -> list[SectorKey]:
    """Band-then-direction order (alp_N .. btl_NW)."""
    return sorted(sectors, key=_SECTOR_ORDER.__getitem__)


def sectors_in_band(sectors: Iterable[SectorKey], band: ElevationBand) -> list[SectorKey]:
    return sort_sectors(key for key in sectors if key.band == band)


def encode_sectors(sectors: Iterable[SectorLike]) -> str:
    """Serialize sectors to the stored JSON array of key strings."""
    keys = sort_sectors({to_sector_key(s) for s in sectors})
    return json.dumps([str(k) for k in keys], separators=(",", ":"))


def decode_sectors(text: Optional[str]) -> set[SectorKey]:
    """Parse a stored JSON array back into a set of SectorKeys.

    NULL and empty columns decode to an empty set. Anything else that is not a
    JSON array of known key strings raises ValueError.
    """
    if text is None or not text.strip():
        return set()
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Sectors column is not valid JSON: {e}") from None
    if not isinstance(payload, list):
        raise ValueError(f"Sectors column must be a JSON array, got {type(payload).__name__}")
    return {SectorKey.parse(item) for item in payload}
