from __future__ import annotations

import json
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from avyforecast.danger.sectors import (
    SectorKey,
    SectorLike,
    decode_sectors,
    encode_sectors,
    sort_sectors,
    to_sector_key,
)
from avyforecast.models.enums import (
    AvalancheProblemType,
    DangerLevel,
    DangerTrend,
    ElevationBand,
    ForecastStatus,
    LikelihoodLevel,
    SizeLevel,
)


def _reject_bool_level(value):
    # bool is an int subclass and would otherwise coerce to level 1
    if isinstance(value, bool):
        raise ValueError("level must be an integer in [1, 5], not a bool")
    return value


class AvalancheProblem(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    type: AvalancheProblemType = AvalancheProblemType.WIND_SLAB
    likelihood: LikelihoodLevel = LikelihoodLevel.VERY_LIKELY
    size: SizeLevel = SizeLevel.LARGE
    sectors: set[SectorKey] = Field(default_factory=set)
    description: str = ""

    @field_validator("likelihood", "size", mode="before")
    @classmethod
    def _reject_bool(cls, value):
        return _reject_bool_level(value)

    @field_validator("sectors", mode="before")
    @classmethod
    def _parse_sectors(cls, value):
        if value is None:
            return set()
        if isinstance(value, str):
            return decode_sectors(value)
        return {to_sector_key(item) for item in value}

    @field_serializer("sectors")
    def _serialize_sectors(self, sectors: set[SectorKey]) -> list[str]:
        return [str(key) for key in sort_sectors(sectors)]

    def toggle_sector(self, sector: SectorLike) -> bool:
        """Flip a sector on or off. Returns True if it is now selected."""
        key = to_sector_key(sector)
        if key in self.sectors:
            self.sectors.discard(key)
            return False
        self.sectors.add(key)
        return True

    def add_sector(self, sector: SectorLike) -> None:
        self.sectors.add(to_sector_key(sector))

    def clear_sectors(self) -> None:
        self.sectors.clear()


class DangerRatings(BaseModel):
    model_config = ConfigDict(frozen=True)

    alp: DangerLevel = DangerLevel.LOW
    tl: DangerLevel = DangerLevel.LOW
    btl: DangerLevel = DangerLevel.LOW

    def for_band(self, band: ElevationBand) -> DangerLevel:
        return getattr(self, ElevationBand(band).value)

    @property
    def highest(self) -> DangerLevel:
        return max(self.alp, self.tl, self.btl)

    def as_columns(self) -> dict[str, int]:
        """Map onto the stored danger_alp / danger_tl / danger_btl columns."""
        return {f"danger_{band.value}": int(self.for_band(band)) for band in ElevationBand}


class DangerConfig(BaseModel):
    level: DangerLevel
    color: str
    label: str
    description: str
    prob: str
    cons: str

    @classmethod
    def for_level(cls, level: int) -> "DangerConfig":
        level = DangerLevel(level)
        return cls(
            level=level,
            color=level.color,
            label=level.label,
            description=level.description,
            prob=level.probability,
            cons=level.consequence,
        )


class DangerTrends(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    alp: DangerTrend = DangerTrend.STEADY
    tl: DangerTrend = DangerTrend.STEADY
    btl: DangerTrend = DangerTrend.STEADY


class WeatherData(BaseModel):
    """Forecast weather summary stored alongside the danger ratings."""

    model_config = ConfigDict(validate_assignment=True)

    sky_condition: Optional[str] = None
    transport: Optional[str] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    wind_direction: Optional[str] = None
    wind_speed: Optional[str] = None
    hn24: Optional[float] = Field(default=None, ge=0, description="24h new snow (cm)")
    hst: Optional[float] = Field(default=None, ge=0, description="Storm total snow (cm)")
    hs: Optional[float] = Field(default=None, ge=0, description="Total snow depth (cm)")


def _default_weather() -> WeatherData:
    return WeatherData(
        sky_condition="Clear (CLR)",
        transport="None",
        temp_min=-15,
        temp_max=-8,
        wind_direction="W",
        wind_speed="Moderate (12-30 km/h)",
        hn24=15,
        hst=30,
        hs=145,
    )


def _default_primary() -> AvalancheProblem:
    return AvalancheProblem(
        type=AvalancheProblemType.WIND_SLAB,
        likelihood=LikelihoodLevel.VERY_LIKELY,
        size=SizeLevel.LARGE,
        description="Strong west winds have built sensitive wind slabs on lee slopes.",
    )


def _default_secondary() -> AvalancheProblem:
    return AvalancheProblem(
        type=AvalancheProblemType.LOOSE_DRY,
        likelihood=LikelihoodLevel.POSSIBLE,
        size=SizeLevel.SMALL,
        description="Minor dry sluffing in steep terrain.",
    )


class ForecastDraft(BaseModel):
    """Editor state for a forecast being composed."""

    model_config = ConfigDict(validate_assignment=True)

    forecast_date: date = Field(default_factory=date.today)
    forecaster: str = ""
    status: ForecastStatus = ForecastStatus.DRAFT
    trends: DangerTrends = Field(default_factory=DangerTrends)
    primary: AvalancheProblem = Field(default_factory=_default_primary)
    secondary: Optional[AvalancheProblem] = Field(default_factory=_default_secondary)
    secondary_enabled: bool = True
    weather: Optional[WeatherData] = Field(default_factory=_default_weather)
    snowpack_observation: str = ""
    activity_observation: str = ""
    summary: str = ""

    def danger_levels(self) -> DangerRatings:
        """Current per-band ratings, recomputed from the problems on every call."""
        from avyforecast.danger.calculator import calculate_risk

        return calculate_risk(self.primary, self.secondary, self.secondary_enabled)


class ForecastRecord(BaseModel):
    """Flat forecast row as exchanged with the persistence layer.

    Sector selections travel as JSON array text; the danger columns hold the
    ratings derived when the draft was saved.
    """

    forecast_date: date
    status: ForecastStatus = ForecastStatus.DRAFT

    danger_alp: DangerLevel = DangerLevel.LOW
    danger_tl: DangerLevel = DangerLevel.LOW
    danger_btl: DangerLevel = DangerLevel.LOW
    trend_alp: Optional[DangerTrend] = None
    trend_tl: Optional[DangerTrend] = None
    trend_btl: Optional[DangerTrend] = None

    primary_type: Optional[AvalancheProblemType] = None
    primary_likelihood: Optional[LikelihoodLevel] = None
    primary_size: Optional[SizeLevel] = None
    primary_sectors: Optional[str] = None
    primary_description: Optional[str] = None

    secondary_enabled: bool = False
    secondary_type: Optional[AvalancheProblemType] = None
    secondary_likelihood: Optional[LikelihoodLevel] = None
    secondary_size: Optional[SizeLevel] = None
    secondary_sectors: Optional[str] = None
    secondary_description: Optional[str] = None

    snowpack_observation: Optional[str] = None
    activity_observation: Optional[str] = None
    summary: Optional[str] = None
    weather: Optional[WeatherData] = None

    @field_validator(
        "primary_likelihood",
        "primary_size",
        "secondary_likelihood",
        "secondary_size",
        mode="before",
    )
    @classmethod
    def _reject_bool(cls, value):
        return _reject_bool_level(value)

    @field_validator("weather", mode="before")
    @classmethod
    def _parse_weather(cls, value):
        # CSV exports carry the weather block as JSON object text
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return json.loads(value)
            except json.JSONDecodeError as e:
                raise ValueError(f"Weather column is not valid JSON: {e}") from None
        return value

    @field_validator("primary_sectors", "secondary_sectors", mode="before")
    @classmethod
    def _normalize_sectors(cls, value):
        if value is None:
            return None
        if isinstance(value, (list, tuple, set)):
            return encode_sectors(value)
        decode_sectors(value)
        return value

    @classmethod
    def from_draft(cls, draft: ForecastDraft) -> "ForecastRecord":
        ratings = draft.danger_levels()
        fields = {
            "forecast_date": draft.forecast_date,
            "status": draft.status,
            **ratings.as_columns(),
            "trend_alp": draft.trends.alp,
            "trend_tl": draft.trends.tl,
            "trend_btl": draft.trends.btl,
            "secondary_enabled": draft.secondary_enabled,
            "snowpack_observation": draft.snowpack_observation or None,
            "activity_observation": draft.activity_observation or None,
            "summary": draft.summary or None,
            "weather": draft.weather.model_copy() if draft.weather else None,
        }
        for prefix, problem in (("primary", draft.primary), ("secondary", draft.secondary)):
            if problem is None:
                continue
            fields.update(
                {
                    f"{prefix}_type": problem.type,
                    f"{prefix}_likelihood": problem.likelihood,
                    f"{prefix}_size": problem.size,
                    f"{prefix}_sectors": encode_sectors(problem.sectors),
                    f"{prefix}_description": problem.description or None,
                }
            )
        return cls(**fields)

    def _problem(self, prefix: str) -> Optional[AvalancheProblem]:
        values = {
            "type": getattr(self, f"{prefix}_type"),
            "likelihood": getattr(self, f"{prefix}_likelihood"),
            "size": getattr(self, f"{prefix}_size"),
            "sectors": getattr(self, f"{prefix}_sectors"),
            "description": getattr(self, f"{prefix}_description"),
        }
        present = {k: v for k, v in values.items() if v is not None}
        if not present:
            return None
        return AvalancheProblem(**present)

    def to_draft(self) -> ForecastDraft:
        """Rebuild editor state. Missing problem fields fall back to the
        AvalancheProblem defaults; a primary with no stored fields at all is
        an empty default problem."""
        trends = {
            band.value: getattr(self, f"trend_{band.value}") or DangerTrend.STEADY
            for band in ElevationBand
        }
        return ForecastDraft(
            forecast_date=self.forecast_date,
            status=self.status,
            trends=DangerTrends(**trends),
            primary=self._problem("primary") or AvalancheProblem(),
            secondary=self._problem("secondary"),
            secondary_enabled=self.secondary_enabled,
            snowpack_observation=self.snowpack_observation or "",
            activity_observation=self.activity_observation or "",
            summary=self.summary or "",
            weather=self.weather.model_copy() if self.weather else None,
        )

    def stored_danger(self) -> DangerRatings:
        return DangerRatings(alp=self.danger_alp, tl=self.danger_tl, btl=self.danger_btl)

    def computed_danger(self) -> DangerRatings:
        return self.to_draft().danger_levels()
