from enum import Enum, IntEnum
from typing import Optional


class DangerLevel(IntEnum):
    LOW = 1
    MODERATE = 2
    CONSIDERABLE = 3
    HIGH = 4
    EXTREME = 5

    @property
    def color(self) -> str:
        return {
            DangerLevel.LOW: "#5cb85c",
            DangerLevel.MODERATE: "#f0ad4e",
            DangerLevel.CONSIDERABLE: "#ff9800",
            DangerLevel.HIGH: "#d9534f",
            DangerLevel.EXTREME: "#292b2c",
        }[self]

    @property
    def label(self) -> str:
        return f"{self.value} {self.name.title()}"

    @property
    def description(self) -> str:
        return {
            DangerLevel.LOW: "Generally safe. Watch for isolated unstable snow.",
            DangerLevel.MODERATE: (
                "Heightened conditions on specific terrain. "
                "Evaluate snow and terrain carefully."
            ),
            DangerLevel.CONSIDERABLE: (
                "Dangerous conditions. Careful snowpack evaluation essential."
            ),
            DangerLevel.HIGH: "Very dangerous. Travel in avalanche terrain not recommended.",
            DangerLevel.EXTREME: "Avoid all avalanche terrain.",
        }[self]

    @property
    def probability(self) -> str:
        return {
            DangerLevel.LOW: "Very difficult to trigger",
            DangerLevel.MODERATE: "Human triggering possible",
            DangerLevel.CONSIDERABLE: "Human triggering likely",
            DangerLevel.HIGH: "Natural and human triggering very likely",
            DangerLevel.EXTREME: "Natural avalanches certain",
        }[self]

    @property
    def consequence(self) -> str:
        return {
            DangerLevel.LOW: "Small avalanches (Size 1)",
            DangerLevel.MODERATE: "Small to large (Size 1-2)",
            DangerLevel.CONSIDERABLE: "Large, potentially fatal (Size 2-3)",
            DangerLevel.HIGH: "Large to very large (Size 3-4)",
            DangerLevel.EXTREME: "Very large to catastrophic (Size 4-5)",
        }[self]


class LikelihoodLevel(IntEnum):
    UNLIKELY = 1
    POSSIBLE = 2
    LIKELY = 3
    VERY_LIKELY = 4
    CERTAIN = 5

    @property
    def label(self) -> str:
        return f"{self.value} {self.name.replace('_', ' ').title()}"


class SizeLevel(IntEnum):
    SMALL = 1
    LARGE = 2
    VERY_LARGE = 3
    HISTORIC = 4
    CATASTROPHIC = 5

    @property
    def label(self) -> str:
        return f"{self.value} {self.name.replace('_', ' ').title()}"


class ElevationBand(str, Enum):
    ALP = "alp"
    TL = "tl"
    BTL = "btl"

    @property
    def display_name(self) -> str:
        return {
            ElevationBand.ALP: "Alpine",
            ElevationBand.TL: "Treeline",
            ElevationBand.BTL: "Below Treeline",
        }[self]

    @property
    def elevation_range(self) -> tuple[Optional[int], Optional[int]]:
        """(lower, upper) bounds in metres; None means unbounded."""
        return {
            ElevationBand.ALP: (2200, None),
            ElevationBand.TL: (1800, 2200),
            ElevationBand.BTL: (None, 1800),
        }[self]


class Direction(str, Enum):
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @property
    def index(self) -> int:
        """Position clockwise from north (N=0 .. NW=7)."""
        return list(Direction).index(self)


class DangerTrend(str, Enum):
    STEADY = "steady"
    RISING = "rising"
    FALLING = "falling"

    @classmethod
    def _missing_(cls, value):
        # Stored records use increasing/decreasing
        aliases = {"increasing": cls.RISING, "decreasing": cls.FALLING}
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None

    @property
    def text(self) -> str:
        return {
            DangerTrend.STEADY: "Steady",
            DangerTrend.RISING: "Rising",
            DangerTrend.FALLING: "Falling",
        }[self]

    @property
    def color(self) -> str:
        return {
            DangerTrend.STEADY: "#555555",
            DangerTrend.RISING: "#d9534f",
            DangerTrend.FALLING: "#27ae60",
        }[self]

    @property
    def background(self) -> str:
        return {
            DangerTrend.STEADY: "#eeeeee",
            DangerTrend.RISING: "#fce8e6",
            DangerTrend.FALLING: "#e8f8f5",
        }[self]


class AvalancheProblemType(str, Enum):
    WIND_SLAB = "Wind Slab"
    STORM_SLAB = "Storm Slab"
    PERSISTENT_SLAB = "Persistent Slab"
    DEEP_PERSISTENT_SLAB = "Deep Persistent Slab"
    LOOSE_DRY = "Loose Dry"
    LOOSE_WET = "Loose Wet"
    WET_SLAB = "Wet Slab"

    @classmethod
    def _missing_(cls, value):
        # Accepts "wind slab" and bilingual labels like "<local name> (Wind Slab)"
        if not isinstance(value, str):
            return None
        text = value.strip()
        if text.endswith(")") and "(" in text:
            text = text[text.rindex("(") + 1 : -1]
        for member in cls:
            if member.value.lower() == text.strip().lower():
                return member
        return None


class ForecastStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"
