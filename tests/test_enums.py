"""Tests for domain enums."""

import pytest

from avyforecast.models.enums import (
    AvalancheProblemType,
    DangerLevel,
    DangerTrend,
    Direction,
    ElevationBand,
    ForecastStatus,
    LikelihoodLevel,
    SizeLevel,
)


class TestDangerLevel:
    def test_total_order(self):
        assert DangerLevel.LOW < DangerLevel.MODERATE < DangerLevel.EXTREME
        assert max(DangerLevel.HIGH, DangerLevel.CONSIDERABLE) == DangerLevel.HIGH

    def test_int_values(self):
        assert [int(level) for level in DangerLevel] == [1, 2, 3, 4, 5]

    def test_color_property(self):
        assert DangerLevel.LOW.color == "#5cb85c"
        assert DangerLevel.EXTREME.color == "#292b2c"

    def test_labels(self):
        assert DangerLevel.CONSIDERABLE.label == "3 Considerable"
        assert DangerLevel.EXTREME.label == "5 Extreme"

    def test_all_levels_have_config(self):
        for level in DangerLevel:
            assert level.color.startswith("#")
            assert level.description
            assert level.probability
            assert level.consequence


class TestLikelihoodAndSize:
    def test_likelihood_labels(self):
        assert LikelihoodLevel.VERY_LIKELY.label == "4 Very Likely"
        assert LikelihoodLevel(1).label == "1 Unlikely"

    def test_size_labels(self):
        assert SizeLevel.CATASTROPHIC.label == "5 Catastrophic"
        assert SizeLevel(3).label == "3 Very Large"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            LikelihoodLevel(6)
        with pytest.raises(ValueError):
            SizeLevel(0)


class TestElevationBand:
    def test_closed_set_in_order(self):
        assert [band.value for band in ElevationBand] == ["alp", "tl", "btl"]

    def test_elevation_ranges(self):
        assert ElevationBand.ALP.elevation_range == (2200, None)
        assert ElevationBand.TL.elevation_range == (1800, 2200)
        assert ElevationBand.BTL.elevation_range == (None, 1800)

    def test_display_names(self):
        assert ElevationBand.BTL.display_name == "Below Treeline"


class TestDirection:
    def test_eight_points_clockwise(self):
        assert [d.value for d in Direction] == ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

    def test_index(self):
        assert Direction.N.index == 0
        assert Direction.NW.index == 7


class TestDangerTrend:
    def test_values(self):
        assert DangerTrend("rising") == DangerTrend.RISING

    def test_stored_aliases(self):
        assert DangerTrend("increasing") == DangerTrend.RISING
        assert DangerTrend("decreasing") == DangerTrend.FALLING

    def test_unknown(self):
        with pytest.raises(ValueError):
            DangerTrend("sideways")

    def test_display(self):
        assert DangerTrend.FALLING.text == "Falling"
        assert DangerTrend.RISING.color == "#d9534f"

    def test_background_per_trend(self):
        assert DangerTrend.STEADY.background == "#eeeeee"
        assert {t.background for t in DangerTrend} == {"#eeeeee", "#fce8e6", "#e8f8f5"}


class TestAvalancheProblemType:
    def test_count(self):
        assert len(AvalancheProblemType) == 7

    def test_case_insensitive(self):
        assert AvalancheProblemType("wind slab") == AvalancheProblemType.WIND_SLAB

    def test_bilingual_label(self):
        assert (
            AvalancheProblemType("Schneebrett (Deep Persistent Slab)")
            == AvalancheProblemType.DEEP_PERSISTENT_SLAB
        )

    def test_unknown(self):
        with pytest.raises(ValueError):
            AvalancheProblemType("Cornice")


class TestForecastStatus:
    def test_values(self):
        assert {s.value for s in ForecastStatus} == {"draft", "published", "archived"}
