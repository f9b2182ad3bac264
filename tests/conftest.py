"""Shared test fixtures."""

import os

# Set debug mode BEFORE any avyforecast imports so Settings picks it up
os.environ["AVYFORECAST_DEBUG"] = "true"

import pandas as pd
import pytest

from avyforecast.models.schemas import AvalancheProblem


@pytest.fixture
def wind_slab():
    """Primary problem on the northerly alpine aspects."""
    return AvalancheProblem(
        type="Wind Slab",
        likelihood=4,
        size=2,
        sectors={"alp_N", "alp_NE"},
        description="Reactive wind slabs on lee features.",
    )


@pytest.fixture
def loose_dry():
    """Secondary problem below treeline on the south aspect."""
    return AvalancheProblem(
        type="Loose Dry",
        likelihood=2,
        size=1,
        sectors={"btl_S"},
        description="Sluffing in steep terrain.",
    )


@pytest.fixture
def sample_records_df():
    """Three exported forecast rows: consistent, drifted, and malformed."""
    return pd.DataFrame(
        {
            "forecast_date": ["2025-01-10", "2025-01-11", "2025-01-12"],
            "status": ["published", "published", "draft"],
            "danger_alp": [3, 2, 1],
            "danger_tl": [1, 1, 1],
            "danger_btl": [1, 1, 1],
            "primary_type": ["Wind Slab", "Storm Slab", "Wind Slab"],
            "primary_likelihood": [4, 5, 4],
            "primary_size": [2, 3, 2],
            "primary_sectors": ['["alp_N","alp_NE"]', '["alp_W","tl_W"]', '["summit_N"]'],
            "secondary_enabled": [False, False, False],
        }
    )
