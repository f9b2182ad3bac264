"""Danger column audit for exported forecast records.

The stored danger_alp / danger_tl / danger_btl columns are written by the
editor at save time. This module recomputes them from the stored problem
fields and reports every row whose stored ratings drifted from what the risk
matrix gives, plus rows that cannot be parsed at all.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import date
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from avyforecast.config import settings
from avyforecast.models.enums import ElevationBand
from avyforecast.models.schemas import ForecastRecord

logger = logging.getLogger(__name__)

BANDS = [band.value for band in ElevationBand]

REPORT_COLUMNS = (
    ["row", "forecast_date"]
    + [f"stored_{b}" for b in BANDS]
    + [f"computed_{b}" for b in BANDS]
    + ["mismatch", "error"]
)


def _clean_value(value):
    """pandas cell -> plain value pydantic can validate (None for missing)."""
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
    if value is pd.NaT:
        return None
    return value


def clean_record(raw: dict) -> dict:
    """Drop missing cells so model defaults apply."""
    cleaned = {key: _clean_value(value) for key, value in raw.items()}
    return {key: value for key, value in cleaned.items() if value is not None}


def _describe_error(error: Exception) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        return f"{loc}: {first['msg']}" if loc else first["msg"]
    return str(error)


def load_records(path: str | Path) -> pd.DataFrame:
    """Read a forecast export (.csv or .json array of records)."""
    path = Path(path)
    if path.suffix == ".csv":
        df = pd.read_csv(path, dtype={"primary_sectors": str, "secondary_sectors": str})
    elif path.suffix == ".json":
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    else:
        raise ValueError(f"Unsupported export format: {path.suffix or path.name}")
    logger.info("Loaded %d forecast records from %s", len(df), path)
    return df


class DangerAuditor:
    """Recomputes stored danger ratings and flags drift."""

    def __init__(self, output_dir: str | None = None):
        self.output_dir = Path(output_dir or settings.audit_output_dir)

    def audit(self, records: pd.DataFrame) -> pd.DataFrame:
        rows = []
        for idx, raw in enumerate(records.to_dict(orient="records")):
            entry = {col: None for col in REPORT_COLUMNS}
            entry["row"] = idx
            entry["forecast_date"] = _clean_value(raw.get("forecast_date"))
            entry["mismatch"] = False

            try:
                record = ForecastRecord.model_validate(clean_record(raw))
                computed = record.computed_danger()
            except (ValidationError, ValueError) as e:
                entry["error"] = _describe_error(e)
                logger.warning("Row %d could not be audited: %s", idx, entry["error"])
                rows.append(entry)
                continue

            stored = record.stored_danger()
            entry["forecast_date"] = record.forecast_date.isoformat()
            for band in ElevationBand:
                entry[f"stored_{band.value}"] = int(stored.for_band(band))
                entry[f"computed_{band.value}"] = int(computed.for_band(band))
            entry["mismatch"] = stored != computed
            if entry["mismatch"]:
                logger.info(
                    "Row %d (%s): stored %s, computed %s",
                    idx,
                    entry["forecast_date"],
                    stored.as_columns(),
                    computed.as_columns(),
                )
            rows.append(entry)

        report = pd.DataFrame(rows, columns=REPORT_COLUMNS)
        level_columns = [c for c in REPORT_COLUMNS if c.startswith(("stored_", "computed_"))]
        report[level_columns] = report[level_columns].astype("Int64")
        # Keep None (not NaN) for rows without an error on every pandas version
        report["error"] = report["error"].astype(object).where(report["error"].notna(), None)
        logger.info(
            "Danger audit: %d records, %d mismatched, %d invalid",
            len(report),
            int(report["mismatch"].sum()) if len(report) else 0,
            int(report["error"].notna().sum()) if len(report) else 0,
        )
        return report

    def save_report(self, report: pd.DataFrame, path: str | Path | None = None) -> Path:
        if path is None:
            path = self.output_dir / f"danger_audit_{date.today().isoformat()}.csv"
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        report.to_csv(path, index=False)
        logger.info("Audit report saved to %s", path)
        return path

    @staticmethod
    def has_findings(report: pd.DataFrame) -> bool:
        return bool(report["mismatch"].any() or report["error"].notna().any())

    def summary(self, report: pd.DataFrame) -> str:
        """Human-readable summary of an audit report."""
        total = len(report)
        mismatched = report[report["mismatch"].astype(bool)]
        invalid = report[report["error"].notna()]
        status = "FAIL" if self.has_findings(report) else "PASS"

        lines = ["=== Danger Rating Audit ===", ""]
        lines.append(f"Records: {total}")
        lines.append(f"Consistent: {total - len(mismatched) - len(invalid)}")
        lines.append(f"Mismatched: {len(mismatched)}")
        for _, row in mismatched.iterrows():
            stored = "/".join(str(int(row[f"stored_{b}"])) for b in BANDS)
            computed = "/".join(str(int(row[f"computed_{b}"])) for b in BANDS)
            lines.append(
                f"  row {row['row']} ({row['forecast_date']}): "
                f"stored {stored} vs computed {computed}"
            )
        lines.append(f"Invalid: {len(invalid)}")
        for _, row in invalid.iterrows():
            lines.append(f"  row {row['row']}: {row['error']}")
        lines.append("")
        lines.append(f"Overall: {status}")
        return "\n".join(lines)
