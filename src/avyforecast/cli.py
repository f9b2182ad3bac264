"""avyforecast command-line tool.

Usage:
    python -m avyforecast.cli matrix
    python -m avyforecast.cli calculate --file draft.json [--json]
    python -m avyforecast.cli calculate --primary-likelihood 4 --primary-size 2 \
        --primary-sectors alp_N,alp_NE --no-secondary
    python -m avyforecast.cli rose --sectors alp_N,tl_NE [--output rose.svg]
    python -m avyforecast.cli audit --input forecasts.csv [--output report.csv | --save]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from avyforecast.config import settings

logger = logging.getLogger("avyforecast.cli")


def _split_sectors(text):
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def show_matrix(args):
    """Print the likelihood x size risk matrix."""
    from avyforecast.danger.matrix import risk_levels
    from avyforecast.models.enums import LikelihoodLevel, SizeLevel

    likelihoods = [level.value for level in reversed(LikelihoodLevel)]
    sizes = [level.value for level in SizeLevel]
    ll, ss = np.meshgrid(likelihoods, sizes, indexing="ij")
    grid = risk_levels(ll, ss)

    header = f"{'Likelihood / Size':<20}" + "".join(
        f"{SizeLevel(s).label:<16}" for s in sizes
    )
    print(header)
    print("-" * len(header))
    for row, likelihood in zip(grid, likelihoods):
        cells = "".join(f"{int(v):<16}" for v in row)
        print(f"{LikelihoodLevel(likelihood).label:<20}{cells}")


def _draft_from_args(args):
    from avyforecast.models.schemas import ForecastDraft

    if args.file:
        return ForecastDraft.model_validate_json(Path(args.file).read_text())

    draft = ForecastDraft()
    if args.primary_likelihood is not None:
        draft.primary.likelihood = args.primary_likelihood
    if args.primary_size is not None:
        draft.primary.size = args.primary_size
    draft.primary.sectors = _split_sectors(args.primary_sectors)
    if args.secondary_likelihood is not None:
        draft.secondary.likelihood = args.secondary_likelihood
    if args.secondary_size is not None:
        draft.secondary.size = args.secondary_size
    draft.secondary.sectors = _split_sectors(args.secondary_sectors)
    draft.secondary_enabled = not args.no_secondary
    return draft


def calculate(args):
    """Derive per-band danger ratings for a draft."""
    from avyforecast.models.enums import ElevationBand

    draft = _draft_from_args(args)
    ratings = draft.danger_levels()

    if args.json:
        print(json.dumps(ratings.as_columns()))
        return

    for band in ElevationBand:
        level = ratings.for_band(band)
        print(f"{band.display_name:<16} {level.label:<16} {level.color}")


def rose(args):
    """Render the terrain rose for a sector selection as SVG."""
    from avyforecast.report.rose import rose_svg

    svg = rose_svg(_split_sectors(args.sectors), size=args.size, variant=args.variant)
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(svg)
        print(f"Rose saved to {out}")
    else:
        print(svg)


def audit(args):
    """Recompute stored danger columns of a forecast export."""
    from avyforecast.pipelines.danger_audit import DangerAuditor, load_records

    auditor = DangerAuditor()
    report = auditor.audit(load_records(args.input))
    print(auditor.summary(report))

    if args.output or args.save:
        path = auditor.save_report(report, args.output)
        print(f"Report saved to {path}")

    if auditor.has_findings(report):
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(description="Avalanche forecast danger tools")
    sub = parser.add_subparsers(dest="command")

    # matrix
    sub.add_parser("matrix", help="Print the risk matrix")

    # calculate
    p_calc = sub.add_parser("calculate", help="Derive danger ratings per elevation band")
    p_calc.add_argument("--file", type=str, help="Forecast draft JSON file")
    p_calc.add_argument("--primary-likelihood", type=int)
    p_calc.add_argument("--primary-size", type=int)
    p_calc.add_argument("--primary-sectors", type=str, default="", help="e.g. alp_N,alp_NE")
    p_calc.add_argument("--secondary-likelihood", type=int)
    p_calc.add_argument("--secondary-size", type=int)
    p_calc.add_argument("--secondary-sectors", type=str, default="")
    p_calc.add_argument("--no-secondary", action="store_true", help="Disable the secondary problem")
    p_calc.add_argument("--json", action="store_true", help="Print danger columns as JSON")

    # rose
    p_rose = sub.add_parser("rose", help="Render a terrain rose as SVG")
    p_rose.add_argument("--sectors", type=str, default="", help="e.g. alp_N,tl_NE")
    p_rose.add_argument("--size", type=int, default=None, help="Pixel size (default: from config)")
    p_rose.add_argument("--variant", choices=["primary", "secondary"], default="primary")
    p_rose.add_argument("--output", type=str, help="Write SVG to this file")

    # audit
    p_audit = sub.add_parser("audit", help="Check stored danger columns in an export")
    p_audit.add_argument("--input", required=True, help="Forecast export (.csv or .json)")
    p_audit.add_argument("--output", type=str, help="Write the per-row report CSV here")
    p_audit.add_argument(
        "--save", action="store_true", help="Write the report to the configured audit dir"
    )

    return parser


def main(argv=None):
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "matrix": show_matrix,
        "calculate": calculate,
        "rose": rose,
        "audit": audit,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except (ValidationError, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        sys.exit(2)


if __name__ == "__main__":
    main()
