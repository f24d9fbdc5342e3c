"""
Command-line interface for FinPlanLab.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import warnings

import numpy as np
import pandas as pd

from finplanlab import __version__
from finplanlab.core.catalog import EVENT_GROUPS, get_event_meta, list_event_types_by_group
from finplanlab.core.errors import ConfigError, FinPlanWarning
from finplanlab.core.projection import compute_projection
from finplanlab.core.specs import EventAssumptions, ProjectionInput
from finplanlab.io import load_document


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy scalars and arrays, and pandas objects."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.datetime64):
            return str(obj)
        elif isinstance(obj, pd.Series):
            return obj.to_dict()
        return super().default(obj)


def _save_json(path: str, data: dict) -> None:
    """Save data as JSON to file path."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, cls=NumpyEncoder)


EXAMPLE_INPUT = {
    "baseMonth": "2026-01",
    "horizonMonths": 120,
    "initialCash": 40000,
    "events": [
        {
            "id": "salary",
            "type": "salary",
            "startMonth": "2026-01",
            "monthlyAmount": 5200,
        },
        {
            "id": "rent",
            "type": "rent",
            "startMonth": "2026-01",
            "endMonth": "2026-06",
            "monthlyAmount": -1600,
        },
        {
            "id": "living",
            "type": "custom",
            "startMonth": "2026-01",
            "monthlyAmount": -1800,
            "annualGrowthPct": 0.02,
        },
        {
            "id": "baby",
            "type": "baby",
            "startMonth": "2027-03",
            "endMonth": "2030-02",
            "monthlyAmount": -600,
            "oneTimeAmount": -3000,
        },
    ],
    "positions": {
        "homes": [
            {
                "id": "main",
                "purchaseMonth": "2026-07",
                "purchasePrice": 420000,
                "downPayment": 84000,
                "feesOneTime": 12000,
                "annualAppreciation": 0.02,
                "holdingCostMonthly": 250,
                "holdingCostAnnualGrowth": 0.02,
                "mortgage": {"principal": 336000, "annualRate": 0.035, "termMonths": 300},
            }
        ],
        "investments": [
            {
                "id": "etf",
                "startMonth": "2026-01",
                "initialValue": 15000,
                "annualReturnRate": 0.05,
                "monthlyContribution": 300,
                "feeAnnualRate": 0.002,
            }
        ],
        "cars": [
            {
                "id": "family-car",
                "purchaseMonth": "2027-01",
                "purchasePrice": 28000,
                "downPayment": 8000,
                "annualDepreciationRate": -0.15,
                "holdingCostMonthly": 180,
                "holdingCostAnnualGrowth": 0.03,
                "loan": {"principal": 20000, "annualInterestRate": 0.049, "termMonths": 48},
            }
        ],
    },
    "assumptions": {"inflationRate": 0.02, "salaryGrowthRate": 0.025},
}


def _load_projection(args) -> tuple[ProjectionInput, EventAssumptions | None]:
    doc = load_document(args.input)
    raw_assumptions = doc.get("assumptions")
    if getattr(args, "assumptions", None):
        raw_assumptions = load_document(args.assumptions)
    assumptions = (
        EventAssumptions.from_dict(raw_assumptions) if raw_assumptions else None
    )
    return ProjectionInput.from_dict(doc), assumptions


def cmd_example(_) -> int:
    """Print a complete example projection input as JSON."""
    json.dump(EXAMPLE_INPUT, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_run(args) -> int:
    """Run a projection and print its summary; optionally export the full result."""
    try:
        projection_input, assumptions = _load_projection(args)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", FinPlanWarning)
            result = compute_projection(projection_input, assumptions)
        for w in caught:
            print(f"Warning: {w.message}", file=sys.stderr)

        json.dump(result.summary(), sys.stdout, indent=2, cls=NumpyEncoder)
        sys.stdout.write("\n")

        if args.output:
            _save_json(args.output, result.to_dict())
            print(f"Results saved to {args.output}", file=sys.stderr)
        if args.csv:
            result.to_frame().to_csv(args.csv)
            print(f"Monthly series saved to {args.csv}", file=sys.stderr)
        return 0
    except (ConfigError, OSError) as e:
        print(f"Error running projection: {e}", file=sys.stderr)
        return 1


def cmd_validate(args) -> int:
    """Validate a projection input without running it."""
    try:
        projection_input, _ = _load_projection(args)
    except (ConfigError, OSError) as e:
        print(f"❌ Validation failed: {e}")
        return 1
    print(
        f"✅ Valid: {projection_input.horizon_months} months from "
        f"{projection_input.base_month}, {len(projection_input.events)} events, "
        f"{len(projection_input.positions)} positions"
    )
    return 0


def cmd_catalog(args) -> int:
    """List event types by group."""
    if args.json:
        output = {
            group.value: [
                {
                    "type": event_type,
                    "label": get_event_meta(event_type).label,
                    "default_sign": get_event_meta(event_type).default_sign.value,
                }
                for event_type in list_event_types_by_group(group)
            ]
            for group in EVENT_GROUPS
        }
        json.dump(output, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    for group in EVENT_GROUPS:
        types = list_event_types_by_group(group)
        if not types:
            continue
        print(f"{group.value}:")
        for event_type in types:
            meta = get_event_meta(event_type)
            print(f"  {event_type:<25} {meta.label:<25} {meta.default_sign.value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finplan", description="FinPlanLab - Personal finance projection engine"
    )

    # Version argument
    parser.add_argument(
        "--version", action="version", version=f"FinPlanLab {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(
        dest="cmd", required=True, help="Available commands"
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example", help="Print an example projection input JSON"
    )
    example_parser.set_defaults(func=cmd_example)

    # Run command
    run_parser = subparsers.add_parser(
        "run", help="Run a projection input (JSON or YAML) and print its summary"
    )
    run_parser.add_argument(
        "-i", "--input", required=True, help="Input projection file (JSON or YAML)"
    )
    run_parser.add_argument("-o", "--output", help="Write the full result as JSON")
    run_parser.add_argument("--csv", help="Write the monthly series as CSV")
    run_parser.add_argument(
        "--assumptions",
        help="Event growth assumptions file (overrides the input's 'assumptions')",
    )
    run_parser.set_defaults(func=cmd_run)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate", help="Validate a projection input"
    )
    validate_parser.add_argument(
        "-i", "--input", required=True, help="Input projection file (JSON or YAML)"
    )
    validate_parser.set_defaults(func=cmd_validate)

    # Catalog command
    catalog_parser = subparsers.add_parser(
        "catalog", help="List event types by group"
    )
    catalog_parser.add_argument(
        "--json", action="store_true", help="Output in JSON format"
    )
    catalog_parser.set_defaults(func=cmd_catalog)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
