"""Simulate an exported flow file and print the savings report.

Usage:
    python -m procflow.simulation.report flow.json --rate 3000 --frequency 250
"""

import argparse
import json
import sys
from pathlib import Path

from procflow import config
from procflow.errors import FlowParseError
from procflow.models.simulation import SimulationResult
from procflow.serialization import import_flow
from procflow.simulation.engine import calculate_simulation


def format_minutes(minutes: int) -> str:
    """Render minutes as e.g. '1時間30分' or '45分'."""
    if minutes >= 60:
        hours, rest = divmod(minutes, 60)
        return f"{hours}時間{rest}分" if rest else f"{hours}時間"
    return f"{minutes}分"


def format_report(flow_name: str, result: SimulationResult) -> str:
    """Format a simulation result as human-readable text."""
    current = result.current_total
    improved = result.improved_total
    savings = result.savings
    lines = [
        "=" * 40,
        f"SIMULATION: {flow_name}",
        "=" * 40,
        f"  Current:  {format_minutes(current.duration)} / run, "
        f"{current.annual_hours:.1f} h/year, ¥{current.annual_cost:,.0f}/year",
        f"  Improved: {format_minutes(improved.duration)} / run, "
        f"{improved.annual_hours:.1f} h/year, ¥{improved.annual_cost:,.0f}/year",
        "-" * 40,
        f"  Saved:    {format_minutes(savings.duration)} / run, "
        f"{savings.annual_hours:.1f} h/year, ¥{savings.annual_cost:,.0f}/year",
        f"  3 years:  ¥{savings.three_year_cost:,.0f}",
    ]
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Run the what-if simulation over an exported flow file."
    )
    parser.add_argument("flow_file", type=Path, help="path to the exported flow JSON")
    parser.add_argument("--rate", type=float, default=config.HOURLY_RATE, help="hourly rate")
    parser.add_argument(
        "--frequency",
        type=float,
        default=config.ANNUAL_FREQUENCY,
        help="executions per year",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="output the result as JSON instead of human-readable format",
    )

    args = parser.parse_args()

    if not args.flow_file.exists():
        print(f"Error: flow file not found: {args.flow_file}", file=sys.stderr)
        sys.exit(1)

    try:
        flow = import_flow(args.flow_file.read_bytes())
    except FlowParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    result = calculate_simulation(flow.nodes, args.rate, args.frequency)

    if args.json:
        print(json.dumps(result.to_wire(), indent=2))
    else:
        print(format_report(flow.name, result))


if __name__ == "__main__":
    main()
