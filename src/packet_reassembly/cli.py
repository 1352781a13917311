#!/usr/bin/env python3
"""
Command-line interface for the packet reassembly simulator.

Usage:
    python -m packet_reassembly.cli --scenario all
    python -m packet_reassembly.cli --words The quick fox --order 2 0 1 --out trace.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .config import DEFAULT_SHUFFLE_SEED, EXPORT_FORMATS
from .errors import InvalidSequenceNumber
from .report import export_runs, log_run, outcome_counts
from .scenarios import SCENARIOS, Scenario, ScenarioRun, run_scenario, shuffled_order


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Packet Reassembly Simulator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run every built-in scenario
  packet-reassembly --scenario all

  # Deliver a custom sentence in a chosen order
  packet-reassembly --words Hello World ! --order 2 0 1

  # Shuffle a known-length stream, fire a timeout after 3 packets, export JSON
  packet-reassembly --words a b c d e --shuffle --seed 7 --capacity 5 \\
      --timeout-after 3 --out trace.json --format json
        """
    )

    parser.add_argument(
        '--scenario',
        type=str,
        choices=sorted(SCENARIOS) + ['all'],
        default=None,
        help='Built-in scenario to run (default: all, unless --words is given)'
    )

    parser.add_argument(
        '--words',
        type=str,
        nargs='+',
        default=None,
        help='Payloads of a custom stream, numbered from 0'
    )

    parser.add_argument(
        '--order',
        type=int,
        nargs='+',
        default=None,
        help='Arrival order of sequence numbers (repeats are duplicates)'
    )

    parser.add_argument(
        '--shuffle',
        action='store_true',
        help='Deliver custom words in a random order'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=DEFAULT_SHUFFLE_SEED,
        help=f'Seed for --shuffle (default: {DEFAULT_SHUFFLE_SEED})'
    )

    parser.add_argument(
        '--capacity',
        type=int,
        default=None,
        help='Known stream length; enables packet status reports'
    )

    parser.add_argument(
        '--timeout-after',
        type=int,
        default=None,
        help='Simulate a timeout after this many deliveries'
    )

    parser.add_argument(
        '--max-pending',
        type=int,
        default=None,
        help='Maximum out-of-order packets held (default: unbounded)'
    )

    parser.add_argument(
        '--out',
        type=str,
        default=None,
        help='Export the run trace to this file'
    )

    parser.add_argument(
        '--format',
        type=str,
        choices=sorted(EXPORT_FORMATS),
        default='csv',
        help='Export format (default: csv)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Also show buffer debug logging'
    )

    return parser


def select_scenarios(args: argparse.Namespace) -> List[Scenario]:
    """Resolve command-line arguments to the scenarios to run."""
    if args.words:
        if args.shuffle:
            order = shuffled_order(len(args.words), seed=args.seed)
        elif args.order:
            order = list(args.order)
        else:
            order = list(range(len(args.words)))
        return [Scenario(
            name='custom',
            description=f"Custom stream of {len(args.words)} packets",
            words=list(args.words),
            order=order,
            capacity=args.capacity,
            timeout_after=args.timeout_after,
        )]

    if args.scenario is None or args.scenario == 'all':
        return list(SCENARIOS.values())
    return [SCENARIOS[args.scenario]]


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s' if not args.verbose else '%(levelname)s %(name)s: %(message)s',
    )

    if args.order and not args.words:
        print("Error: --order requires --words", file=sys.stderr)
        return 1

    runs: List[ScenarioRun] = []
    for scenario in select_scenarios(args):
        print("\n" + "=" * 50)
        print(f"SCENARIO: {scenario.description}")
        print("=" * 50)
        try:
            run = run_scenario(scenario, max_pending=args.max_pending)
        except (InvalidSequenceNumber, ValueError) as e:
            print(f"Error running scenario '{scenario.name}': {e}", file=sys.stderr)
            return 1
        log_run(run)
        runs.append(run)

    if args.out:
        output_path = Path(args.out)
        fmt = 'json' if output_path.suffix == '.json' else args.format
        print(f"Exporting trace to: {output_path}")
        try:
            export_runs(runs, str(output_path), fmt)
            print("✓ Export complete")
        except (OSError, ValueError) as e:
            print(f"Error exporting trace: {e}", file=sys.stderr)
            return 1

    print("\n" + "=" * 50)
    print("OUTCOME SUMMARY")
    print("=" * 50)
    counts = outcome_counts([result for run in runs for result in run.results])
    for outcome, count in counts.items():
        print(f"  {outcome:22s}: {count:4d} packets")

    return 0


if __name__ == '__main__':
    sys.exit(main())
