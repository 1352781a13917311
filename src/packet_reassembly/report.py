"""
Rendering and export of reassembly results.

The buffer only returns structured values; this module turns them into log
lines, pandas DataFrames and CSV/JSON files.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import EXPORT_FORMATS
from .scenarios import ScenarioRun
from .types import BufferSummary, ReceiveOutcome, ReceiveResult, StatusReport, TimeoutNotice

logger = logging.getLogger(__name__)

RESULT_COLUMNS: List[str] = [
    'step',
    'sequence_number',
    'payload',
    'outcome',
    'committed',
    'expected',
    'pending',
    'missing',
]


def describe_result(result: ReceiveResult) -> List[str]:
    """
    Human-readable lines for one receive call.

    Args:
        result: Result returned by ReassemblyBuffer.receive

    Returns:
        Lines in display order
    """
    packet = result.packet
    lines = [f"Receiving packet {packet.sequence_number}: \"{packet.payload}\""]

    if result.outcome is ReceiveOutcome.DUPLICATE:
        lines.append(f"  Ignoring duplicate packet: {packet.sequence_number}")
        return lines
    if result.outcome is ReceiveOutcome.REJECTED:
        lines.append(f"  Rejected packet {packet.sequence_number}: reorder window full")
        return lines

    for committed in result.committed:
        lines.append(f"  Processed packet {committed.sequence_number} (\"{committed.payload}\")")
    if result.committed_any:
        lines.append(f"  Next expected sequence: {result.expected}")
    lines.append(f"  Buffer contents [{' '.join(str(seq) for seq in result.pending)}]")
    if result.status is not None:
        lines.append(f"  Packet status: {result.status.render()}")
    return lines


def describe_timeout(notice: TimeoutNotice) -> List[str]:
    return [
        "TIMEOUT OCCURRED!",
        f"  Expected packet {notice.sequence_number} is missing.",
        f"  Requesting retransmission of packet {notice.retransmit_request}",
    ]


def describe_summary(summary: BufferSummary) -> List[str]:
    return [
        "=" * 50,
        "FINAL SUMMARY",
        "=" * 50,
        f"Reconstructed Message: \"{summary.message}\"",
        f"Next Expected Sequence: {summary.expected}",
        f"Packets in Buffer: {summary.pending_size}",
        f"Total Packets Processed: {summary.delivered_count}",
        "=" * 50,
    ]


def log_run(run: ScenarioRun, level: int = logging.INFO):
    """Emit a scenario trace through the module logger."""
    timeout_at = run.scenario.timeout_after
    for step, result in enumerate(run.results):
        if timeout_at is not None and step == timeout_at:
            for notice in run.timeouts:
                for line in describe_timeout(notice):
                    logger.log(level, line)
        for line in describe_result(result):
            logger.log(level, line)
    if timeout_at is not None and timeout_at >= len(run.results):
        for notice in run.timeouts:
            for line in describe_timeout(notice):
                logger.log(level, line)
    if run.summary is not None:
        for line in describe_summary(run.summary):
            logger.log(level, line)


def results_to_frame(results: List[ReceiveResult]) -> pd.DataFrame:
    """
    One row per receive call.

    Args:
        results: Results in arrival order

    Returns:
        DataFrame with RESULT_COLUMNS; list-valued state is space-joined
    """
    rows = []
    for step, result in enumerate(results):
        missing: Optional[str] = None
        if result.status is not None:
            missing = ' '.join(str(seq) for seq in result.status.missing())
        rows.append({
            'step': step,
            'sequence_number': result.packet.sequence_number,
            'payload': result.packet.payload,
            'outcome': result.outcome.value,
            'committed': ' '.join(str(p.sequence_number) for p in result.committed),
            'expected': result.expected,
            'pending': ' '.join(str(seq) for seq in result.pending),
            'missing': missing,
        })
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def status_to_frame(report: StatusReport) -> pd.DataFrame:
    """One row per position covered by a status report."""
    return pd.DataFrame(
        [{'sequence_number': seq, 'status': status.value} for seq, status in report.entries],
        columns=['sequence_number', 'status'],
    )


def outcome_counts(results: List[ReceiveResult]) -> pd.Series:
    """Number of receive calls per outcome, every outcome listed."""
    counts = pd.Series([r.outcome.value for r in results], dtype=object).value_counts()
    return counts.reindex([o.value for o in ReceiveOutcome], fill_value=0)


def export_runs(runs: List[ScenarioRun], output_path: str, fmt: str = 'csv'):
    """
    Write run traces to disk, one row per receive call.

    Args:
        runs: Scenario runs to export
        output_path: Destination file
        fmt: 'csv' or 'json'
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")

    frames = []
    for run in runs:
        frame = results_to_frame(run.results)
        frame.insert(0, 'scenario', run.scenario.name)
        frames.append(frame)
    frame = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(columns=['scenario'] + RESULT_COLUMNS)
    path = Path(output_path)

    if fmt == 'json':
        frame.to_json(path, orient='records', indent=2, force_ascii=False)
    else:
        frame.to_csv(path, index=False)
    logger.debug(f"Exported {len(frame)} rows to {path}")
