"""
Tests for result rendering and DataFrame export.
"""

import logging
import tempfile
import unittest
from pathlib import Path

import pandas as pd

from test_fixtures import ReassemblyFixtures
from packet_reassembly import SCENARIOS, ReassemblyBuffer, run_scenario
from packet_reassembly.report import (
    RESULT_COLUMNS,
    describe_result,
    describe_summary,
    describe_timeout,
    export_runs,
    log_run,
    outcome_counts,
    results_to_frame,
    status_to_frame,
)


class TestDescribe(unittest.TestCase):
    """Human-readable lines."""

    def test_buffered_then_committed(self):
        buffer = ReassemblyBuffer(capacity=3)
        first, second = ReassemblyFixtures.deliver(buffer, ["a", "b", "c"], [1, 0])

        lines = describe_result(first)
        self.assertIn("Buffer contents [1]", lines[-2])
        self.assertIn("0✗ 1✓ 2✗", lines[-1])

        lines = describe_result(second)
        self.assertTrue(any("Processed packet 1" in line for line in lines))
        self.assertTrue(any("Next expected sequence: 2" in line for line in lines))

    def test_duplicate(self):
        buffer = ReassemblyBuffer()
        results = ReassemblyFixtures.deliver(buffer, ["a"], [0, 0])
        self.assertIn("Ignoring duplicate packet: 0", describe_result(results[1])[-1])

    def test_timeout_and_summary(self):
        buffer = ReassemblyBuffer()
        ReassemblyFixtures.deliver(buffer, ["a", "b", "c"], [0, 2])

        self.assertIn("Requesting retransmission of packet 1",
                      describe_timeout(buffer.simulate_timeout())[-1])
        lines = describe_summary(buffer.summary())
        self.assertIn('Reconstructed Message: "a"', lines)
        self.assertIn("Packets in Buffer: 1", lines)

    def test_log_run_emits_trace(self):
        run = run_scenario(SCENARIOS['missing'])
        with self.assertLogs('packet_reassembly.report', level=logging.INFO) as logs:
            log_run(run)
        output = "\n".join(logs.output)
        self.assertIn("TIMEOUT OCCURRED!", output)
        self.assertIn("FINAL SUMMARY", output)


class TestFrames(unittest.TestCase):
    """pandas conversion and export."""

    def test_results_to_frame(self):
        run = run_scenario(SCENARIOS['missing'])
        frame = results_to_frame(run.results)

        self.assertEqual(list(frame.columns), RESULT_COLUMNS)
        self.assertEqual(len(frame), 6)
        self.assertEqual(frame.loc[2, 'pending'], "2 4")
        self.assertEqual(frame.loc[2, 'missing'], "1 3 5")
        self.assertEqual(frame.loc[3, 'committed'], "1 2")

    def test_results_to_frame_unknown_length(self):
        run = run_scenario(SCENARIOS['basic'])
        frame = results_to_frame(run.results)
        self.assertTrue(frame['missing'].isna().all())

    def test_empty_results(self):
        frame = results_to_frame([])
        self.assertTrue(frame.empty)
        self.assertEqual(list(frame.columns), RESULT_COLUMNS)

    def test_status_to_frame(self):
        buffer = ReassemblyBuffer(capacity=6)
        ReassemblyFixtures.deliver(buffer, ["a", "b", "c", "d", "e", "f"], [4, 0, 2])
        frame = status_to_frame(buffer.status_report())

        missing = frame[frame['status'] == 'missing']['sequence_number'].tolist()
        self.assertEqual(missing, [1, 3, 5])

    def test_outcome_counts(self):
        run = run_scenario(SCENARIOS['duplicates'])
        counts = outcome_counts(run.results)
        self.assertEqual(counts['duplicate'], 2)
        self.assertEqual(counts['committed'], 2)
        self.assertEqual(counts['buffered_out_of_order'], 1)
        self.assertEqual(counts['rejected'], 0)

    def test_export_csv_multiple_runs(self):
        runs = [run_scenario(SCENARIOS['basic']), run_scenario(SCENARIOS['complex'])]
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / 'runs.csv'
            export_runs(runs, str(out), 'csv')
            frame = pd.read_csv(out)

        self.assertEqual(len(frame), 3 + 9)
        self.assertEqual(sorted(frame['scenario'].unique()), ['basic', 'complex'])

    def test_export_rejects_unknown_format(self):
        with self.assertRaises(ValueError):
            export_runs([], 'out.xml', 'xml')


if __name__ == '__main__':
    unittest.main()
