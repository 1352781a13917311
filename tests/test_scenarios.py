"""
Tests for the built-in delivery scenarios.
"""

import unittest

from test_fixtures import ReassemblyFixtures
from packet_reassembly import (
    SCENARIOS,
    InvalidSequenceNumber,
    ReceiveOutcome,
    Scenario,
    build_packets,
    run_scenario,
    shuffled_order,
)


class TestBuiltinScenarios(unittest.TestCase):
    """Each built-in scenario reconstructs its sentence."""

    def test_basic(self):
        run = run_scenario(SCENARIOS['basic'])
        self.assertEqual(run.summary.message, "Hello World !")
        self.assertEqual(run.summary.expected, 3)
        self.assertEqual(run.summary.pending_size, 0)
        self.assertEqual(run.timeouts, [])

    def test_duplicates(self):
        run = run_scenario(SCENARIOS['duplicates'])
        outcomes = [r.outcome for r in run.results]
        self.assertEqual(outcomes.count(ReceiveOutcome.DUPLICATE), 2)
        self.assertEqual(run.summary.message, "Hello World !")
        self.assertEqual(run.summary.delivered_count, 3)

    def test_missing_with_timeout(self):
        run = run_scenario(SCENARIOS['missing'])

        self.assertEqual(len(run.timeouts), 1)
        self.assertEqual(run.timeouts[0].sequence_number, 1)
        self.assertEqual(run.timeouts[0].pending, (2, 4))

        before_timeout = run.results[2]
        self.assertEqual(before_timeout.expected, 1)
        self.assertEqual(before_timeout.status.missing(), [1, 3, 5])

        self.assertEqual(run.summary.message, "This is test a last message")
        self.assertEqual(run.summary.expected, 6)

    def test_complex(self):
        run = run_scenario(SCENARIOS['complex'])
        self.assertEqual(run.summary.message, " ".join(ReassemblyFixtures.SENTENCE))
        self.assertEqual(run.summary.expected, 9)
        # nothing commits until packet 0 arrives as the fourth delivery
        self.assertEqual([r.committed_any for r in run.results[:3]], [False, False, False])
        self.assertTrue(run.results[3].committed_any)

    def test_reorder_window_applies_to_scenario(self):
        run = run_scenario(SCENARIOS['complex'], max_pending=1)
        outcomes = [r.outcome for r in run.results]
        self.assertIn(ReceiveOutcome.REJECTED, outcomes)
        self.assertLess(run.summary.expected, 9)


class TestScenarioHelpers(unittest.TestCase):
    """Packet building and shuffling."""

    def test_build_packets(self):
        packets = build_packets(["x", "y"])
        self.assertEqual([(p.sequence_number, p.payload) for p in packets], [(0, "x"), (1, "y")])
        self.assertEqual(str(packets[1]), "Packet[1: y]")

    def test_shuffled_order_is_permutation(self):
        order = shuffled_order(10, seed=1)
        self.assertEqual(sorted(order), list(range(10)))
        self.assertTrue(all(isinstance(seq, int) for seq in order))

    def test_shuffled_order_is_reproducible(self):
        self.assertEqual(shuffled_order(8, seed=42), shuffled_order(8, seed=42))

    def test_shuffled_order_rejects_negative_count(self):
        with self.assertRaises(ValueError):
            shuffled_order(-1)

    def test_timeout_after_last_delivery(self):
        scenario = Scenario(name='tail', description='timeout at the end',
                            words=["a", "b", "c"], order=[0, 2], timeout_after=2)
        run = run_scenario(scenario)
        self.assertEqual([n.sequence_number for n in run.timeouts], [1])

    def test_order_outside_word_list(self):
        scenario = Scenario(name='bad', description='bad order', words=["a"], order=[0, 3])
        with self.assertRaises(InvalidSequenceNumber):
            run_scenario(scenario)


if __name__ == '__main__':
    unittest.main()
