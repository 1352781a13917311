"""
Scenario driver for the reassembly buffer.

Builds packet sets from word lists, feeds them to a buffer in a chosen
arrival order and records every step for reporting.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .buffer import ReassemblyBuffer
from .config import DEFAULT_MAX_PENDING, DEFAULT_SHUFFLE_SEED
from .errors import InvalidSequenceNumber
from .types import BufferSummary, Packet, ReceiveResult, TimeoutNotice

logger = logging.getLogger(__name__)


@dataclass
class Scenario:
    """A named delivery plan."""
    name: str
    description: str
    words: List[str]
    order: List[int]  # sequence numbers in arrival order (repeats = duplicates)
    capacity: Optional[int] = None
    timeout_after: Optional[int] = None  # fire a timeout after this many deliveries


@dataclass
class ScenarioRun:
    """Everything observed while running a scenario."""
    scenario: Scenario
    results: List[ReceiveResult] = field(default_factory=list)
    timeouts: List[TimeoutNotice] = field(default_factory=list)
    summary: Optional[BufferSummary] = None


SCENARIOS: Dict[str, Scenario] = {
    'basic': Scenario(
        name='basic',
        description='Basic scenario (packets: 2, 0, 1)',
        words=['Hello', 'World', '!'],
        order=[2, 0, 1],
    ),
    'duplicates': Scenario(
        name='duplicates',
        description='Duplicate packet handling (packets: 0, 2, 1, 0, 1)',
        words=['Hello', 'World', '!'],
        order=[0, 2, 1, 0, 1],
    ),
    'missing': Scenario(
        name='missing',
        description='Missing packets with timeout (4, 0, 2, timeout, then 1, 3, 5)',
        words=['This', 'is', 'test', 'a', 'last', 'message'],
        order=[4, 0, 2, 1, 3, 5],
        capacity=6,
        timeout_after=3,
    ),
    'complex': Scenario(
        name='complex',
        description='Complex out-of-order delivery (9 packets)',
        words=['The', 'quick', 'brown', 'fox', 'jumps', 'over', 'the', 'lazy', 'dog'],
        order=[8, 2, 5, 0, 7, 1, 6, 3, 4],
    ),
}


def build_packets(words: Sequence[str]) -> List[Packet]:
    """Number words 0..N-1 as packets."""
    return [Packet(seq, word) for seq, word in enumerate(words)]


def shuffled_order(count: int, seed: int = DEFAULT_SHUFFLE_SEED) -> List[int]:
    """
    Random permutation of 0..count-1.

    Args:
        count: Number of packets
        seed: Seed for the random generator (same seed, same order)

    Returns:
        List of sequence numbers in arrival order
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = np.random.default_rng(seed)
    return [int(seq) for seq in rng.permutation(count)]


def run_scenario(scenario: Scenario,
                 max_pending: Optional[int] = DEFAULT_MAX_PENDING) -> ScenarioRun:
    """
    Feed a scenario's packets into a fresh buffer.

    Args:
        scenario: Delivery plan
        max_pending: Optional cap on out-of-order packets held

    Returns:
        ScenarioRun with per-packet results, timeout notices and final summary

    Raises:
        InvalidSequenceNumber: Order references a packet outside the word list
            or outside the stream capacity
    """
    packets = build_packets(scenario.words)
    buffer = ReassemblyBuffer(capacity=scenario.capacity, max_pending=max_pending)
    run = ScenarioRun(scenario=scenario)

    logger.info(f"Running scenario '{scenario.name}': {scenario.description}")

    for delivered, seq in enumerate(scenario.order):
        if scenario.timeout_after is not None and delivered == scenario.timeout_after:
            run.timeouts.append(buffer.simulate_timeout())
        run.results.append(buffer.receive(_lookup(packets, seq)))

    if scenario.timeout_after is not None and scenario.timeout_after >= len(scenario.order):
        run.timeouts.append(buffer.simulate_timeout())

    run.summary = buffer.summary()
    return run


def _lookup(packets: List[Packet], seq: int) -> Packet:
    if not 0 <= seq < len(packets):
        raise InvalidSequenceNumber(seq, capacity=len(packets))
    return packets[seq]
