"""
Packet Reassembly Simulator

Reconstructs an in-order message from packets that arrive out of order,
duplicated or with gaps, the way a transport protocol's receive buffer does.
"""

from .buffer import ReassemblyBuffer
from .errors import InvalidSequenceNumber
from .scenarios import SCENARIOS, Scenario, ScenarioRun, build_packets, run_scenario, shuffled_order
from .types import (
    BufferSummary,
    Packet,
    PacketStatus,
    ReceiveOutcome,
    ReceiveResult,
    StatusReport,
    TimeoutNotice,
)

__version__ = "0.1.0"
__all__ = [
    'ReassemblyBuffer',
    'InvalidSequenceNumber',
    'Packet',
    'PacketStatus',
    'ReceiveOutcome',
    'ReceiveResult',
    'StatusReport',
    'TimeoutNotice',
    'BufferSummary',
    'SCENARIOS',
    'Scenario',
    'ScenarioRun',
    'build_packets',
    'run_scenario',
    'shuffled_order',
]
