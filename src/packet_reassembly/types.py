"""
Type definitions for the packet reassembly simulator.
"""

import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .config import MISSING_MARK, SATISFIED_MARK
from .errors import InvalidSequenceNumber


class ReceiveOutcome(Enum):
    """What happened to a packet handed to the buffer."""
    COMMITTED = "committed"
    BUFFERED_OUT_OF_ORDER = "buffered_out_of_order"
    DUPLICATE = "duplicate"
    REJECTED = "rejected"


class PacketStatus(Enum):
    """Per-position state in a status report."""
    SATISFIED = "satisfied"
    MISSING = "missing"


@dataclass(frozen=True)
class Packet:
    """A single packet of the simulated stream."""
    sequence_number: int
    payload: str

    def __post_init__(self):
        seq = self.sequence_number
        if isinstance(seq, bool) or not isinstance(seq, numbers.Integral):
            raise InvalidSequenceNumber(seq)
        if seq < 0:
            raise InvalidSequenceNumber(seq)
        # numpy integers from shuffled orders are normalized to int
        object.__setattr__(self, 'sequence_number', int(seq))

    def __str__(self) -> str:
        return f"Packet[{self.sequence_number}: {self.payload}]"


@dataclass(frozen=True)
class StatusReport:
    """
    Received/missing view over the head of a known-length stream.

    Covers positions [0, min(expected + lookahead, capacity)). A position is
    satisfied when it has been committed or its packet has arrived.
    """
    expected: int
    capacity: int
    entries: Tuple[Tuple[int, PacketStatus], ...]

    def missing(self) -> List[int]:
        """Sequence numbers reported missing."""
        return [seq for seq, status in self.entries if status is PacketStatus.MISSING]

    def satisfied(self) -> List[int]:
        """Sequence numbers reported committed or received."""
        return [seq for seq, status in self.entries if status is PacketStatus.SATISFIED]

    def render(self) -> str:
        """Render as a compact strip, e.g. ``0✓ 1✗ 2✓``."""
        parts = []
        for seq, status in self.entries:
            mark = SATISFIED_MARK if status is PacketStatus.SATISFIED else MISSING_MARK
            parts.append(f"{seq}{mark}")
        return " ".join(parts)


@dataclass(frozen=True)
class ReceiveResult:
    """Result of a single ``receive`` call."""
    packet: Packet
    outcome: ReceiveOutcome
    expected: int  # cursor after processing
    pending: Tuple[int, ...]  # pending sequence numbers after processing
    committed: Tuple[Packet, ...] = ()
    status: Optional[StatusReport] = None

    @property
    def committed_any(self) -> bool:
        return len(self.committed) > 0


@dataclass(frozen=True)
class TimeoutNotice:
    """Notification that the packet at the cursor has not arrived in time."""
    sequence_number: int  # the missing packet, also the one to retransmit
    pending: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def retransmit_request(self) -> int:
        return self.sequence_number

    def describe(self) -> str:
        return (f"Expected packet {self.sequence_number} is missing; "
                f"requesting retransmission of packet {self.retransmit_request}")


@dataclass(frozen=True)
class BufferSummary:
    """Read-only snapshot of a reassembly buffer."""
    message: str
    expected: int
    pending_size: int
    delivered_count: int

    def to_dict(self) -> dict:
        return {
            'message': self.message,
            'expected': self.expected,
            'pending_size': self.pending_size,
            'delivered_count': self.delivered_count,
        }
