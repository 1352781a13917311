"""
In-order message reassembly from an out-of-order packet stream.

Holds packets that arrive ahead of their turn and commits the contiguous
prefix of the stream as soon as it becomes available.
"""

import bisect
import logging
from typing import List, Optional, Set

import numpy as np

from .config import (
    DEFAULT_MAX_PENDING,
    MESSAGE_SEPARATOR,
    STATUS_LOOKAHEAD,
    UNKNOWN_CAPACITY,
)
from .errors import InvalidSequenceNumber
from .types import (
    BufferSummary,
    Packet,
    PacketStatus,
    ReceiveOutcome,
    ReceiveResult,
    StatusReport,
    TimeoutNotice,
)

logger = logging.getLogger(__name__)


class ReassemblyBuffer:
    """
    Reassembly buffer for a single logical stream.

    Handles:
    - Arbitrary arrival order (sorted holding area)
    - Duplicates, whether already committed or still pending
    - Received/missing tracking when the stream length is known
    - An optional cap on how many out-of-order packets are held
    """

    def __init__(self,
                 capacity: Optional[int] = None,
                 lookahead: int = STATUS_LOOKAHEAD,
                 max_pending: Optional[int] = DEFAULT_MAX_PENDING):
        """
        Initialize buffer.

        Args:
            capacity: Total packet count if known; None or negative means unknown
            lookahead: Positions past the cursor covered by status reports
            max_pending: Maximum out-of-order packets held (None = unbounded)
        """
        if lookahead < 0:
            raise ValueError(f"lookahead must be non-negative, got {lookahead}")
        if max_pending is not None and max_pending < 0:
            raise ValueError(f"max_pending must be non-negative, got {max_pending}")

        self._capacity: int = capacity if capacity is not None and capacity >= 0 else UNKNOWN_CAPACITY
        self._lookahead = lookahead
        self._max_pending = max_pending

        # Parallel lists: packets and their sequence numbers, both ascending
        self._pending: List[Packet] = []
        self._pending_seqs: List[int] = []
        self._expected = 0
        self._tokens: List[str] = []
        self._delivered: Set[int] = set()

        self._presence: Optional[np.ndarray] = None
        if self._capacity > 0:
            self._presence = np.zeros(self._capacity, dtype=bool)

    @property
    def capacity(self) -> Optional[int]:
        """Known stream length, or None."""
        return None if self._capacity == UNKNOWN_CAPACITY else self._capacity

    @property
    def expected(self) -> int:
        """Next sequence number needed to extend the message."""
        return self._expected

    @property
    def pending_size(self) -> int:
        return len(self._pending)

    @property
    def delivered_count(self) -> int:
        return len(self._delivered)

    @property
    def tracks_presence(self) -> bool:
        return self._presence is not None

    def pending_sequence_numbers(self) -> List[int]:
        """Sequence numbers currently held, ascending."""
        return list(self._pending_seqs)

    def receive(self, packet: Packet) -> ReceiveResult:
        """
        Accept one packet.

        Args:
            packet: Incoming packet

        Returns:
            ReceiveResult describing the outcome and the state afterwards

        Raises:
            InvalidSequenceNumber: Sequence number is negative or beyond capacity
        """
        seq = packet.sequence_number
        self._validate(seq)

        if seq in self._delivered or self._is_pending(seq):
            logger.debug(f"Ignoring duplicate packet {seq}")
            return self._result(packet, ReceiveOutcome.DUPLICATE)

        if (self._max_pending is not None
                and seq != self._expected
                and len(self._pending) >= self._max_pending):
            logger.warning(f"Rejecting packet {seq}: {len(self._pending)} packets "
                           f"already pending (max {self._max_pending})")
            return self._result(packet, ReceiveOutcome.REJECTED)

        if self._presence is not None:
            self._presence[seq] = True

        self._insert(packet)
        committed = self._drain()

        if committed:
            outcome = ReceiveOutcome.COMMITTED
        else:
            outcome = ReceiveOutcome.BUFFERED_OUT_OF_ORDER
            logger.debug(f"Buffered packet {seq} out of order (expecting {self._expected})")

        return self._result(packet, outcome, committed=tuple(committed),
                            status=self.status_report())

    def get_message(self) -> str:
        """Committed payloads joined in sequence order."""
        return MESSAGE_SEPARATOR.join(self._tokens).strip()

    def simulate_timeout(self) -> TimeoutNotice:
        """Report the packet at the cursor as missing. Does not change state."""
        notice = TimeoutNotice(sequence_number=self._expected,
                               pending=tuple(self._pending_seqs))
        logger.info(f"Timeout: {notice.describe()}")
        return notice

    def summary(self) -> BufferSummary:
        return BufferSummary(
            message=self.get_message(),
            expected=self._expected,
            pending_size=len(self._pending),
            delivered_count=len(self._delivered),
        )

    def status_report(self) -> Optional[StatusReport]:
        """
        Build the received/missing view for a known-length stream.

        Returns:
            StatusReport, or None when the stream length is unknown
        """
        if self._capacity <= 0:
            return None

        limit = min(self._expected + self._lookahead, self._capacity)
        entries = []
        for seq in range(limit):
            if seq < self._expected or self._presence[seq]:
                entries.append((seq, PacketStatus.SATISFIED))
            else:
                entries.append((seq, PacketStatus.MISSING))

        return StatusReport(expected=self._expected, capacity=self._capacity,
                            entries=tuple(entries))

    def _validate(self, seq: int):
        if seq < 0:
            raise InvalidSequenceNumber(seq)
        if self._capacity != UNKNOWN_CAPACITY and seq >= self._capacity:
            raise InvalidSequenceNumber(seq, capacity=self._capacity)

    def _is_pending(self, seq: int) -> bool:
        index = bisect.bisect_left(self._pending_seqs, seq)
        return index < len(self._pending_seqs) and self._pending_seqs[index] == seq

    def _insert(self, packet: Packet):
        # First position whose sequence number is strictly greater
        index = bisect.bisect_right(self._pending_seqs, packet.sequence_number)
        self._pending_seqs.insert(index, packet.sequence_number)
        self._pending.insert(index, packet)

    def _drain(self) -> List[Packet]:
        committed = []
        while self._pending and self._pending_seqs[0] == self._expected:
            packet = self._pending.pop(0)
            self._pending_seqs.pop(0)
            self._tokens.append(packet.payload)
            self._delivered.add(self._expected)
            committed.append(packet)
            logger.debug(f"Committed packet {packet.sequence_number} ({packet.payload!r})")
            self._expected += 1

        if committed:
            logger.debug(f"Next expected sequence: {self._expected}")
        return committed

    def _result(self, packet: Packet, outcome: ReceiveOutcome, committed=(),
                status: Optional[StatusReport] = None) -> ReceiveResult:
        return ReceiveResult(
            packet=packet,
            outcome=outcome,
            expected=self._expected,
            pending=tuple(self._pending_seqs),
            committed=committed,
            status=status,
        )
