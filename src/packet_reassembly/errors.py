"""
Exceptions raised by the reassembly core.
"""

from typing import Optional


class InvalidSequenceNumber(ValueError):
    """Sequence number is negative, not an integer, or beyond the stream capacity."""

    def __init__(self, sequence_number, capacity: Optional[int] = None):
        self.sequence_number = sequence_number
        self.capacity = capacity
        if capacity is not None:
            message = (f"Sequence number {sequence_number!r} outside "
                       f"stream range [0, {capacity})")
        else:
            message = f"Invalid sequence number: {sequence_number!r}"
        super().__init__(message)
