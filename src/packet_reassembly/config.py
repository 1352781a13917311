"""
Configuration constants for the packet reassembly simulator.

Centralizes the status-report lookahead, separators and driver defaults.
"""

from typing import Optional, Set

# Status report: how far past the cursor the packet strip looks
STATUS_LOOKAHEAD: int = 5

# Capacity sentinel for streams whose length is not known up front
UNKNOWN_CAPACITY: int = -1

# Token placed between committed payloads
MESSAGE_SEPARATOR: str = " "

# Maximum number of out-of-order packets held at once (None = unbounded)
DEFAULT_MAX_PENDING: Optional[int] = None

# Seed used by the scenario driver when shuffling arrival order
DEFAULT_SHUFFLE_SEED: int = 2024

# Status strip markers
SATISFIED_MARK: str = "✓"
MISSING_MARK: str = "✗"

# Supported export formats for run traces
EXPORT_FORMATS: Set[str] = {'csv', 'json'}
