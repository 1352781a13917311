"""
Example usage of the packet reassembly simulator.

Shows the buffer driven directly, a known-length stream with status reports
and a timeout, and a scenario run exported as a DataFrame.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from packet_reassembly import Packet, ReassemblyBuffer, SCENARIOS, run_scenario
from packet_reassembly.report import describe_result, results_to_frame


def example_out_of_order():
    """Example: Reassemble a message delivered 2, 0, 1."""
    print("=" * 80)
    print("EXAMPLE 1: Out-of-Order Delivery")
    print("=" * 80)

    buffer = ReassemblyBuffer()
    for packet in [Packet(2, "!"), Packet(0, "Hello"), Packet(1, "World")]:
        result = buffer.receive(packet)
        print(f"\n{packet}: {result.outcome.value}")
        print(f"  Expected next: {result.expected}, pending: {list(result.pending)}")

    print(f"\nMessage: \"{buffer.get_message()}\"")


def example_missing_packets():
    """Example: Known stream length, gaps and a timeout."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: Missing Packets")
    print("=" * 80)

    buffer = ReassemblyBuffer(capacity=6)
    for packet in [Packet(4, "last"), Packet(0, "This"), Packet(2, "test")]:
        for line in describe_result(buffer.receive(packet)):
            print(line)

    notice = buffer.simulate_timeout()
    print(f"\nTimeout: {notice.describe()}")

    for packet in [Packet(1, "is"), Packet(3, "a"), Packet(5, "message")]:
        buffer.receive(packet)

    summary = buffer.summary()
    print(f"\nSummary: {summary.to_dict()}")


def example_trace_frame():
    """Example: Scenario trace as a pandas DataFrame."""
    print("\n" + "=" * 80)
    print("EXAMPLE 3: Scenario Trace")
    print("=" * 80)

    run = run_scenario(SCENARIOS['complex'])
    frame = results_to_frame(run.results)
    print(frame[['sequence_number', 'outcome', 'committed', 'expected', 'pending']].to_string(index=False))
    print(f"\nMessage: \"{run.summary.message}\"")


if __name__ == "__main__":
    example_out_of_order()
    example_missing_packets()
    example_trace_frame()

    print("\n" + "=" * 80)
    print("Examples completed!")
    print("=" * 80)
