"""Cable run helpers."""

from typing import Sequence

from dc_tycoon.topology import CableRun


def count_messy_cables(cable_runs: Sequence[CableRun]) -> int:
    """Count cable runs not routed through a tray."""
    return sum(1 for run in cable_runs if not run.uses_trays)


def calc_cable_length(cab_col: int, cab_row: int, spine_slot: int, grid_rows: int) -> int:
    """Cable length from a cabinet to the spine row at the top of the hall.

    The spine slot does not affect length; spines share one patch point
    centred on the hall.
    """
    return cab_row + 1 + abs(cab_col - grid_rows // 2)
