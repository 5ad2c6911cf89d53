"""Aisle and spacing effects of the physical cabinet layout.

Two families of effect are modeled:

- Facility-wide aisle bonus: a fractional cooling-overhead reduction for
  every layout aisle with cabinets on both of its bounding rows, plus a
  further bonus where the aisle has containment installed.
- Per-cabinet spacing heat: a °C/tick adjustment from orthogonal
  crowding, trapped air, and free intake/exhaust tiles.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from dc_tycoon.facility_config import (
    AISLE_CONTAINMENT_CONFIG,
    SPACING_CONFIG,
    CabinetFacing,
    DataCenterLayout,
    SuiteTier,
    get_suite_config,
)
from dc_tycoon.topology import Cabinet, GridPos, get_adjacent_cabinets, orthogonal_neighbors


@dataclass(frozen=True)
class FacingOffsets:
    front: GridPos
    rear: GridPos
    sides: List[GridPos]


def get_facing_offsets(facing: Union[CabinetFacing, str], col: int, row: int) -> FacingOffsets:
    """Get the front (intake) and rear (exhaust) tiles for a facing direction."""
    facing = CabinetFacing(facing)
    if facing == CabinetFacing.NORTH:
        return FacingOffsets(front=(col, row - 1), rear=(col, row + 1),
                             sides=[(col - 1, row), (col + 1, row)])
    if facing == CabinetFacing.SOUTH:
        return FacingOffsets(front=(col, row + 1), rear=(col, row - 1),
                             sides=[(col - 1, row), (col + 1, row)])
    if facing == CabinetFacing.EAST:
        return FacingOffsets(front=(col + 1, row), rear=(col - 1, row),
                             sides=[(col, row - 1), (col, row + 1)])
    return FacingOffsets(front=(col - 1, row), rear=(col + 1, row),
                         sides=[(col, row - 1), (col, row + 1)])


def calc_aisle_bonus(cabinets: Sequence[Cabinet],
                     suite_tier: Union[SuiteTier, str] = SuiteTier.STARTER,
                     aisle_containments: Iterable[int] = (),
                     layout: Optional[DataCenterLayout] = None) -> float:
    """Calculate hot/cold aisle cooling bonus from layout and containment.

    Args:
        cabinets: All cabinets
        suite_tier: Suite tier whose generated layout defines the aisles
        aisle_containments: Ids of aisles with containment installed
        layout: Custom layout overriding the suite tier's layout

    Returns:
        Fractional cooling bonus, capped at the aisle + containment maxima
    """
    if len(cabinets) < 2:
        return 0.0

    if layout is None:
        layout = get_suite_config(suite_tier).layout
    contained = set(aisle_containments)
    occupied_rows = {c.row for c in cabinets}
    bonus = 0.0

    for aisle in layout.aisles:
        row_above = layout.row_by_id(aisle.between_rows[0])
        row_below = layout.row_by_id(aisle.between_rows[1])
        if row_above is None or row_below is None:
            continue

        if row_above.grid_row in occupied_rows and row_below.grid_row in occupied_rows:
            bonus += SPACING_CONFIG.proper_aisle_bonus_per_pair
            if aisle.id in contained:
                bonus += AISLE_CONTAINMENT_CONFIG.cooling_bonus_per_aisle

    max_bonus = (SPACING_CONFIG.max_aisle_spacing_bonus
                 + AISLE_CONTAINMENT_CONFIG.max_containment_bonus)
    return min(max_bonus, bonus)


def count_aisle_violations() -> int:
    """Rows enforce their facing, so a placed cabinet can never violate its aisle."""
    return 0


def has_maintenance_access(cabinet: Cabinet,
                           cabinets: Sequence[Cabinet],
                           grid_cols: int,
                           grid_rows: int) -> bool:
    """True if at least one in-bounds orthogonal tile is empty."""
    occupied = {c.position for c in cabinets}
    for col, row in orthogonal_neighbors(cabinet.col, cabinet.row):
        if not (0 <= col < grid_cols and 0 <= row < grid_rows):
            continue
        if (col, row) not in occupied:
            return True
    return False


def calc_spacing_heat_effect(cabinet: Cabinet, cabinets: Sequence[Cabinet]) -> float:
    """Calculate the spacing heat effect (°C/tick) on a powered cabinet.

    Positive values add heat, negative values are extra cooling.
    """
    if not cabinet.power_status:
        return 0.0

    adjacent = get_adjacent_cabinets(cabinet, cabinets)
    effect = len(adjacent) * SPACING_CONFIG.adjacent_heat_penalty

    if len(adjacent) >= 3:
        effect += SPACING_CONFIG.surrounded_heat_penalty

    occupied = {c.position for c in cabinets}
    offsets = get_facing_offsets(cabinet.facing, cabinet.col, cabinet.row)
    if offsets.front not in occupied:
        effect -= SPACING_CONFIG.open_front_cooling_bonus
    if offsets.rear not in occupied:
        effect -= SPACING_CONFIG.open_rear_cooling_bonus

    return effect
