"""Suite layout queries and placement strategy hints."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from dc_tycoon.facility_config import (
    ENVIRONMENT_NAMES,
    SIM,
    ZONE_BONUS_CONFIG,
    AisleType,
    CabinetEnvironment,
    CabinetFacing,
    CustomerType,
    DataCenterLayout,
    DataCenterRow,
    SuiteTier,
    get_suite_config,
)
from dc_tycoon.topology import Cabinet, manhattan_dist

WARM_NEIGHBOR_HEAT = 60.0


@dataclass(frozen=True)
class PlacementHint:
    message: str
    type: str  # 'tip' | 'warning' | 'info'


def get_suite_limits(tier: Union[SuiteTier, str]) -> Dict:
    """Get the effective limits for a suite tier."""
    config = get_suite_config(tier)
    return {
        'max_cabinets': config.max_cabinets,
        'max_spines': config.max_spines,
        'cols': config.cols,
        'rows': config.rows,
        'layout': config.layout,
    }


def get_cabinet_row_at_grid(grid_row: int, layout: DataCenterLayout) -> Optional[DataCenterRow]:
    for row in layout.cabinet_rows:
        if row.grid_row == grid_row:
            return row
    return None


def get_valid_cabinet_grid_rows(tier: Union[SuiteTier, str]) -> List[int]:
    return [r.grid_row for r in get_suite_config(tier).layout.cabinet_rows]


def get_row_facing(grid_row: int, tier: Union[SuiteTier, str]) -> Optional[CabinetFacing]:
    """Enforced facing of a grid row, or None if it is not a cabinet row."""
    row = get_cabinet_row_at_grid(grid_row, get_suite_config(tier).layout)
    return row.facing if row is not None else None


def get_placement_hints(col: int,
                        row: int,
                        cabinets: Sequence[Cabinet],
                        suite_tier: Union[SuiteTier, str],
                        placement_env: Optional[Union[CabinetEnvironment, str]] = None,
                        placement_cust: Optional[Union[CustomerType, str]] = None) -> List[PlacementHint]:
    """Contextual strategy hints for placing a cabinet at (col, row)."""
    hints: List[PlacementHint] = []
    layout = get_suite_config(suite_tier).layout

    cabinet_row = get_cabinet_row_at_grid(row, layout)
    if cabinet_row is None:
        aisle = next((a for a in layout.aisles if a.grid_row == row), None)
        if aisle is not None:
            label = {AisleType.COLD: "Cold", AisleType.HOT: "Hot"}.get(aisle.type, "Neutral")
            hints.append(PlacementHint(
                f"{label} aisle: technician walkway, no cabinet placement", "info"))
        else:
            hints.append(PlacementHint("Main corridor: no cabinet placement", "info"))
        return hints

    facing_label = "North (▲)" if cabinet_row.facing == CabinetFacing.NORTH else "South (▼)"
    hints.append(PlacementHint(f"Row {cabinet_row.id + 1}, facing {facing_label}", "info"))

    if placement_env is not None:
        placement_env = CabinetEnvironment(placement_env)
        touching = [c for c in cabinets if manhattan_dist(c.col, c.row, col, row) == 1]
        same_env = [c for c in touching if c.environment == placement_env]

        if len(same_env) >= 2:
            env_bonus = ZONE_BONUS_CONFIG.environment_bonus[placement_env]
            hints.append(PlacementHint(
                f"Zone bonus! 3+ adjacent {env_bonus.label} cabinets: {env_bonus.description}",
                "tip"))
        elif len(same_env) == 1:
            hints.append(PlacementHint(
                f"Place one more {ENVIRONMENT_NAMES[placement_env]} cabinet adjacent to form a zone",
                "info"))

        if placement_cust is not None and placement_env == CabinetEnvironment.PRODUCTION:
            placement_cust = CustomerType(placement_cust)
            same_cust = [
                c for c in touching
                if c.customer_type == placement_cust
                and c.environment == CabinetEnvironment.PRODUCTION
            ]
            if len(same_cust) >= 2:
                cust_bonus = ZONE_BONUS_CONFIG.customer_bonus[placement_cust]
                hints.append(PlacementHint(
                    f"Zone bonus! 3+ adjacent {cust_bonus.label} cabinets: {cust_bonus.description}",
                    "tip"))

    row_cabs = [c for c in cabinets if c.row == row]
    neighbors = [c for c in row_cabs if abs(c.col - col) <= 1 and c.col != col]
    if any(c.heat_level >= SIM.throttle_temp for c in neighbors):
        hints.append(PlacementHint("Adjacent to overheating cabinet: thermal throttle risk", "warning"))
    elif any(c.heat_level >= WARM_NEIGHBOR_HEAT for c in neighbors):
        hints.append(PlacementHint("Warm neighbor nearby: monitor cooling", "warning"))

    if len(row_cabs) >= cabinet_row.slots - 1:
        hints.append(PlacementHint("Row nearly full: consider other rows", "info"))

    if not cabinets:
        hints.append(PlacementHint(
            "First cabinet! Aisle cooling improves with cabinets on both sides", "tip"))

    return hints
