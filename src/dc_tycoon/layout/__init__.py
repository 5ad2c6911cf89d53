"""Spatial layout models: aisles, spacing, zones and suite floor plans."""

from dc_tycoon.layout.spacing import (
    FacingOffsets,
    calc_aisle_bonus,
    calc_spacing_heat_effect,
    count_aisle_violations,
    get_facing_offsets,
    has_maintenance_access,
)
from dc_tycoon.layout.zones import (
    DedicatedRowInfo,
    Zone,
    ZoneRequirement,
    calc_dedicated_rows,
    calc_mixed_env_penalties,
    calc_zones,
    find_clusters,
    is_zone_requirement_met,
)
from dc_tycoon.layout.suite import (
    PlacementHint,
    get_cabinet_row_at_grid,
    get_placement_hints,
    get_row_facing,
    get_suite_limits,
    get_valid_cabinet_grid_rows,
)

__all__ = [
    "FacingOffsets",
    "calc_aisle_bonus",
    "calc_spacing_heat_effect",
    "count_aisle_violations",
    "get_facing_offsets",
    "has_maintenance_access",
    "DedicatedRowInfo",
    "Zone",
    "ZoneRequirement",
    "calc_dedicated_rows",
    "calc_mixed_env_penalties",
    "calc_zones",
    "find_clusters",
    "is_zone_requirement_met",
    "PlacementHint",
    "get_cabinet_row_at_grid",
    "get_placement_hints",
    "get_row_facing",
    "get_suite_limits",
    "get_valid_cabinet_grid_rows",
]
