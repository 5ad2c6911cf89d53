"""Thermal models for the facility engine.

Provides:
- Facility power aggregation, cooling overhead and PUE
- Per-cabinet cooling coverage with load-sharing degradation
- Chiller plant connectivity through the cooling pipe network
"""

from dc_tycoon.thermal.power_model import (
    FacilityStats,
    calc_management_bonus,
    calc_stats,
    cabinet_power_draw,
    cooling_overhead_factor,
)
from dc_tycoon.thermal.chiller import ChillerConnection, get_chiller_connection
from dc_tycoon.thermal.cooling_coverage import calc_cabinet_cooling

__all__ = [
    "FacilityStats",
    "calc_management_bonus",
    "calc_stats",
    "cabinet_power_draw",
    "cooling_overhead_factor",
    "ChillerConnection",
    "get_chiller_connection",
    "calc_cabinet_cooling",
]
