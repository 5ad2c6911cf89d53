"""Per-cabinet cooling coverage from placed cooling units.

Each operational unit cools every cabinet within its Manhattan range.
When more powered cabinets share a unit than it is rated for, its
capacity is split proportionally:

    eta = 1                         if n_served <= n_max
    eta = n_max / n_served          otherwise

Chilled-water (CRAH) units are further scaled by chiller connectivity.
"""

import logging
from typing import Sequence

from dc_tycoon.facility_config import (
    BASE_AMBIENT_DISSIPATION,
    UNCONNECTED_CRAH_PENALTY,
    CoolingUnitConfig,
    CoolingUnitType,
    get_cooling_unit_config,
)
from dc_tycoon.thermal.chiller import get_chiller_connection
from dc_tycoon.topology import (
    Cabinet,
    ChillerPlant,
    CoolingPipe,
    CoolingUnit,
    manhattan_dist,
)

logger = logging.getLogger(__name__)


def unit_load_efficiency(unit: CoolingUnit,
                         config: CoolingUnitConfig,
                         all_cabinets: Sequence[Cabinet]) -> float:
    """Load-sharing efficiency of a unit over the powered cabinets it serves."""
    served = sum(
        1 for c in all_cabinets
        if c.power_status and manhattan_dist(unit.col, unit.row, c.col, c.row) <= config.range
    )
    if served <= config.max_cabinets:
        return 1.0
    return config.max_cabinets / served


def chiller_multiplier(unit: CoolingUnit,
                       config: CoolingUnitConfig,
                       chillers: Sequence[ChillerPlant],
                       pipes: Sequence[CoolingPipe]) -> float:
    """Chiller scaling for water-using CRAH units; 1.0 for everything else."""
    if config.water_usage <= 0 or config.type != CoolingUnitType.CRAH:
        return 1.0
    connection = get_chiller_connection(unit, chillers, pipes)
    if connection.connected:
        return 1.0 + connection.efficiency_bonus
    if chillers:
        return UNCONNECTED_CRAH_PENALTY
    return 1.0


def calc_cabinet_cooling(cabinet: Cabinet,
                         units: Sequence[CoolingUnit],
                         all_cabinets: Sequence[Cabinet],
                         chillers: Sequence[ChillerPlant] = (),
                         pipes: Sequence[CoolingPipe] = ()) -> float:
    """Calculate the effective cooling rate (°C/tick) reaching a cabinet.

    Args:
        cabinet: Cabinet being cooled
        units: All cooling units in the facility
        all_cabinets: All cabinets (for load sharing)
        chillers: All chiller plants
        pipes: All cooling pipe segments

    Returns:
        Ambient dissipation plus the contribution of every unit in range
    """
    total = BASE_AMBIENT_DISSIPATION

    for unit in units:
        if not unit.operational:
            continue
        config = get_cooling_unit_config(unit.type)
        if config is None:
            logger.debug("Cooling unit %s has unknown type %r, skipping", unit.id, unit.type)
            continue
        if manhattan_dist(unit.col, unit.row, cabinet.col, cabinet.row) > config.range:
            continue

        efficiency = unit_load_efficiency(unit, config, all_cabinets)
        total += config.cooling_rate * efficiency * chiller_multiplier(unit, config, chillers, pipes)

    return total
