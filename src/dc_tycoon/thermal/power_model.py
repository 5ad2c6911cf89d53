"""Facility power and thermal aggregation.

Aggregates equipment power draw and heat into facility-level figures:

    P_IT      = sum(servers * P_server * k_customer + P_leaf) + n_spine * P_spine
    P_cooling = round(P_IT * f_overhead(T_avg) * (1 - b_mgmt))
    PUE       = (P_IT + P_cooling) / P_IT

where f_overhead is a heat-banded overhead fraction that accelerates past
the throttle band, and b_mgmt is the capped management-server bonus.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from dc_tycoon.facility_config import (
    POWER_DRAW,
    SIM,
    CabinetEnvironment,
    PowerDraw,
    SimConstants,
    get_customer_config,
)
from dc_tycoon.topology import Cabinet, SpineSwitch

logger = logging.getLogger(__name__)

# Upper edges (inclusive) of each heat band and its overhead fraction
HEAT_BAND_EDGES = np.array([30.0, 40.0, 50.0, 60.0, 70.0, 80.0])
HEAT_BAND_OVERHEAD = np.array([0.15, 0.20, 0.30, 0.45, 0.65, 0.90])

# Past the last band: 1.2 + 0.05 per °C above 80
CRITICAL_OVERHEAD_BASE = 1.2
CRITICAL_OVERHEAD_SLOPE = 0.05

MGMT_BONUS_PER_SERVER = 0.03
MGMT_BONUS_CAP = 0.30


@dataclass(frozen=True)
class FacilityStats:
    """Facility power/thermal aggregate for one tick."""
    total_power: float   # IT power (W)
    cooling_power: float # Cooling power (W)
    avg_heat: float      # Mean powered-cabinet heat (°C)
    pue: float           # Power usage effectiveness
    mgmt_bonus: float    # Cooling overhead reduction (0-0.30)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def cooling_overhead_factor(avg_heat: float) -> float:
    """Cooling overhead as a fraction of IT power, based on average heat."""
    band = int(np.searchsorted(HEAT_BAND_EDGES, avg_heat, side="left"))
    if band < len(HEAT_BAND_OVERHEAD):
        return float(HEAT_BAND_OVERHEAD[band])
    return CRITICAL_OVERHEAD_BASE + (avg_heat - HEAT_BAND_EDGES[-1]) * CRITICAL_OVERHEAD_SLOPE


def calc_management_bonus(cabinets: Sequence[Cabinet]) -> float:
    """Each powered management server cuts cooling overhead by 3%, capped at 30%."""
    mgmt_servers = sum(
        cab.server_count for cab in cabinets
        if cab.power_status and cab.environment == CabinetEnvironment.MANAGEMENT
    )
    return min(MGMT_BONUS_CAP, mgmt_servers * MGMT_BONUS_PER_SERVER)


def cabinet_power_draw(cabinet: Cabinet, power_draw: PowerDraw = POWER_DRAW) -> float:
    """Power draw of a single cabinet (W), ignoring its power status.

    An unknown customer type contributes no server load.
    """
    load = 0.0
    customer = get_customer_config(cabinet.customer_type)
    if customer is None:
        logger.debug("Cabinet %s has unknown customer type %r, skipping server load",
                     cabinet.id, cabinet.customer_type)
    else:
        load += cabinet.server_count * power_draw.server * customer.power_multiplier
    if cabinet.has_leaf_switch:
        load += power_draw.leaf_switch
    return load


def calc_stats(cabinets: Sequence[Cabinet],
               spines: Sequence[SpineSwitch],
               power_draw: PowerDraw = POWER_DRAW,
               sim: SimConstants = SIM) -> FacilityStats:
    """Calculate facility power, cooling overhead and PUE.

    Args:
        cabinets: All cabinets in the facility
        spines: All spine switches
        power_draw: Equipment power draw table
        sim: Simulation constants (ambient temperature)

    Returns:
        FacilityStats for the snapshot
    """
    it_power = 0.0
    heat_sum = 0.0
    active_cabs = 0

    for cab in cabinets:
        if not cab.power_status:
            continue
        it_power += cabinet_power_draw(cab, power_draw)
        heat_sum += cab.heat_level
        active_cabs += 1

    it_power += sum(power_draw.spine_switch for s in spines if s.power_status)

    avg_heat = round_half_up(heat_sum / active_cabs) if active_cabs > 0 else sim.ambient_temp
    mgmt_bonus = calc_management_bonus(cabinets)
    overhead = cooling_overhead_factor(avg_heat) * (1 - mgmt_bonus)
    cooling_power = round_half_up(it_power * overhead)
    pue = round((it_power + cooling_power) / it_power, 2) if it_power > 0 else 0.0

    return FacilityStats(
        total_power=it_power,
        cooling_power=cooling_power,
        avg_heat=avg_heat,
        pue=pue,
        mgmt_bonus=mgmt_bonus,
    )
