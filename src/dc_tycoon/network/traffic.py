"""Leaf-spine traffic distribution.

Models a two-tier fabric where every powered leaf (one per cabinet)
uplinks to every powered spine. Cabinet demand is split evenly across
active spines as an ECMP approximation:

    D_cab      = servers * gbps_per_server * k_demand * k_customer
    B_link     = min(D_cab / n_active_spines, C_link)
    U_link     = B_link / C_link

Demand above link capacity is clipped, not re-balanced onto other
spines. Any configured spine being down marks the whole fabric as
redirecting: every live link carries ``redirected=True``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from dc_tycoon.facility_config import TRAFFIC, TrafficConstants, get_customer_config
from dc_tycoon.topology import Cabinet, SpineSwitch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrafficLink:
    """One leaf-to-spine uplink."""
    leaf_cabinet_id: str
    spine_id: str
    bandwidth_gbps: float
    capacity_gbps: float
    utilization: float  # 0-1
    redirected: bool


@dataclass(frozen=True)
class TrafficStats:
    total_flows: int = 0
    total_bandwidth_gbps: float = 0.0
    total_capacity_gbps: float = 0.0
    redirected_flows: int = 0
    links: List[TrafficLink] = field(default_factory=list)
    spine_utilization: Dict[str, float] = field(default_factory=dict)


def cabinet_demand_gbps(cabinet: Cabinet,
                        demand_multiplier: float = 1.0,
                        traffic: TrafficConstants = TRAFFIC) -> float:
    """Total uplink demand of a cabinet (Gbps). Unknown customer types demand nothing."""
    customer = get_customer_config(cabinet.customer_type)
    if customer is None:
        logger.debug("Cabinet %s has unknown customer type %r, no traffic",
                     cabinet.id, cabinet.customer_type)
        return 0.0
    return (cabinet.server_count * traffic.gbps_per_server
            * demand_multiplier * customer.bandwidth_multiplier)


def calc_traffic_with_capacity(cabinets: Sequence[Cabinet],
                               spines: Sequence[SpineSwitch],
                               demand_multiplier: float,
                               link_capacity: float,
                               traffic: TrafficConstants = TRAFFIC) -> TrafficStats:
    """Distribute leaf traffic over active spines with a given link capacity.

    Args:
        cabinets: All cabinets; only powered ones with a leaf switch take part
        spines: All configured spine switches
        demand_multiplier: Global demand scaling (time of day, events)
        link_capacity: Per-link capacity (Gbps)
        traffic: Fabric constants (per-server demand)

    Returns:
        TrafficStats with per-link and per-spine figures

    Raises:
        ValueError: If link_capacity is negative
    """
    if link_capacity < 0:
        raise ValueError(f"link_capacity must be non-negative, got {link_capacity}")

    active_spines = [s for s in spines if s.power_status]
    leaf_cabinets = [c for c in cabinets if c.has_leaf_switch and c.power_status]

    if not active_spines or not leaf_cabinets:
        return TrafficStats()

    spine_load = {s.id: 0.0 for s in active_spines}
    spine_capacity = {s.id: 0.0 for s in active_spines}

    down_spines = len(spines) - len(active_spines)
    is_redirecting = down_spines > 0

    links: List[TrafficLink] = []
    total_bw = 0.0
    total_cap = 0.0

    for cab in leaf_cabinets:
        per_spine_bw = cabinet_demand_gbps(cab, demand_multiplier, traffic) / len(active_spines)

        for spine in active_spines:
            bandwidth = min(per_spine_bw, link_capacity)
            utilization = bandwidth / link_capacity if link_capacity > 0 else 0.0

            links.append(TrafficLink(
                leaf_cabinet_id=cab.id,
                spine_id=spine.id,
                bandwidth_gbps=round(bandwidth, 2),
                capacity_gbps=link_capacity,
                utilization=round(utilization, 3),
                redirected=is_redirecting,
            ))

            spine_load[spine.id] += bandwidth
            spine_capacity[spine.id] += link_capacity
            total_bw += bandwidth
            total_cap += link_capacity

    spine_utilization: Dict[str, float] = {}
    for spine in active_spines:
        cap = spine_capacity[spine.id]
        spine_utilization[spine.id] = round(spine_load[spine.id] / cap, 3) if cap > 0 else 0.0

    if is_redirecting:
        logger.debug("%d of %d spines down, redirecting %d flows",
                     down_spines, len(spines), len(links))

    return TrafficStats(
        total_flows=len(links),
        total_bandwidth_gbps=round(total_bw, 2),
        total_capacity_gbps=round(total_cap, 2),
        redirected_flows=len(links) if is_redirecting else 0,
        links=links,
        spine_utilization=spine_utilization,
    )


def calc_traffic(cabinets: Sequence[Cabinet],
                 spines: Sequence[SpineSwitch],
                 demand_multiplier: float = 1.0,
                 traffic: TrafficConstants = TRAFFIC) -> TrafficStats:
    """Distribute leaf traffic over active spines at the standard link capacity."""
    return calc_traffic_with_capacity(
        cabinets, spines, demand_multiplier, traffic.link_capacity_gbps, traffic
    )
