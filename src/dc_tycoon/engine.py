"""Facility simulation engine.

Evaluates every subsystem model against one topology snapshot:

    Snapshot  →  power/thermal  →  traffic  →  cooling coverage
              →  spatial bonuses (zones, aisles, penalties, rows)
              →  PDU loading and cabling

The engine keeps no state between ticks. It is safe to call on every
simulation tick with a fresh snapshot; identical snapshots give equal
reports.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from dc_tycoon.facility_config import (
    DEDICATED_ROW_BONUS_CONFIG,
    MIXED_ENV_PENALTY_CONFIG,
    EngineSettings,
    MixedEnvPenaltyConfig,
    PDUConfig,
    SuiteTier,
    find_pdu_config,
    get_suite_config,
)
from dc_tycoon.layout.spacing import calc_aisle_bonus, calc_spacing_heat_effect
from dc_tycoon.layout.zones import (
    DedicatedRowInfo,
    Zone,
    calc_dedicated_rows,
    calc_mixed_env_penalties,
    calc_zones,
)
from dc_tycoon.network.cabling import count_messy_cables
from dc_tycoon.network.traffic import TrafficStats, calc_traffic_with_capacity
from dc_tycoon.power.pdu import get_pdu_load
from dc_tycoon.thermal.cooling_coverage import calc_cabinet_cooling
from dc_tycoon.thermal.power_model import FacilityStats, calc_stats
from dc_tycoon.topology import (
    PDU,
    CableRun,
    Cabinet,
    ChillerPlant,
    CoolingPipe,
    CoolingUnit,
    SpineSwitch,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacilitySnapshot:
    """Read-only view of the facility topology for one tick.

    Attributes:
        cabinets: Placed cabinets
        spines: Spine switches
        cooling_units: Placed cooling units
        chillers: Chiller plants
        pipes: Cooling pipe segments
        pdus: Power distribution units
        cable_runs: Leaf-to-spine cable runs
        suite_tier: Active suite tier (defines rows and aisles)
        aisle_containments: Ids of aisles with containment installed
        demand_multiplier: Global traffic demand scaling
        link_capacity_gbps: Link capacity override (e.g. optical fabric)
        pdu_configs: PDU config per PDU id; falls back to lookup by label
    """
    cabinets: Tuple[Cabinet, ...] = ()
    spines: Tuple[SpineSwitch, ...] = ()
    cooling_units: Tuple[CoolingUnit, ...] = ()
    chillers: Tuple[ChillerPlant, ...] = ()
    pipes: Tuple[CoolingPipe, ...] = ()
    pdus: Tuple[PDU, ...] = ()
    cable_runs: Tuple[CableRun, ...] = ()
    suite_tier: SuiteTier = SuiteTier.STARTER
    aisle_containments: Tuple[int, ...] = ()
    demand_multiplier: float = 1.0
    link_capacity_gbps: Optional[float] = None
    pdu_configs: Mapping[str, PDUConfig] = field(default_factory=dict)


@dataclass(frozen=True)
class FacilityReport:
    """All derived quantities for one tick."""
    stats: FacilityStats
    traffic: TrafficStats
    zones: List[Zone]
    mixed_env_penalties: FrozenSet[str]
    dedicated_rows: List[DedicatedRowInfo]
    aisle_bonus: float
    cabinet_cooling: Dict[str, float]
    spacing_heat: Dict[str, float]
    pdu_loads_kw: Dict[str, float]
    overloaded_pdus: FrozenSet[str]
    messy_cables: int

    @property
    def dedicated_row_bonus(self) -> float:
        """Cooling efficiency bonus summed over fully dedicated rows."""
        return DEDICATED_ROW_BONUS_CONFIG.efficiency_bonus * len(self.dedicated_rows)

    def mixed_env_penalty(self, cabinet_id: str) -> MixedEnvPenaltyConfig:
        """Heat and revenue penalty applying to a cabinet; zero unless it is isolated by type."""
        if cabinet_id in self.mixed_env_penalties:
            return MIXED_ENV_PENALTY_CONFIG
        return MixedEnvPenaltyConfig(heat_penalty=0.0, revenue_penalty=0.0)


class FacilityEngine:
    """Stateless per-tick evaluator of the facility models.

    Usage:
        engine = FacilityEngine()
        report = engine.evaluate(FacilitySnapshot(cabinets=..., spines=...))
        print(report.stats.pue)
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """Initialize engine.

        Args:
            settings: Tunable constants; defaults to the standard tables
        """
        self.settings = settings or EngineSettings()

    def _pdu_config(self, pdu: PDU, snapshot: FacilitySnapshot) -> Optional[PDUConfig]:
        config = snapshot.pdu_configs.get(pdu.id)
        return config if config is not None else find_pdu_config(pdu.label)

    def evaluate(self, snapshot: FacilitySnapshot) -> FacilityReport:
        """Evaluate one tick.

        Args:
            snapshot: Facility topology

        Returns:
            FacilityReport with every derived aggregate

        Raises:
            ValueError: If the snapshot names an unknown suite tier
        """
        get_suite_config(snapshot.suite_tier)
        settings = self.settings
        cabinets = snapshot.cabinets

        stats = calc_stats(cabinets, snapshot.spines, settings.power_draw, settings.sim)

        link_capacity = snapshot.link_capacity_gbps
        if link_capacity is None:
            link_capacity = settings.traffic.link_capacity_gbps
        traffic = calc_traffic_with_capacity(
            cabinets, snapshot.spines, snapshot.demand_multiplier,
            link_capacity, settings.traffic,
        )

        cabinet_cooling = {
            cab.id: calc_cabinet_cooling(
                cab, snapshot.cooling_units, cabinets, snapshot.chillers, snapshot.pipes)
            for cab in cabinets
        }
        spacing_heat = {cab.id: calc_spacing_heat_effect(cab, cabinets) for cab in cabinets}

        pdu_loads = {
            pdu.id: get_pdu_load(pdu, cabinets, self._pdu_config(pdu, snapshot), settings.power_draw)
            for pdu in snapshot.pdus
        }
        overloaded = frozenset(
            pdu.id for pdu in snapshot.pdus if pdu_loads[pdu.id] > pdu.max_capacity_kw
        )

        report = FacilityReport(
            stats=stats,
            traffic=traffic,
            zones=calc_zones(cabinets, settings.min_cluster_size),
            mixed_env_penalties=frozenset(calc_mixed_env_penalties(cabinets)),
            dedicated_rows=calc_dedicated_rows(cabinets, snapshot.suite_tier),
            aisle_bonus=calc_aisle_bonus(
                cabinets, snapshot.suite_tier, snapshot.aisle_containments),
            cabinet_cooling=cabinet_cooling,
            spacing_heat=spacing_heat,
            pdu_loads_kw=pdu_loads,
            overloaded_pdus=overloaded,
            messy_cables=count_messy_cables(snapshot.cable_runs),
        )

        logger.debug(
            "Tick evaluated: %d cabinets, IT %.0f W, PUE %.2f, %d zones, %d flows",
            len(cabinets), stats.total_power, stats.pue, len(report.zones),
            traffic.total_flows,
        )
        return report
