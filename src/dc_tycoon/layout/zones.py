"""Zone clustering and environment-mix effects.

Zones reward grouping alike cabinets. A zone is a 4-connected cluster of
at least ``min_cluster_size`` cabinets sharing a grouping key:

1. Environment zones: clusters keyed by environment.
2. Customer zones: clusters keyed by customer type, over production
   cabinets only. They stack with the environment zone underneath.

Clustering is a flood fill with an explicit queue over the occupied
tiles, so each tile is visited once regardless of layout shape.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Set, Union

from dc_tycoon.facility_config import (
    ZONE_BONUS_CONFIG,
    CabinetEnvironment,
    SuiteTier,
    ZoneBonus,
    ZoneType,
    get_suite_config,
)
from dc_tycoon.topology import (
    Cabinet,
    GridPos,
    build_tile_index,
    get_adjacent_cabinets,
    orthogonal_neighbors,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Zone:
    id: str
    type: ZoneType
    key: str
    cabinet_ids: List[str]
    tiles: List[GridPos]
    bonus: float

    @property
    def size(self) -> int:
        return len(self.cabinet_ids)


@dataclass(frozen=True)
class ZoneRequirement:
    """A contract/scenario requirement for a zone of a given key and size."""
    type: ZoneType
    key: str
    min_size: int


@dataclass(frozen=True)
class DedicatedRowInfo:
    row_id: int
    grid_row: int
    environment: CabinetEnvironment
    cabinet_count: int


def find_clusters(cabinets: Sequence[Cabinet],
                  key_fn: Callable[[Cabinet], Hashable]) -> Dict[Hashable, List[List[Cabinet]]]:
    """Find 4-connected clusters of cabinets sharing the same key.

    Args:
        cabinets: Cabinets to cluster
        key_fn: Grouping key of a cabinet

    Returns:
        Mapping of key to its clusters, in order of first appearance
    """
    result: Dict[Hashable, List[List[Cabinet]]] = {}
    tile_index = build_tile_index(cabinets)
    visited: Set[GridPos] = set()

    for cab in cabinets:
        if cab.position in visited:
            continue
        visited.add(cab.position)

        group_key = key_fn(cab)
        cluster = [cab]
        queue = deque([cab])

        while queue:
            current = queue.popleft()
            for pos in orthogonal_neighbors(current.col, current.row):
                if pos in visited:
                    continue
                neighbor = tile_index.get(pos)
                if neighbor is not None and key_fn(neighbor) == group_key:
                    visited.add(pos)
                    cluster.append(neighbor)
                    queue.append(neighbor)

        result.setdefault(group_key, []).append(cluster)

    return result


def _zone_key(value: Union[Enum, str]) -> str:
    return getattr(value, "value", value)


def calc_zones(cabinets: Sequence[Cabinet],
               min_cluster_size: Optional[int] = None) -> List[Zone]:
    """Calculate all zone adjacency bonuses from the cabinet layout.

    Args:
        cabinets: All cabinets
        min_cluster_size: Smallest cluster forming a zone (defaults to config)

    Returns:
        Environment zones followed by customer zones
    """
    if min_cluster_size is None:
        min_cluster_size = ZONE_BONUS_CONFIG.min_cluster_size
    if len(cabinets) < min_cluster_size:
        return []

    zones: List[Zone] = []
    zone_seq = 1

    def collect(clusters_by_key, zone_type: ZoneType, bonus_table: Dict, prefix: str):
        nonlocal zone_seq
        bonuses = {_zone_key(k): v for k, v in bonus_table.items()}
        for key, clusters in clusters_by_key.items():
            bonus_cfg: Optional[ZoneBonus] = bonuses.get(key)
            if bonus_cfg is None:
                logger.debug("No %s zone bonus for key %r, skipping", zone_type.value, key)
                continue
            for cluster in clusters:
                if len(cluster) < min_cluster_size:
                    continue
                zones.append(Zone(
                    id=f"zone-{prefix}-{zone_seq}",
                    type=zone_type,
                    key=key,
                    cabinet_ids=[c.id for c in cluster],
                    tiles=[c.position for c in cluster],
                    bonus=bonus_cfg.total,
                ))
                zone_seq += 1

    collect(find_clusters(cabinets, lambda c: _zone_key(c.environment)),
            ZoneType.ENVIRONMENT, ZONE_BONUS_CONFIG.environment_bonus, "env")

    production = [c for c in cabinets if c.environment == CabinetEnvironment.PRODUCTION]
    collect(find_clusters(production, lambda c: _zone_key(c.customer_type)),
            ZoneType.CUSTOMER, ZONE_BONUS_CONFIG.customer_bonus, "cust")

    return zones


def is_zone_requirement_met(zones: Sequence[Zone], requirement: ZoneRequirement) -> bool:
    return any(
        z.type == requirement.type
        and z.key == _zone_key(requirement.key)
        and z.size >= requirement.min_size
        for z in zones
    )


def calc_mixed_env_penalties(cabinets: Sequence[Cabinet]) -> Set[str]:
    """Ids of cabinets whose neighbors all differ from them in environment.

    A cabinet with no neighbors, or with at least one matching neighbor,
    is not penalized.
    """
    penalized: Set[str] = set()
    for cab in cabinets:
        adjacent = get_adjacent_cabinets(cab, cabinets)
        if adjacent and all(a.environment != cab.environment for a in adjacent):
            penalized.add(cab.id)
    return penalized


def calc_dedicated_rows(cabinets: Sequence[Cabinet],
                        suite_tier: Union[SuiteTier, str]) -> List[DedicatedRowInfo]:
    """Find cabinet rows that are fully filled with a single environment."""
    layout = get_suite_config(suite_tier).layout
    result: List[DedicatedRowInfo] = []

    for row in layout.cabinet_rows:
        row_cabs = [c for c in cabinets if c.row == row.grid_row]
        if not row_cabs or len(row_cabs) < row.slots:
            continue
        env = row_cabs[0].environment
        if not all(c.environment == env for c in row_cabs):
            continue
        try:
            environment = CabinetEnvironment(env)
        except ValueError:
            logger.debug("Row %d filled with unknown environment %r, skipping", row.id, env)
            continue
        result.append(DedicatedRowInfo(
            row_id=row.id,
            grid_row=row.grid_row,
            environment=environment,
            cabinet_count=len(row_cabs),
        ))

    return result
