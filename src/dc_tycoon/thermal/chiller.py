"""Chiller plant connectivity through the chilled-water pipe network.

A cooling unit is connected to an operational chiller plant when either:

1. it sits within the chiller's Manhattan range, or
2. a chain of orthogonally adjacent pipe tiles runs from a pipe inside
   the chiller's range to a tile adjacent to (or under) the unit.

The pipe network is an implicit tile graph; reachability is a
breadth-first search bounded by the number of pipes.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Sequence, Set

from dc_tycoon.facility_config import ChillerPlantConfig, get_chiller_config
from dc_tycoon.topology import (
    ChillerPlant,
    CoolingPipe,
    CoolingUnit,
    GridPos,
    build_tile_index,
    manhattan_dist,
    orthogonal_neighbors,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChillerConnection:
    connected: bool
    efficiency_bonus: float


NOT_CONNECTED = ChillerConnection(connected=False, efficiency_bonus=0.0)


def _pipe_path_reaches(unit: CoolingUnit,
                       chiller: ChillerPlant,
                       config: ChillerPlantConfig,
                       pipe_index: Dict[GridPos, CoolingPipe]) -> bool:
    """BFS from the chiller through adjacent pipes towards the unit."""
    visited: Set[GridPos] = {chiller.position}
    queue: Deque[GridPos] = deque([chiller.position])

    # Every pipe inside the chiller's own range is fed directly
    for pos in pipe_index:
        if pos not in visited and manhattan_dist(*pos, *chiller.position) <= config.range:
            visited.add(pos)
            queue.append(pos)

    while queue:
        col, row = queue.popleft()
        if manhattan_dist(col, row, unit.col, unit.row) <= 1:
            return True
        for neighbor in orthogonal_neighbors(col, row):
            if neighbor in pipe_index and neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return False


def get_chiller_connection(unit: CoolingUnit,
                           chillers: Sequence[ChillerPlant],
                           pipes: Sequence[CoolingPipe]) -> ChillerConnection:
    """Check whether a cooling unit is fed by an operational chiller plant.

    Args:
        unit: Cooling unit to test
        chillers: All chiller plants
        pipes: All cooling pipe segments

    Returns:
        ChillerConnection carrying the best efficiency bonus of all
        connected chillers, or NOT_CONNECTED
    """
    pipe_index = build_tile_index(pipes)
    best_bonus = 0.0

    for chiller in chillers:
        if not chiller.operational:
            continue
        config = get_chiller_config(chiller.tier)
        if config is None:
            logger.debug("Chiller %s has unknown tier %r, skipping", chiller.id, chiller.tier)
            continue

        if manhattan_dist(unit.col, unit.row, chiller.col, chiller.row) <= config.range:
            best_bonus = max(best_bonus, config.efficiency_bonus)
            continue

        if pipe_index and _pipe_path_reaches(unit, chiller, config, pipe_index):
            best_bonus = max(best_bonus, config.efficiency_bonus)

    if best_bonus > 0:
        return ChillerConnection(connected=True, efficiency_bonus=best_bonus)
    return NOT_CONNECTED
