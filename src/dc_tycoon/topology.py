"""Facility topology snapshot records.

Plain, immutable records describing what the orchestrator has placed on
the data-hall grid. The engine only ever reads them; every derived
quantity is recomputed from a fresh snapshot each tick.

Grid positions are (col, row) tiles. Distances are Manhattan distances
and adjacency is strictly orthogonal (N/S/E/W, no diagonals).
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple, TypeVar

from dc_tycoon.facility_config import (
    CabinetEnvironment,
    CabinetFacing,
    ChillerTier,
    CoolingUnitType,
    CustomerType,
)

GridPos = Tuple[int, int]

#: N, S, W, E neighbor offsets as (d_col, d_row)
ORTHOGONAL_OFFSETS: Tuple[GridPos, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass(frozen=True)
class Cabinet:
    """A rack-equivalent hosting servers and optionally one leaf switch."""
    id: str
    col: int
    row: int
    environment: CabinetEnvironment = CabinetEnvironment.PRODUCTION
    customer_type: CustomerType = CustomerType.GENERAL
    server_count: int = 0
    has_leaf_switch: bool = False
    power_status: bool = True
    heat_level: float = 22.0   # °C
    server_age: int = 0        # ticks
    facing: CabinetFacing = CabinetFacing.NORTH

    @property
    def position(self) -> GridPos:
        return (self.col, self.row)


@dataclass(frozen=True)
class SpineSwitch:
    id: str
    power_status: bool = True


@dataclass(frozen=True)
class CoolingUnit:
    id: str
    type: CoolingUnitType
    col: int
    row: int
    operational: bool = True

    @property
    def position(self) -> GridPos:
        return (self.col, self.row)


@dataclass(frozen=True)
class ChillerPlant:
    id: str
    col: int
    row: int
    tier: ChillerTier = ChillerTier.BASIC
    operational: bool = True

    @property
    def position(self) -> GridPos:
        return (self.col, self.row)


@dataclass(frozen=True)
class CoolingPipe:
    """A chilled-water pipe segment occupying one tile."""
    id: str
    col: int
    row: int

    @property
    def position(self) -> GridPos:
        return (self.col, self.row)


@dataclass(frozen=True)
class PDU:
    id: str
    col: int
    row: int
    max_capacity_kw: float
    label: str = "Basic PDU"


@dataclass(frozen=True)
class CableRun:
    id: str
    leaf_cabinet_id: str
    spine_id: str
    length: int = 1
    capacity_gbps: float = 10.0
    uses_trays: bool = False


def manhattan_dist(c1: int, r1: int, c2: int, r2: int) -> int:
    return abs(c1 - c2) + abs(r1 - r2)


_T = TypeVar("_T")


def build_tile_index(items: Iterable[_T]) -> Dict[GridPos, _T]:
    """Index placed items by (col, row). Later items win on duplicates."""
    return {(item.col, item.row): item for item in items}


def orthogonal_neighbors(col: int, row: int) -> List[GridPos]:
    return [(col + dc, row + dr) for dc, dr in ORTHOGONAL_OFFSETS]


def get_adjacent_cabinets(cabinet: Cabinet,
                          cabinets: Sequence[Cabinet]) -> List[Cabinet]:
    """Get orthogonally adjacent cabinets (N/S/E/W only, no diagonals)."""
    return [
        c for c in cabinets
        if c.id != cabinet.id
        and manhattan_dist(c.col, c.row, cabinet.col, cabinet.row) == 1
    ]
