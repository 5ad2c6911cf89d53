"""Facility configuration tables and suite-tier floor plans.

Defines the closed enumerations used across the engine and the static,
per-type configuration consumed by every subsystem model:

    Customer type  →  power / heat / revenue / bandwidth multipliers
    Cooling unit   →  cooling rate, Manhattan range, cabinet capacity
    Chiller tier   →  range and CRAH efficiency bonus
    Suite tier     →  grid size and generated row/aisle layout

Table entries are frozen pydantic models and the tables themselves are
read-only mappings, so a lookup can never be mutated by a caller.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class CabinetEnvironment(str, Enum):
    """Workload environment of a cabinet."""
    PRODUCTION = "production"
    LAB = "lab"
    MANAGEMENT = "management"


class CustomerType(str, Enum):
    """Customer segment hosted in a cabinet."""
    GENERAL = "general"
    AI_TRAINING = "ai_training"
    STREAMING = "streaming"
    CRYPTO = "crypto"
    ENTERPRISE = "enterprise"


class CabinetFacing(str, Enum):
    """Direction of a cabinet's front (intake) side."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class CoolingUnitType(str, Enum):
    FAN_TRAY = "fan_tray"
    CRAC = "crac"
    CRAH = "crah"
    IMMERSION_POD = "immersion_pod"


class ChillerTier(str, Enum):
    BASIC = "basic"
    ADVANCED = "advanced"


class SuiteTier(str, Enum):
    STARTER = "starter"
    STANDARD = "standard"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class AisleType(str, Enum):
    COLD = "cold"
    HOT = "hot"
    NEUTRAL = "neutral"


class ZoneType(str, Enum):
    ENVIRONMENT = "environment"
    CUSTOMER = "customer"


class _FrozenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Simulation Constants
# =============================================================================

class SimConstants(_FrozenConfig):
    """Global thermal constants (°C)."""
    ambient_temp: float = 22.0
    throttle_temp: float = 80.0
    critical_temp: float = 95.0


class PowerDraw(_FrozenConfig):
    """Equipment power draw (W)."""
    server: float = Field(450.0, ge=0)
    leaf_switch: float = Field(150.0, ge=0)
    spine_switch: float = Field(250.0, ge=0)


class TrafficConstants(_FrozenConfig):
    """Leaf-spine fabric constants (Gbps)."""
    gbps_per_server: float = Field(1.0, ge=0)
    link_capacity_gbps: float = Field(10.0, ge=0)


SIM = SimConstants()
POWER_DRAW = PowerDraw()
TRAFFIC = TrafficConstants()

#: °C/tick ambient heat loss even without cooling units
BASE_AMBIENT_DISSIPATION = 0.3

#: CRAH units not connected to a chiller operate at this fraction of their rate
UNCONNECTED_CRAH_PENALTY = 0.6


# =============================================================================
# Equipment Tables
# =============================================================================

class CustomerTypeConfig(_FrozenConfig):
    label: str
    power_multiplier: float = Field(ge=0)
    heat_multiplier: float = Field(ge=0)
    revenue_multiplier: float = Field(ge=0)
    bandwidth_multiplier: float = Field(ge=0)


class CoolingUnitConfig(_FrozenConfig):
    type: CoolingUnitType
    label: str
    cooling_rate: float = Field(ge=0)   # °C removed per tick
    range: int = Field(ge=0)            # Manhattan tiles
    max_cabinets: int = Field(ge=1)
    power_draw: float = Field(ge=0)     # W
    water_usage: float = Field(ge=0)


class ChillerPlantConfig(_FrozenConfig):
    tier: ChillerTier
    label: str
    range: int = Field(ge=0)
    efficiency_bonus: float = Field(ge=0)
    power_draw: float = Field(ge=0)


class PDUConfig(_FrozenConfig):
    label: str
    cost: float = Field(ge=0)
    max_capacity_kw: float = Field(ge=0)
    range: int = Field(ge=0)


CUSTOMER_TYPE_CONFIG: Mapping[CustomerType, CustomerTypeConfig] = MappingProxyType({
    CustomerType.GENERAL: CustomerTypeConfig(
        label="General", power_multiplier=1.0, heat_multiplier=1.0,
        revenue_multiplier=1.0, bandwidth_multiplier=1.0),
    CustomerType.AI_TRAINING: CustomerTypeConfig(
        label="AI Training", power_multiplier=1.8, heat_multiplier=2.0,
        revenue_multiplier=2.5, bandwidth_multiplier=0.6),
    CustomerType.STREAMING: CustomerTypeConfig(
        label="Streaming", power_multiplier=0.9, heat_multiplier=0.8,
        revenue_multiplier=1.3, bandwidth_multiplier=2.0),
    CustomerType.CRYPTO: CustomerTypeConfig(
        label="Crypto", power_multiplier=2.0, heat_multiplier=1.8,
        revenue_multiplier=1.6, bandwidth_multiplier=0.3),
    CustomerType.ENTERPRISE: CustomerTypeConfig(
        label="Enterprise", power_multiplier=1.1, heat_multiplier=1.0,
        revenue_multiplier=1.8, bandwidth_multiplier=1.2),
})

COOLING_UNIT_CONFIG: Mapping[CoolingUnitType, CoolingUnitConfig] = MappingProxyType({
    CoolingUnitType.FAN_TRAY: CoolingUnitConfig(
        type=CoolingUnitType.FAN_TRAY, label="Fan Tray", cooling_rate=1.5,
        range=1, max_cabinets=3, power_draw=100, water_usage=0),
    CoolingUnitType.CRAC: CoolingUnitConfig(
        type=CoolingUnitType.CRAC, label="CRAC Unit", cooling_rate=3.0,
        range=2, max_cabinets=6, power_draw=300, water_usage=0),
    CoolingUnitType.CRAH: CoolingUnitConfig(
        type=CoolingUnitType.CRAH, label="CRAH Unit", cooling_rate=5.0,
        range=3, max_cabinets=10, power_draw=400, water_usage=3),
    CoolingUnitType.IMMERSION_POD: CoolingUnitConfig(
        type=CoolingUnitType.IMMERSION_POD, label="Immersion Pod",
        cooling_rate=8.0, range=0, max_cabinets=1, power_draw=200,
        water_usage=5),
})

CHILLER_PLANT_CONFIG: Mapping[ChillerTier, ChillerPlantConfig] = MappingProxyType({
    ChillerTier.BASIC: ChillerPlantConfig(
        tier=ChillerTier.BASIC, label="Basic Chiller Plant", range=3,
        efficiency_bonus=0.25, power_draw=500),
    ChillerTier.ADVANCED: ChillerPlantConfig(
        tier=ChillerTier.ADVANCED, label="Advanced Chiller Plant", range=5,
        efficiency_bonus=0.40, power_draw=800),
})

PDU_OPTIONS: Tuple[PDUConfig, ...] = (
    PDUConfig(label="Basic PDU", cost=3000, max_capacity_kw=10, range=2),
    PDUConfig(label="Metered PDU", cost=8000, max_capacity_kw=30, range=3),
    PDUConfig(label="Intelligent PDU", cost=18000, max_capacity_kw=80, range=4),
)


def _lookup(table: Mapping, key, enum_cls):
    """Resolve ``key`` (enum member or raw value) in ``table``, or None."""
    try:
        return table.get(enum_cls(key))
    except ValueError:
        return None


def get_customer_config(customer_type: Union[CustomerType, str]) -> Optional[CustomerTypeConfig]:
    return _lookup(CUSTOMER_TYPE_CONFIG, customer_type, CustomerType)


def get_cooling_unit_config(unit_type: Union[CoolingUnitType, str]) -> Optional[CoolingUnitConfig]:
    return _lookup(COOLING_UNIT_CONFIG, unit_type, CoolingUnitType)


def get_chiller_config(tier: Union[ChillerTier, str]) -> Optional[ChillerPlantConfig]:
    return _lookup(CHILLER_PLANT_CONFIG, tier, ChillerTier)


def find_pdu_config(label: str) -> Optional[PDUConfig]:
    """Find a PDU option by its label."""
    for option in PDU_OPTIONS:
        if option.label == label:
            return option
    return None


# =============================================================================
# Spacing, Aisles and Zones
# =============================================================================

class SpacingConfig(_FrozenConfig):
    adjacent_heat_penalty: float = 0.3      # °C/tick per orthogonal neighbor
    surrounded_heat_penalty: float = 0.8    # extra °C/tick with 3+ neighbors
    proper_aisle_bonus_per_pair: float = 0.12
    max_aisle_spacing_bonus: float = 0.30
    open_front_cooling_bonus: float = 0.3   # °C/tick, intake tile empty
    open_rear_cooling_bonus: float = 0.2    # °C/tick, exhaust tile empty


class AisleContainmentConfig(_FrozenConfig):
    cooling_bonus_per_aisle: float = 0.06
    max_containment_bonus: float = 0.20


class ZoneBonus(_FrozenConfig):
    revenue_bonus: float = Field(ge=0)
    heat_reduction: float = Field(ge=0)
    label: str
    description: str = ""

    @property
    def total(self) -> float:
        return self.revenue_bonus + self.heat_reduction


class ZoneBonusConfig(_FrozenConfig):
    min_cluster_size: int = Field(3, ge=1)
    environment_bonus: Dict[CabinetEnvironment, ZoneBonus]
    customer_bonus: Dict[CustomerType, ZoneBonus]


class MixedEnvPenaltyConfig(_FrozenConfig):
    heat_penalty: float = 0.05
    revenue_penalty: float = 0.03


class DedicatedRowBonusConfig(_FrozenConfig):
    efficiency_bonus: float = 0.08


SPACING_CONFIG = SpacingConfig()
AISLE_CONTAINMENT_CONFIG = AisleContainmentConfig()
MIXED_ENV_PENALTY_CONFIG = MixedEnvPenaltyConfig()
DEDICATED_ROW_BONUS_CONFIG = DedicatedRowBonusConfig()

ZONE_BONUS_CONFIG = ZoneBonusConfig(
    min_cluster_size=3,
    environment_bonus={
        CabinetEnvironment.PRODUCTION: ZoneBonus(
            revenue_bonus=0.08, heat_reduction=0, label="Production Zone",
            description="+8% revenue from shared infrastructure efficiency"),
        CabinetEnvironment.LAB: ZoneBonus(
            revenue_bonus=0, heat_reduction=0.10, label="Lab Zone",
            description="-10% heat from consolidated cooling"),
        CabinetEnvironment.MANAGEMENT: ZoneBonus(
            revenue_bonus=0, heat_reduction=0.05, label="Management Zone",
            description="-5% heat from centralized monitoring"),
    },
    customer_bonus={
        CustomerType.GENERAL: ZoneBonus(
            revenue_bonus=0.05, heat_reduction=0, label="General Zone",
            description="+5% revenue from dedicated infrastructure"),
        CustomerType.AI_TRAINING: ZoneBonus(
            revenue_bonus=0.10, heat_reduction=0, label="AI Training Zone",
            description="+10% revenue from optimized GPU interconnects"),
        CustomerType.STREAMING: ZoneBonus(
            revenue_bonus=0.07, heat_reduction=0, label="Streaming Zone",
            description="+7% revenue from CDN co-location"),
        CustomerType.CRYPTO: ZoneBonus(
            revenue_bonus=0.06, heat_reduction=0, label="Crypto Zone",
            description="+6% revenue from shared mining pools"),
        CustomerType.ENTERPRISE: ZoneBonus(
            revenue_bonus=0.08, heat_reduction=0, label="Enterprise Zone",
            description="+8% revenue from dedicated SLA infrastructure"),
    },
)

ENVIRONMENT_NAMES: Mapping[CabinetEnvironment, str] = MappingProxyType({
    CabinetEnvironment.PRODUCTION: "Production",
    CabinetEnvironment.LAB: "Lab / Dev",
    CabinetEnvironment.MANAGEMENT: "Management",
})


# =============================================================================
# Row-Based Floor Plans
# =============================================================================

class DataCenterRow(_FrozenConfig):
    id: int
    grid_row: int
    facing: CabinetFacing
    slots: int = Field(ge=0)


class Aisle(_FrozenConfig):
    id: int
    grid_row: int
    type: AisleType
    between_rows: Tuple[int, int]
    width: int = 1


class DataCenterLayout(_FrozenConfig):
    cabinet_rows: Tuple[DataCenterRow, ...]
    aisles: Tuple[Aisle, ...]
    total_grid_rows: int
    corridor_top: int
    corridor_bottom: int

    def row_by_id(self, row_id: int) -> Optional[DataCenterRow]:
        for row in self.cabinet_rows:
            if row.id == row_id:
                return row
        return None


def _aisle_type(current: CabinetFacing, following: CabinetFacing) -> AisleType:
    """Classify the aisle between two rows from their facings.

    A south-facing row above a north-facing row puts both intakes on the
    aisle (cold); the reverse puts both exhausts on it (hot).
    """
    if current == CabinetFacing.SOUTH and following == CabinetFacing.NORTH:
        return AisleType.COLD
    if current == CabinetFacing.NORTH and following == CabinetFacing.SOUTH:
        return AisleType.HOT
    return AisleType.NEUTRAL


def generate_layout(num_rows: int, cols: int) -> DataCenterLayout:
    """Generate the pre-built layout: corridor, (row, aisle)..., row, corridor.

    Args:
        num_rows: Number of cabinet rows
        cols: Cabinet slots per row

    Returns:
        DataCenterLayout with alternating south/north facing rows
    """
    rows: List[DataCenterRow] = []
    aisles: List[Aisle] = []
    grid_row = 1  # grid row 0 is the top corridor

    for i in range(num_rows):
        facing = CabinetFacing.SOUTH if i % 2 == 0 else CabinetFacing.NORTH
        rows.append(DataCenterRow(id=i, grid_row=grid_row, facing=facing, slots=cols))
        grid_row += 1

        if i < num_rows - 1:
            next_facing = CabinetFacing.SOUTH if (i + 1) % 2 == 0 else CabinetFacing.NORTH
            aisles.append(Aisle(
                id=i,
                grid_row=grid_row,
                type=_aisle_type(facing, next_facing),
                between_rows=(i, i + 1),
                width=1,
            ))
            grid_row += 1

    return DataCenterLayout(
        cabinet_rows=tuple(rows),
        aisles=tuple(aisles),
        total_grid_rows=grid_row + 1,
        corridor_top=0,
        corridor_bottom=grid_row,
    )


def build_layout_from_rows(placed_rows: Sequence[DataCenterRow],
                           total_grid_rows: int) -> DataCenterLayout:
    """Build a layout from player-placed cabinet rows (custom floor plans).

    An aisle is only recorded between consecutive rows separated by at
    least one empty grid row.
    """
    ordered = sorted(placed_rows, key=lambda r: r.grid_row)
    aisles: List[Aisle] = []

    for i, (current, following) in enumerate(zip(ordered, ordered[1:])):
        gap_width = following.grid_row - current.grid_row - 1
        if gap_width > 0:
            aisles.append(Aisle(
                id=i,
                grid_row=current.grid_row + 1,
                type=_aisle_type(current.facing, following.facing),
                between_rows=(current.id, following.id),
                width=gap_width,
            ))

    return DataCenterLayout(
        cabinet_rows=tuple(ordered),
        aisles=tuple(aisles),
        total_grid_rows=total_grid_rows,
        corridor_top=0,
        corridor_bottom=total_grid_rows - 1,
    )


class SuiteConfig(_FrozenConfig):
    tier: SuiteTier
    label: str
    cols: int
    rows: int
    max_cabinets: int
    max_spines: int
    upgrade_cost: float
    layout: DataCenterLayout


SUITE_TIERS: Mapping[SuiteTier, SuiteConfig] = MappingProxyType({
    SuiteTier.STARTER: SuiteConfig(
        tier=SuiteTier.STARTER, label="Starter Suite", cols=5, rows=2,
        max_cabinets=8, max_spines=2, upgrade_cost=0,
        layout=generate_layout(2, 5)),
    SuiteTier.STANDARD: SuiteConfig(
        tier=SuiteTier.STANDARD, label="Standard Suite", cols=8, rows=3,
        max_cabinets=18, max_spines=4, upgrade_cost=40000,
        layout=generate_layout(3, 8)),
    SuiteTier.PROFESSIONAL: SuiteConfig(
        tier=SuiteTier.PROFESSIONAL, label="Professional Suite", cols=10,
        rows=4, max_cabinets=32, max_spines=6, upgrade_cost=120000,
        layout=generate_layout(4, 10)),
    SuiteTier.ENTERPRISE: SuiteConfig(
        tier=SuiteTier.ENTERPRISE, label="Enterprise Suite", cols=14, rows=5,
        max_cabinets=50, max_spines=8, upgrade_cost=350000,
        layout=generate_layout(5, 14)),
})

SUITE_TIER_ORDER: Tuple[SuiteTier, ...] = (
    SuiteTier.STARTER,
    SuiteTier.STANDARD,
    SuiteTier.PROFESSIONAL,
    SuiteTier.ENTERPRISE,
)


def get_suite_config(tier: Union[SuiteTier, str]) -> SuiteConfig:
    """Resolve a suite tier (enum member or name).

    Raises:
        ValueError: If ``tier`` is not a known suite tier
    """
    try:
        return SUITE_TIERS[SuiteTier(tier)]
    except ValueError:
        raise ValueError(
            f"Unknown suite tier {tier!r}, expected one of "
            f"{[t.value for t in SUITE_TIER_ORDER]}"
        ) from None


# =============================================================================
# Engine Settings
# =============================================================================

class EngineSettings(_FrozenConfig):
    """Tunable engine constants, overridable per facility engine."""
    sim: SimConstants = SIM
    power_draw: PowerDraw = POWER_DRAW
    traffic: TrafficConstants = TRAFFIC
    min_cluster_size: int = Field(ZONE_BONUS_CONFIG.min_cluster_size, ge=1)
