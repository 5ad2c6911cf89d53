"""Data-center tycoon facility simulation engine.

Deterministic, stateless models that derive a facility's power, heat,
cooling, network traffic and spatial bonuses from a topology snapshot
on every simulation tick.
"""

__version__ = "0.1.0"

from dc_tycoon.engine import FacilityEngine, FacilityReport, FacilitySnapshot
from dc_tycoon.facility_config import EngineSettings
from dc_tycoon.topology import (
    PDU,
    CableRun,
    Cabinet,
    ChillerPlant,
    CoolingPipe,
    CoolingUnit,
    SpineSwitch,
)

__all__ = [
    "FacilityEngine",
    "FacilityReport",
    "FacilitySnapshot",
    "EngineSettings",
    "Cabinet",
    "SpineSwitch",
    "CoolingUnit",
    "ChillerPlant",
    "CoolingPipe",
    "PDU",
    "CableRun",
]
