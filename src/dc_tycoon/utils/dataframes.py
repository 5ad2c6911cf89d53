"""Tabular exports of derived engine records.

Used by the network visualization and for offline balance analysis of
facility layouts.
"""

from dataclasses import asdict
from typing import Sequence

import pandas as pd

from dc_tycoon.layout.zones import Zone
from dc_tycoon.network.traffic import TrafficStats
from dc_tycoon.thermal.cooling_coverage import calc_cabinet_cooling
from dc_tycoon.topology import Cabinet, ChillerPlant, CoolingPipe, CoolingUnit

LINK_COLUMNS = [
    "leaf_cabinet_id", "spine_id", "bandwidth_gbps",
    "capacity_gbps", "utilization", "redirected",
]


def links_to_dataframe(traffic: TrafficStats) -> pd.DataFrame:
    """One row per leaf-spine link."""
    return pd.DataFrame([asdict(link) for link in traffic.links], columns=LINK_COLUMNS)


def zones_to_dataframe(zones: Sequence[Zone]) -> pd.DataFrame:
    """One row per zone with its size and bonus."""
    records = [
        {
            "id": z.id,
            "type": z.type.value,
            "key": z.key,
            "size": z.size,
            "bonus": z.bonus,
        }
        for z in zones
    ]
    return pd.DataFrame(records, columns=["id", "type", "key", "size", "bonus"])


def cabinet_cooling_frame(cabinets: Sequence[Cabinet],
                          units: Sequence[CoolingUnit],
                          chillers: Sequence[ChillerPlant] = (),
                          pipes: Sequence[CoolingPipe] = ()) -> pd.DataFrame:
    """Per-cabinet heat level against effective cooling rate, indexed by cabinet id."""
    df = pd.DataFrame(
        {
            "col": [c.col for c in cabinets],
            "row": [c.row for c in cabinets],
            "powered": [c.power_status for c in cabinets],
            "heat_level": [c.heat_level for c in cabinets],
            "cooling_rate": [
                calc_cabinet_cooling(c, units, cabinets, chillers, pipes) for c in cabinets
            ],
        },
        index=pd.Index([c.id for c in cabinets], name="cabinet_id"),
    )
    return df
