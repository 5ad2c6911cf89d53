#!/usr/bin/env python3
"""Example: Facility tick report for a standard suite.

Builds a small standard-suite facility, evaluates it through the facility
engine and then sweeps:
- Cabinet heat, to show the cooling overhead curve and resulting PUE
- Traffic demand over a day, with one spine failing mid-afternoon

Key outputs:
- Power, cooling and PUE summary
- Zones, aisle bonus and PDU loading
- Spine utilization table (pandas)
- Plot of PUE vs heat and spine utilization vs hour
"""

import logging
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, 'src')

from dc_tycoon import (
    PDU,
    CableRun,
    Cabinet,
    ChillerPlant,
    CoolingPipe,
    CoolingUnit,
    FacilityEngine,
    FacilitySnapshot,
    SpineSwitch,
)
from dc_tycoon.facility_config import get_suite_config
from dc_tycoon.thermal import cooling_overhead_factor
from dc_tycoon.utils import cabinet_cooling_frame, links_to_dataframe, zones_to_dataframe

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_snapshot(demand_multiplier: float = 1.0, heat_level: float = 35.0,
                   spine_down: bool = False) -> FacilitySnapshot:
    """Standard suite: AI training row facing a general row across a cold aisle."""
    layout = get_suite_config("standard").layout
    top, middle = layout.cabinet_rows[0], layout.cabinet_rows[1]

    cabinets = []
    for col in range(4):
        cabinets.append(Cabinet(
            id=f"ai-{col}", col=col, row=top.grid_row, customer_type="ai_training",
            server_count=4, has_leaf_switch=(col % 2 == 0), heat_level=heat_level,
            facing=top.facing))
        cabinets.append(Cabinet(
            id=f"gen-{col}", col=col, row=middle.grid_row, server_count=3,
            has_leaf_switch=(col % 2 == 0), heat_level=heat_level, facing=middle.facing))
    cabinets.append(Cabinet(
        id="mgmt-0", col=5, row=middle.grid_row, environment="management",
        server_count=2, heat_level=heat_level, facing=middle.facing))

    spines = (
        SpineSwitch(id="spine-0"),
        SpineSwitch(id="spine-1"),
        SpineSwitch(id="spine-2", power_status=not spine_down),
    )
    leaf_ids = [c.id for c in cabinets if c.has_leaf_switch]
    cable_runs = tuple(
        CableRun(id=f"run-{leaf}-{s.id}", leaf_cabinet_id=leaf, spine_id=s.id,
                 uses_trays=leaf.startswith("ai"))
        for leaf in leaf_ids for s in spines
    )

    return FacilitySnapshot(
        cabinets=tuple(cabinets),
        spines=spines,
        cooling_units=(
            CoolingUnit(id="crah-0", type="crah", col=7, row=2),
            CoolingUnit(id="crac-0", type="crac", col=1, row=2),
        ),
        chillers=(ChillerPlant(id="chiller-0", col=7, row=6, tier="basic"),),
        pipes=tuple(CoolingPipe(id=f"pipe-{r}", col=7, row=r) for r in (3, 4)),
        pdus=(
            PDU(id="pdu-0", col=0, row=0, max_capacity_kw=10, label="Basic PDU"),
            PDU(id="pdu-1", col=3, row=0, max_capacity_kw=30, label="Metered PDU"),
        ),
        cable_runs=cable_runs,
        suite_tier="standard",
        aisle_containments=(0,),
        demand_multiplier=demand_multiplier,
    )


def print_report(engine: FacilityEngine):
    """Print a single-tick report."""
    snapshot = build_snapshot()
    report = engine.evaluate(snapshot)

    print(f"\n{'='*60}")
    print("Facility Tick Report (Standard Suite)")
    print(f"{'='*60}")
    print(f"Cabinets: {len(snapshot.cabinets)}  Spines: {len(snapshot.spines)}")

    print(f"\nPower & Cooling:")
    print(f"  IT power: {report.stats.total_power/1000:.2f} kW")
    print(f"  Cooling power: {report.stats.cooling_power/1000:.2f} kW")
    print(f"  Avg heat: {report.stats.avg_heat:.0f} C")
    print(f"  Management bonus: {report.stats.mgmt_bonus:.0%}")
    print(f"  PUE: {report.stats.pue:.2f}")

    print(f"\nSpatial Bonuses:")
    print(f"  Aisle bonus: {report.aisle_bonus:.0%}")
    print(f"  Mixed-environment penalties: {sorted(report.mixed_env_penalties)}")
    print(zones_to_dataframe(report.zones).to_string(index=False))

    print(f"\nPower Distribution:")
    for pdu_id, load in report.pdu_loads_kw.items():
        flag = "[OVERLOADED]" if pdu_id in report.overloaded_pdus else "[OK]"
        print(f"  {pdu_id}: {load:.2f} kW {flag}")
    print(f"  Messy cables: {report.messy_cables}")

    print(f"\nCooling Coverage:")
    cooling = cabinet_cooling_frame(snapshot.cabinets, snapshot.cooling_units,
                                    snapshot.chillers, snapshot.pipes)
    print(cooling[["heat_level", "cooling_rate"]].to_string())

    links = links_to_dataframe(report.traffic)
    print(f"\nTraffic: {report.traffic.total_flows} flows, "
          f"{report.traffic.total_bandwidth_gbps:.1f} / "
          f"{report.traffic.total_capacity_gbps:.1f} Gbps")
    print(links.groupby("spine_id")["bandwidth_gbps"].sum().to_string())


def sweep_heat(engine: FacilityEngine):
    """PUE across cabinet heat levels."""
    heats = np.arange(22, 96, 1)
    pue = [engine.evaluate(build_snapshot(heat_level=float(h))).stats.pue for h in heats]
    overhead = [cooling_overhead_factor(h) for h in heats]
    return heats, np.array(pue), np.array(overhead)


def sweep_day(engine: FacilityEngine):
    """Spine utilization over a day; spine-2 fails from 14:00 to 17:00."""
    hours = np.arange(24)
    demand = 1.0 + 0.6 * np.sin((hours - 8) / 24 * 2 * np.pi)
    utilization = {"spine-0": [], "spine-1": [], "spine-2": []}

    for hour, mult in zip(hours, demand):
        report = engine.evaluate(build_snapshot(
            demand_multiplier=float(mult), spine_down=14 <= hour < 17))
        for spine_id, series in utilization.items():
            series.append(report.traffic.spine_utilization.get(spine_id, 0.0))
        if report.traffic.redirected_flows:
            logger.info("Hour %02d: %d flows redirected", hour, report.traffic.redirected_flows)

    return hours, {k: np.array(v) for k, v in utilization.items()}


def plot_results(heat_sweep, day_sweep):
    heats, pue, overhead = heat_sweep
    hours, utilization = day_sweep

    fig, axes = plt.subplots(2, 1, figsize=(12, 9))

    axes[0].plot(heats, pue, 'b-', linewidth=2, label='PUE')
    axes[0].plot(heats, 1 + overhead, 'k--', linewidth=1, label='1 + overhead factor')
    axes[0].axvline(x=80, color='r', linestyle='--', label='Throttle')
    axes[0].set_xlabel('Average Heat (°C)', fontsize=12)
    axes[0].set_ylabel('PUE', fontsize=12)
    axes[0].set_title('Cooling Overhead vs Heat', fontsize=14, fontweight='bold')
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    for spine_id, series in utilization.items():
        axes[1].plot(hours, series * 100, linewidth=2, label=spine_id)
    axes[1].axvspan(14, 17, color='r', alpha=0.1, label='spine-2 down')
    axes[1].set_xlabel('Hour', fontsize=12)
    axes[1].set_ylabel('Spine Utilization (%)', fontsize=12)
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()

    output_dir = Path(__file__).parent.parent / 'outputs'
    output_dir.mkdir(exist_ok=True)
    output_path = output_dir / 'facility_tick_report.png'
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Saved visualization to: {output_path}")


def main():
    engine = FacilityEngine()
    print_report(engine)

    print("\n" + "="*60)
    print("Sweeps")
    print("="*60)
    heat_sweep = sweep_heat(engine)
    day_sweep = sweep_day(engine)
    plot_results(heat_sweep, day_sweep)

    print("\n" + "="*60)
    print("Analysis complete!")
    print("="*60)


if __name__ == "__main__":
    main()
