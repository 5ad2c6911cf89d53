"""
Integration tests: full facility tick through FacilityEngine
"""

import unittest
import pytest
from dc_tycoon import (
    PDU,
    CableRun,
    Cabinet,
    EngineSettings,
    FacilityEngine,
    FacilitySnapshot,
    SpineSwitch,
)
from dc_tycoon.facility_config import find_pdu_config
from dc_tycoon.layout import calc_zones
from dc_tycoon.thermal import calc_stats
from dc_tycoon.topology import CoolingUnit


def test_production_row_zone_and_power(production_row):
    """Three adjacent production cabinets form one zone and draw 2700 W"""
    env_zones = [z for z in calc_zones(production_row) if z.type == "environment"]
    assert len(env_zones) == 1
    assert env_zones[0].size == 3
    assert env_zones[0].bonus == pytest.approx(0.08)
    assert calc_stats(production_row, []).total_power == 2700


class TestFacilityTick(unittest.TestCase):
    """Test a complete tick over a small starter facility"""

    def setUp(self):
        self.cabinets = (
            Cabinet(id="c0", col=0, row=1, server_count=2, has_leaf_switch=True),
            Cabinet(id="c1", col=1, row=1, server_count=2),
            Cabinet(id="c2", col=2, row=1, server_count=2),
        )
        self.snapshot = FacilitySnapshot(
            cabinets=self.cabinets,
            spines=(SpineSwitch(id="s1"), SpineSwitch(id="s2")),
            cooling_units=(CoolingUnit(id="u1", type="crac", col=1, row=2),),
            pdus=(PDU(id="pdu-1", col=1, row=2, max_capacity_kw=2.0),),
            cable_runs=(
                CableRun(id="r1", leaf_cabinet_id="c0", spine_id="s1"),
                CableRun(id="r2", leaf_cabinet_id="c0", spine_id="s2"),
            ),
            suite_tier="starter",
        )
        self.engine = FacilityEngine()

    def test_power_and_pue(self):
        report = self.engine.evaluate(self.snapshot)
        # 6 servers * 450 + leaf 150 + 2 spines * 250
        self.assertEqual(report.stats.total_power, 3350)
        self.assertEqual(report.stats.avg_heat, 22)
        self.assertAlmostEqual(report.stats.pue, 1.15)

    def test_traffic(self):
        report = self.engine.evaluate(self.snapshot)
        self.assertEqual(report.traffic.total_flows, 2)
        self.assertEqual(report.traffic.total_bandwidth_gbps, 2.0)
        self.assertEqual(report.traffic.spine_utilization, {"s1": 0.1, "s2": 0.1})

    def test_spatial_bonuses(self):
        report = self.engine.evaluate(self.snapshot)
        self.assertEqual([z.id for z in report.zones], ["zone-env-1", "zone-cust-2"])
        self.assertEqual(report.mixed_env_penalties, frozenset())
        self.assertEqual(report.dedicated_rows, [])
        self.assertEqual(report.aisle_bonus, 0)
        self.assertAlmostEqual(report.spacing_heat["c1"], 0.1)

    def test_cooling_pdus_and_cables(self):
        report = self.engine.evaluate(self.snapshot)
        self.assertEqual(set(report.cabinet_cooling), {"c0", "c1", "c2"})
        self.assertAlmostEqual(report.cabinet_cooling["c1"], 3.3)
        # (1050 + 900 + 900) W
        self.assertAlmostEqual(report.pdu_loads_kw["pdu-1"], 2.85)
        self.assertEqual(report.overloaded_pdus, frozenset({"pdu-1"}))
        self.assertEqual(report.messy_cables, 2)

    def test_pdu_config_override(self):
        """Test explicit PDU config replaces the label lookup"""
        snapshot = FacilitySnapshot(
            cabinets=self.cabinets,
            pdus=(PDU(id="pdu-1", col=4, row=1, max_capacity_kw=2.0),),
            pdu_configs={"pdu-1": find_pdu_config("Intelligent PDU")},
        )
        report = self.engine.evaluate(snapshot)
        self.assertAlmostEqual(report.pdu_loads_kw["pdu-1"], 2.85)

    def test_link_capacity_override(self):
        snapshot = FacilitySnapshot(
            cabinets=self.cabinets,
            spines=self.snapshot.spines,
            link_capacity_gbps=40.0,
        )
        report = self.engine.evaluate(snapshot)
        self.assertEqual(report.traffic.total_capacity_gbps, 80.0)

    def test_settings_override(self):
        engine = FacilityEngine(EngineSettings(min_cluster_size=4))
        self.assertEqual(engine.evaluate(self.snapshot).zones, [])

    def test_unknown_suite_tier(self):
        with self.assertRaises(ValueError):
            self.engine.evaluate(FacilitySnapshot(suite_tier="palace"))

    def test_unknown_environment_row_does_not_abort_tick(self):
        cabs = tuple(Cabinet(id=f"x{i}", col=i, row=1, environment="colo", server_count=2)
                     for i in range(5))
        report = self.engine.evaluate(FacilitySnapshot(cabinets=cabs))
        self.assertEqual(report.dedicated_rows, [])
        self.assertEqual(report.zones, [])
        self.assertEqual(report.stats.total_power, 4500)

    def test_dedicated_row_bonus(self):
        cabs = tuple(Cabinet(id=f"l{i}", col=i, row=1, environment="lab", server_count=1)
                     for i in range(5))
        report = self.engine.evaluate(FacilitySnapshot(cabinets=cabs))
        self.assertEqual(len(report.dedicated_rows), 1)
        self.assertAlmostEqual(report.dedicated_row_bonus, 0.08)
        self.assertEqual(self.engine.evaluate(self.snapshot).dedicated_row_bonus, 0)

    def test_mixed_env_penalty_lookup(self):
        cabs = (Cabinet(id="p", col=0, row=1), Cabinet(id="l", col=1, row=1, environment="lab"),
                Cabinet(id="alone", col=4, row=3))
        report = self.engine.evaluate(FacilitySnapshot(cabinets=cabs))
        self.assertEqual(report.mixed_env_penalties, frozenset({"p", "l"}))
        self.assertAlmostEqual(report.mixed_env_penalty("l").heat_penalty, 0.05)
        self.assertAlmostEqual(report.mixed_env_penalty("l").revenue_penalty, 0.03)
        self.assertEqual(report.mixed_env_penalty("alone").heat_penalty, 0)

    def test_empty_facility(self):
        report = self.engine.evaluate(FacilitySnapshot())
        self.assertEqual(report.stats.total_power, 0)
        self.assertEqual(report.stats.pue, 0)
        self.assertEqual(report.traffic.total_flows, 0)
        self.assertEqual(report.zones, [])

    def test_repeatable(self):
        """Test identical snapshots give equal reports"""
        self.assertEqual(self.engine.evaluate(self.snapshot),
                         self.engine.evaluate(self.snapshot))


if __name__ == '__main__':
    unittest.main()
