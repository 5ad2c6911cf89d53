"""
Unit tests for leaf-spine traffic distribution
"""

import unittest
from dc_tycoon.network import (
    TrafficStats,
    calc_traffic,
    calc_traffic_with_capacity,
    calc_cable_length,
    count_messy_cables,
)
from dc_tycoon.facility_config import TRAFFIC
from dc_tycoon.topology import Cabinet, SpineSwitch, CableRun


def leaf(cab_id, col, servers=4, **kwargs):
    return Cabinet(id=cab_id, col=col, row=1, server_count=servers,
                   has_leaf_switch=True, **kwargs)


class TestTrafficEmptyFabric(unittest.TestCase):
    """Test fabrics with nothing to route"""

    def test_no_spines(self):
        stats = calc_traffic([leaf("c1", 0)], [])
        self.assertEqual(stats, TrafficStats())

    def test_all_spines_down(self):
        stats = calc_traffic([leaf("c1", 0)], [SpineSwitch(id="s1", power_status=False)])
        self.assertEqual(stats.total_flows, 0)
        self.assertEqual(stats.links, [])
        self.assertEqual(stats.spine_utilization, {})

    def test_no_leaf_switches(self):
        cabs = [Cabinet(id="c1", col=0, row=1, server_count=4)]
        stats = calc_traffic(cabs, [SpineSwitch(id="s1")])
        self.assertEqual(stats.total_flows, 0)

    def test_unpowered_leaf_ignored(self):
        stats = calc_traffic([leaf("c1", 0, power_status=False)], [SpineSwitch(id="s1")])
        self.assertEqual(stats.total_flows, 0)


class TestTrafficDistribution(unittest.TestCase):
    """Test even split across active spines"""

    def setUp(self):
        self.spines = [SpineSwitch(id="s1"), SpineSwitch(id="s2")]

    def test_even_split(self):
        """Test 4 Gbps of demand splits 2/2 over two spines"""
        stats = calc_traffic([leaf("c1", 0)], self.spines)

        self.assertEqual(stats.total_flows, 2)
        for link in stats.links:
            self.assertEqual(link.bandwidth_gbps, 2.0)
            self.assertEqual(link.capacity_gbps, 10.0)
            self.assertEqual(link.utilization, 0.2)
            self.assertFalse(link.redirected)
        self.assertEqual(stats.total_bandwidth_gbps, 4.0)
        self.assertEqual(stats.total_capacity_gbps, 20.0)
        self.assertEqual(stats.redirected_flows, 0)
        self.assertEqual(stats.spine_utilization, {"s1": 0.2, "s2": 0.2})

    def test_link_order(self):
        """Test links are ordered by cabinet, then spine"""
        stats = calc_traffic([leaf("c1", 0), leaf("c2", 1)], self.spines)
        pairs = [(l.leaf_cabinet_id, l.spine_id) for l in stats.links]
        self.assertEqual(pairs, [("c1", "s1"), ("c1", "s2"), ("c2", "s1"), ("c2", "s2")])

    def test_customer_bandwidth_multiplier(self):
        stats = calc_traffic([leaf("c1", 0, customer_type="streaming")], self.spines)
        # 4 servers * 2.0 / 2 spines
        self.assertEqual(stats.links[0].bandwidth_gbps, 4.0)

    def test_demand_multiplier(self):
        stats = calc_traffic([leaf("c1", 0)], self.spines, demand_multiplier=1.5)
        self.assertEqual(stats.links[0].bandwidth_gbps, 3.0)

    def test_capacity_clip_not_redistributed(self):
        """Test demand beyond link capacity is clipped, not spread"""
        stats = calc_traffic([leaf("c1", 0, customer_type="streaming")], self.spines,
                             demand_multiplier=4.0)
        # 32 Gbps demand -> 16 per spine -> capped at 10
        for link in stats.links:
            self.assertEqual(link.bandwidth_gbps, 10.0)
            self.assertEqual(link.utilization, 1.0)
        self.assertEqual(stats.total_bandwidth_gbps, 20.0)

    def test_per_cabinet_bandwidth_bound(self):
        """Test cabinet bandwidth never exceeds active spines x capacity"""
        for mult in (0.5, 1.0, 3.0, 10.0):
            stats = calc_traffic([leaf("c1", 0, customer_type="streaming")],
                                 self.spines, demand_multiplier=mult)
            total = sum(l.bandwidth_gbps for l in stats.links if l.leaf_cabinet_id == "c1")
            self.assertLessEqual(total, 2 * 10.0)
            for link in stats.links:
                self.assertGreaterEqual(link.utilization, 0.0)
                self.assertLessEqual(link.utilization, 1.0)


class TestTrafficRedirection(unittest.TestCase):
    """Test facility-wide redirection on spine failure"""

    def test_all_spines_up(self):
        stats = calc_traffic([leaf("c1", 0)], [SpineSwitch(id="s1"), SpineSwitch(id="s2")])
        self.assertTrue(all(not l.redirected for l in stats.links))

    def test_spine_down_redirects_every_link(self):
        spines = [SpineSwitch(id="s1"), SpineSwitch(id="s2"),
                  SpineSwitch(id="s3", power_status=False)]
        stats = calc_traffic([leaf("c1", 0), leaf("c2", 1)], spines)

        self.assertEqual(stats.total_flows, 4)
        self.assertTrue(all(l.redirected for l in stats.links))
        self.assertEqual(stats.redirected_flows, 4)
        self.assertNotIn("s3", stats.spine_utilization)

    def test_surviving_spines_take_full_demand(self):
        spines = [SpineSwitch(id="s1"), SpineSwitch(id="s2", power_status=False)]
        stats = calc_traffic([leaf("c1", 0)], spines)
        self.assertEqual(stats.links[0].bandwidth_gbps, 4.0)


class TestTrafficWithCapacity(unittest.TestCase):
    """Test the higher-bandwidth fabric variant"""

    def test_capacity_override(self):
        spines = [SpineSwitch(id="s1")]
        stats = calc_traffic_with_capacity([leaf("c1", 0)], spines, 1.0, 40.0)
        self.assertEqual(stats.links[0].capacity_gbps, 40.0)
        self.assertEqual(stats.links[0].utilization, 0.1)
        self.assertEqual(stats.total_capacity_gbps, 40.0)

    def test_matches_default_capacity(self):
        cabs = [leaf("c1", 0), leaf("c2", 1, customer_type="enterprise")]
        spines = [SpineSwitch(id="s1"), SpineSwitch(id="s2")]
        self.assertEqual(calc_traffic(cabs, spines, 1.2),
                         calc_traffic_with_capacity(cabs, spines, 1.2, 10.0))

    def test_zero_capacity_guarded(self):
        stats = calc_traffic_with_capacity([leaf("c1", 0)], [SpineSwitch(id="s1")], 1.0, 0.0)
        self.assertEqual(stats.links[0].utilization, 0.0)
        self.assertEqual(stats.spine_utilization["s1"], 0.0)

    def test_negative_capacity_rejected(self):
        with self.assertRaises(ValueError):
            calc_traffic_with_capacity([leaf("c1", 0)], [SpineSwitch(id="s1")], 1.0, -1.0)


class TestCabling(unittest.TestCase):
    """Test cable helpers"""

    def test_messy_cables(self):
        runs = [
            CableRun(id="r1", leaf_cabinet_id="c1", spine_id="s1", uses_trays=True),
            CableRun(id="r2", leaf_cabinet_id="c1", spine_id="s2"),
            CableRun(id="r3", leaf_cabinet_id="c2", spine_id="s1"),
        ]
        self.assertEqual(count_messy_cables(runs), 2)
        self.assertEqual(count_messy_cables([]), 0)

    def test_cable_length(self):
        self.assertEqual(calc_cable_length(0, 1, 0, 5), 4)
        self.assertEqual(calc_cable_length(2, 3, 1, 5), 4)


def test_fixture_fabric(leaf_cabinets, spines):
    """Four 4-server leaves over two spines carry 2 Gbps per link"""
    stats = calc_traffic(leaf_cabinets, spines)
    assert stats.total_flows == 8
    assert stats.total_bandwidth_gbps == 16.0
    assert stats.total_capacity_gbps == 80.0
    assert stats.spine_utilization == {"spine-0": 0.2, "spine-1": 0.2}
    assert all(link.bandwidth_gbps == 2.0 and link.utilization == 0.2 for link in stats.links)


def test_default_constants_match_explicit(leaf_cabinets, spines):
    assert calc_traffic(leaf_cabinets, spines) == calc_traffic(leaf_cabinets, spines, traffic=TRAFFIC)


if __name__ == '__main__':
    unittest.main()
