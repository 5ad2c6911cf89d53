"""
Unit tests for PDU range and load
"""

import unittest
from dc_tycoon.facility_config import find_pdu_config
from dc_tycoon.power import get_cabinets_in_pdu_range, get_pdu_load, is_pdu_overloaded
from dc_tycoon.topology import PDU, Cabinet


class TestPDULoad(unittest.TestCase):
    """Test PDU loading against basic PDU (range 2)"""

    def setUp(self):
        self.config = find_pdu_config("Basic PDU")
        self.pdu = PDU(id="pdu-1", col=0, row=2, max_capacity_kw=10)
        self.cabinets = [
            Cabinet(id=f"c{i}", col=i, row=1, server_count=4) for i in range(3)
        ]

    def test_range(self):
        in_range = get_cabinets_in_pdu_range(self.pdu, self.cabinets, self.config)
        self.assertEqual([c.id for c in in_range], ["c0", "c1"])

    def test_no_config_serves_nothing(self):
        self.assertEqual(get_cabinets_in_pdu_range(self.pdu, self.cabinets, None), [])
        self.assertEqual(get_pdu_load(self.pdu, self.cabinets, None), 0)

    def test_load_kw(self):
        # 2 cabinets * 4 servers * 450 W
        self.assertAlmostEqual(get_pdu_load(self.pdu, self.cabinets, self.config), 3.6)

    def test_unpowered_cabinet_draws_nothing(self):
        cabs = [Cabinet(id="c0", col=0, row=1, server_count=4, power_status=False)]
        self.assertEqual(get_pdu_load(self.pdu, cabs, self.config), 0)

    def test_overload(self):
        self.assertFalse(is_pdu_overloaded(self.pdu, self.cabinets, self.config))
        small = PDU(id="pdu-2", col=0, row=2, max_capacity_kw=3.0)
        self.assertTrue(is_pdu_overloaded(small, self.cabinets, self.config))

    def test_load_at_capacity_not_overloaded(self):
        exact = PDU(id="pdu-3", col=0, row=2, max_capacity_kw=3.6)
        self.assertFalse(is_pdu_overloaded(exact, self.cabinets, self.config))


if __name__ == '__main__':
    unittest.main()
