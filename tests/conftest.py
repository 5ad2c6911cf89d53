"""
Pytest configuration and shared fixtures for facility engine tests.
"""

import sys
import os
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dc_tycoon.topology import Cabinet, SpineSwitch, CoolingUnit, ChillerPlant, CoolingPipe


@pytest.fixture
def production_row():
    """Three powered production cabinets side by side, 2 servers each"""
    return [
        Cabinet(id=f"cab-{i}", col=i, row=1, environment="production", server_count=2)
        for i in range(3)
    ]


@pytest.fixture
def leaf_cabinets():
    """Four powered cabinets with leaf switches and 4 servers each"""
    return [
        Cabinet(id=f"leaf-{i}", col=i, row=1, server_count=4, has_leaf_switch=True)
        for i in range(4)
    ]


@pytest.fixture
def spines():
    return [SpineSwitch(id="spine-0"), SpineSwitch(id="spine-1")]


@pytest.fixture
def pipe_chain():
    """Chiller at the origin with a pipe run along row 0 out to col 5"""
    chiller = ChillerPlant(id="ch-0", col=0, row=0, tier="basic")
    pipes = [CoolingPipe(id=f"p-{c}", col=c, row=0) for c in (3, 4, 5)]
    unit = CoolingUnit(id="crah-0", type="crah", col=6, row=0)
    return chiller, pipes, unit
