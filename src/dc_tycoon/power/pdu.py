"""Power distribution unit loading.

A PDU feeds every cabinet within its Manhattan range. Its load is the
draw of the powered cabinets it serves; it is overloaded once that load
exceeds the unit's rated capacity.
"""

import logging
from typing import List, Optional, Sequence

from dc_tycoon.facility_config import POWER_DRAW, PDUConfig, PowerDraw
from dc_tycoon.thermal.power_model import cabinet_power_draw
from dc_tycoon.topology import PDU, Cabinet, manhattan_dist

logger = logging.getLogger(__name__)


def get_cabinets_in_pdu_range(pdu: PDU,
                              cabinets: Sequence[Cabinet],
                              pdu_config: Optional[PDUConfig]) -> List[Cabinet]:
    """Get cabinets within range of a PDU. Without a config nothing is in range."""
    if pdu_config is None:
        logger.debug("PDU %s has no config, serving no cabinets", pdu.id)
        return []
    return [
        c for c in cabinets
        if manhattan_dist(pdu.col, pdu.row, c.col, c.row) <= pdu_config.range
    ]


def get_pdu_load(pdu: PDU,
                 cabinets: Sequence[Cabinet],
                 pdu_config: Optional[PDUConfig],
                 power_draw: PowerDraw = POWER_DRAW) -> float:
    """Calculate current load on a PDU.

    Returns:
        Load in kW
    """
    load_w = sum(
        cabinet_power_draw(cab, power_draw)
        for cab in get_cabinets_in_pdu_range(pdu, cabinets, pdu_config)
        if cab.power_status
    )
    return load_w / 1000


def is_pdu_overloaded(pdu: PDU,
                      cabinets: Sequence[Cabinet],
                      pdu_config: Optional[PDUConfig],
                      power_draw: PowerDraw = POWER_DRAW) -> bool:
    return get_pdu_load(pdu, cabinets, pdu_config, power_draw) > pdu.max_capacity_kw
