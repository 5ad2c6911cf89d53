"""Power distribution models.

This module provides PDU range, load and overload checks.
"""

from .pdu import get_cabinets_in_pdu_range, get_pdu_load, is_pdu_overloaded

__all__ = [
    'get_cabinets_in_pdu_range',
    'get_pdu_load',
    'is_pdu_overloaded',
]
