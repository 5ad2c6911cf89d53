"""Leaf-spine network traffic and cabling models."""

from .traffic import (
    TrafficLink,
    TrafficStats,
    calc_traffic,
    calc_traffic_with_capacity,
)
from .cabling import calc_cable_length, count_messy_cables

__all__ = [
    'TrafficLink',
    'TrafficStats',
    'calc_traffic',
    'calc_traffic_with_capacity',
    'calc_cable_length',
    'count_messy_cables',
]
