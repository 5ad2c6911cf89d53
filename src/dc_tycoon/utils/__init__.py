"""Utility modules for the facility engine"""

from .dataframes import cabinet_cooling_frame, links_to_dataframe, zones_to_dataframe

__all__ = ['links_to_dataframe', 'zones_to_dataframe', 'cabinet_cooling_frame']
