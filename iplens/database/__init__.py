"""
Geo database access for IPLens
"""

from .base import GeoDatabase
from .maxmind import MaxMindDatabase, open_database

__all__ = ['GeoDatabase', 'MaxMindDatabase', 'open_database']
