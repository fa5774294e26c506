"""
IPLens - Offline IP Address Information

Resolve a single IP address into hostname, location and network
ownership details using locally stored MaxMind databases.
"""

__version__ = "1.0.0"
__author__ = "IPLens"
