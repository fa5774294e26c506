"""
Abstract base class for geo database implementations
"""

from abc import ABC, abstractmethod

from ..models import ASNRecord, GeoRecord, IPAddress


class GeoDatabase(ABC):
    """
    Read-only geo database.

    Lookups for addresses the database does not cover return an empty
    record; they never raise.
    """

    @abstractmethod
    def asn(self, address: IPAddress) -> ASNRecord:
        """Look up autonomous system data for an address"""
        pass

    @abstractmethod
    def city(self, address: IPAddress) -> GeoRecord:
        """Look up city level data for an address"""
        pass

    @abstractmethod
    def languages(self) -> list[str]:
        """Language codes available for localized names"""
        pass

    def close(self):
        """Release the underlying data"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
