"""
MaxMind DB (.mmdb) backed geo database
"""

import logging
from pathlib import Path
from typing import Iterable, Union

import geoip2.database
import geoip2.errors
import maxminddb

from ..exceptions import DatabaseUnavailableError, MalformedDatabaseError
from ..models import ASNRecord, GeoRecord, IPAddress, Location, Subdivision
from .base import GeoDatabase


logger = logging.getLogger(__name__)


class MaxMindDatabase(GeoDatabase):
    """
    Adapter around geoip2.database.Reader.

    The whole file is loaded into memory on open, so lookups never touch
    the filesystem again.
    """

    def __init__(self, path: Union[str, Path], kind: str):
        self.path = Path(path)
        self.kind = kind
        try:
            self._reader = geoip2.database.Reader(str(self.path), mode=maxminddb.MODE_MEMORY)
        except maxminddb.InvalidDatabaseError as e:
            raise MalformedDatabaseError(kind, self.path, str(e)) from e

        database_type = self._reader.metadata().database_type
        if kind not in database_type:
            self._reader.close()
            raise MalformedDatabaseError(
                kind, self.path, f"unexpected database type '{database_type}'"
            )
        logger.debug("Opened %s database %s (%s)", kind, self.path, database_type)

    def _query(self, method, address: IPAddress):
        """Run a reader lookup; None when the address has no record."""
        try:
            return method(address)
        except geoip2.errors.AddressNotFoundError:
            logger.debug("%s not found in %s", address, self.path.name)
        except ValueError as e:
            # IPv6 address against an IPv4-only database
            logger.debug("%s cannot be looked up in %s: %s", address, self.path.name, e)
        except maxminddb.InvalidDatabaseError as e:
            raise MalformedDatabaseError(self.kind, self.path, str(e)) from e
        return None

    def asn(self, address: IPAddress) -> ASNRecord:
        response = self._query(self._reader.asn, address)
        if response is None:
            return ASNRecord()

        return ASNRecord(
            number=response.autonomous_system_number,
            organization=response.autonomous_system_organization,
        )

    def city(self, address: IPAddress) -> GeoRecord:
        response = self._query(self._reader.city, address)
        if response is None:
            return GeoRecord()

        location = response.location
        return GeoRecord(
            city_names=dict(response.city.names) or None,
            subdivisions=[Subdivision(iso_code=s.iso_code) for s in response.subdivisions] or None,
            country_iso_code=response.country.iso_code,
            location=Location(
                latitude=location.latitude,
                longitude=location.longitude,
                time_zone=location.time_zone,
            ),
            postal_code=response.postal.code,
        )

    def languages(self) -> list[str]:
        return list(self._reader.metadata().languages)

    def close(self):
        self._reader.close()


def open_database(directory: Union[str, Path], names: Iterable[str], kind: str) -> MaxMindDatabase:
    """
    Open the first existing database file out of several name variants.

    A variant that cannot be read is skipped; a variant that is read but
    rejected as a MaxMind DB is fatal and does not fall through.

    Args:
        directory: Directory holding the .mmdb files
        names: File names in order of preference
        kind: Database kind, "ASN" or "City"

    Raises:
        DatabaseUnavailableError: no variant could be read
        MalformedDatabaseError: the chosen file is not a valid database
    """
    directory = Path(directory)
    for name in names:
        path = directory / name
        try:
            return MaxMindDatabase(path, kind)
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)

    raise DatabaseUnavailableError(kind, directory)
