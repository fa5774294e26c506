"""
Dual-source lookup against the ASN and City databases
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from ..config import Settings
from ..database import GeoDatabase, open_database
from ..models import ASNRecord, GeoRecord, IPAddress
from .ptr_resolver import PTRResolver


logger = logging.getLogger(__name__)

DatabaseOpener = Callable[[Path, Iterable[str], str], GeoDatabase]


@dataclass
class LookupResult:
    """Raw results of both databases plus reverse DNS"""
    asn: ASNRecord
    geo: GeoRecord
    hostname: Optional[str] = None


class DualSourceLookup:
    """
    Query the ASN database, the City database and reverse DNS for one address.

    Both databases are opened fresh for every lookup and closed afterwards.
    The PTR query runs while the databases are read; the result is only
    returned once both sides are done.
    """

    def __init__(self, database_dir: Union[str, Path],
                 resolver: Optional[PTRResolver] = None,
                 settings: Settings = Settings(),
                 opener: DatabaseOpener = open_database):
        self.database_dir = Path(database_dir)
        self.resolver = resolver
        self.settings = settings
        self._open = opener

    def _query_databases(self, address: IPAddress) -> tuple[ASNRecord, GeoRecord]:
        """
        Open both databases and query them.

        Raises:
            DatabaseUnavailableError, MalformedDatabaseError
        """
        with self._open(self.database_dir, self.settings.city_databases, 'City') as city_db:
            with self._open(self.database_dir, self.settings.asn_databases, 'ASN') as asn_db:
                geo = city_db.city(address)
                asn = asn_db.asn(address)
        return asn, geo

    async def _resolve_hostname(self, address: IPAddress) -> Optional[str]:
        if self.resolver is None:
            return None
        return await self.resolver.resolve(str(address))

    async def _lookup(self, address: IPAddress) -> LookupResult:
        loop = asyncio.get_running_loop()
        (asn, geo), hostname = await asyncio.gather(
            loop.run_in_executor(None, self._query_databases, address),
            self._resolve_hostname(address),
        )
        return LookupResult(asn=asn, geo=geo, hostname=hostname)

    def lookup(self, address: IPAddress) -> LookupResult:
        """
        Look up an address that has already been classified as routable.

        Args:
            address: Globally routable IP address

        Returns:
            LookupResult, with empty records where a database has no entry

        Raises:
            DatabaseUnavailableError: a database file is missing in every variant
            MalformedDatabaseError: a database file is not a valid MaxMind DB
        """
        logger.debug("Looking up %s in %s", address, self.database_dir)
        return asyncio.run(self._lookup(address))
