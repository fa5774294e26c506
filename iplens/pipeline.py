"""
Resolution pipeline: classify, look up, merge
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import Settings
from .database import open_database
from .enrichment import DualSourceLookup, IPClassifier, IPType, PTRResolver
from .merge import merge
from .models import IPBogon, OutputRecord, Request


logger = logging.getLogger(__name__)


def resolve(request: Request,
            lookup: Optional[DualSourceLookup] = None,
            settings: Settings = Settings(),
            dns: bool = True) -> OutputRecord:
    """
    Resolve one address into an output record.

    Addresses that are not globally routable short-circuit to an IPBogon
    before any database is opened or DNS query sent.

    Args:
        request: Validated request
        lookup: Lookup to use, built from the request when omitted
        settings: Database names and DNS timeout for the default lookup
        dns: Whether the default lookup resolves the hostname

    Returns:
        IPBogon or IPInfo

    Raises:
        DatabaseUnavailableError, MalformedDatabaseError
    """
    ip_type = IPClassifier.classify(request.address)
    if ip_type != IPType.PUBLIC:
        logger.debug("%s is a bogon (%s)", request.address, ip_type.value)
        return IPBogon(ip=str(request.address))

    resolver = None
    if lookup is None:
        resolver = PTRResolver(timeout=settings.dns_timeout) if dns else None
        lookup = DualSourceLookup(request.database_dir, resolver=resolver, settings=settings)

    try:
        result = lookup.lookup(request.address)
    finally:
        if resolver is not None:
            resolver.close()
    return merge(result.asn, result.geo, result.hostname, request)


def list_languages(database_dir: Union[str, Path], settings: Settings = Settings()) -> list[str]:
    """Language codes offered by the City database"""
    with open_database(database_dir, settings.city_databases, 'City') as city_db:
        return city_db.languages()
