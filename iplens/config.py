"""
Configuration for IPLens
"""

from dataclasses import dataclass
from pathlib import Path


# Database file names, preferred (commercial) variant first
ASN_DATABASES = ('GeoIP2-ASN.mmdb', 'GeoLite2-ASN.mmdb')
CITY_DATABASES = ('GeoIP2-City.mmdb', 'GeoLite2-City.mmdb')

DEFAULT_DATABASE_DIR = Path('/var/lib/GeoIP')
DEFAULT_LANGUAGE = 'en'
DEFAULT_DNS_TIMEOUT = 2.0  # seconds

# Longitude first, latitude second
OSM_LINK_TEMPLATE = "https://openstreetmap.org/#map={zoom}/{longitude}/{latitude}"
OSM_ZOOM = 11

ENV_DATABASE_DIR = 'IPLENS_MMDIR'
ENV_LANGUAGE = 'IPLENS_LANG'
ENV_DNS_TIMEOUT = 'IPLENS_DNS_TIMEOUT'


@dataclass(frozen=True)
class Settings:
    """Process-wide defaults, created once per invocation"""
    database_dir: Path = DEFAULT_DATABASE_DIR
    language: str = DEFAULT_LANGUAGE
    dns_timeout: float = DEFAULT_DNS_TIMEOUT
    asn_databases: tuple[str, ...] = ASN_DATABASES
    city_databases: tuple[str, ...] = CITY_DATABASES

