"""
Data models for IPLens
"""

from dataclasses import dataclass, fields
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_DATABASE_DIR, DEFAULT_LANGUAGE


IPAddress = Union[IPv4Address, IPv6Address]


class SubdivisionPolicy(Enum):
    """Which end of the subdivision list is authoritative for the region"""
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class Request:
    """Validated input for a single resolution"""
    address: IPAddress
    database_dir: Path = DEFAULT_DATABASE_DIR
    language: str = DEFAULT_LANGUAGE
    subdivision_policy: SubdivisionPolicy = SubdivisionPolicy.FIRST


@dataclass
class ASNRecord:
    """Autonomous system data, either field may be missing"""
    number: Optional[int] = None
    organization: Optional[str] = None


@dataclass
class Subdivision:
    """Administrative region (state, canton, county...)"""
    iso_code: Optional[str] = None


@dataclass
class Location:
    """Coordinates and time zone"""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    time_zone: Optional[str] = None


@dataclass
class GeoRecord:
    """City level data, every sub-record independently optional"""
    city_names: Optional[dict[str, str]] = None
    subdivisions: Optional[list[Subdivision]] = None  # most general first
    country_iso_code: Optional[str] = None
    location: Optional[Location] = None
    postal_code: Optional[str] = None


@dataclass
class IPBogon:
    """Result for an address that is not globally routable"""
    ip: str
    bogon: bool = True

    def to_dict(self) -> dict:
        return {"ip": self.ip, "bogon": self.bogon}


@dataclass
class IPInfo:
    """Resolved result, absent fields are left out when serialized"""
    ip: str
    hostname: Optional[str] = None
    city: Optional[str] = None
    region_iso: Optional[str] = None
    country_iso: Optional[str] = None
    lat: Optional[float] = None
    long: Optional[float] = None
    osm: Optional[str] = None
    org: Optional[str] = None
    postal: Optional[str] = None
    timezone: Optional[str] = None

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                data[f.name] = value
        return data


OutputRecord = Union[IPBogon, IPInfo]
