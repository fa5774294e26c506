"""
Merge ASN and City lookups into a single IPInfo record

Every output field is derived by its own small function from the
optional source fields. None of them raise: missing source data simply
leaves the output field empty.
"""

from typing import Optional

from .config import OSM_LINK_TEMPLATE, OSM_ZOOM
from .models import (
    ASNRecord, GeoRecord, IPInfo, Location, Request, Subdivision, SubdivisionPolicy
)


def select_city(names: Optional[dict[str, str]], language: str) -> Optional[str]:
    """Localized city name, or None when the language is not available"""
    if not names:
        return None
    return names.get(language)


def select_region(subdivisions: Optional[list[Subdivision]],
                  policy: SubdivisionPolicy) -> Optional[str]:
    """ISO code of the first or last subdivision"""
    if not subdivisions:
        return None
    subdivision = subdivisions[-1] if policy == SubdivisionPolicy.LAST else subdivisions[0]
    return subdivision.iso_code


def format_osm_link(latitude: float, longitude: float) -> str:
    return OSM_LINK_TEMPLATE.format(
        zoom=OSM_ZOOM,
        longitude=f"{longitude:.4f}",
        latitude=f"{latitude:.4f}",
    )


def format_coordinates(location: Optional[Location]
                       ) -> tuple[Optional[float], Optional[float], Optional[str]]:
    """
    Latitude, longitude and map link.

    Only a complete pair is emitted; with either coordinate missing all
    three values are None.
    """
    if location is None or location.latitude is None or location.longitude is None:
        return None, None, None
    return (
        location.latitude,
        location.longitude,
        format_osm_link(location.latitude, location.longitude),
    )


def format_org(number: Optional[int], organization: Optional[str]) -> Optional[str]:
    """
    Combine AS number and organization.

    e.g. "AS15169 Google LLC", "AS15169", "Google LLC"
    """
    if number is not None and organization is not None:
        return f"AS{number} {organization}"
    if number is not None:
        return f"AS{number}"
    return organization


def merge(asn: ASNRecord, geo: GeoRecord, hostname: Optional[str],
          request: Request) -> IPInfo:
    """Build the resolved output record for a routable address"""
    lat, long, osm = format_coordinates(geo.location)

    return IPInfo(
        ip=str(request.address),
        hostname=hostname,
        city=select_city(geo.city_names, request.language),
        region_iso=select_region(geo.subdivisions, request.subdivision_policy),
        country_iso=geo.country_iso_code,
        lat=lat,
        long=long,
        osm=osm,
        org=format_org(asn.number, asn.organization),
        postal=geo.postal_code,
        timezone=geo.location.time_zone if geo.location else None,
    )
