"""Shared fixtures: in-memory databases, resolvers and a stub geoip2 reader."""

import errno
from pathlib import Path
from types import SimpleNamespace

import geoip2.database
import geoip2.errors
import maxminddb
import pytest

from iplens.database import GeoDatabase
from iplens.models import ASNRecord, GeoRecord


class FakeDatabase(GeoDatabase):
    """GeoDatabase backed by plain dicts keyed by address string."""

    def __init__(self, asn=None, city=None, languages=()):
        self.asn_records = asn or {}
        self.city_records = city or {}
        self._languages = list(languages)
        self.queries = []
        self.closed = False

    def asn(self, address):
        self.queries.append(str(address))
        return self.asn_records.get(str(address), ASNRecord())

    def city(self, address):
        self.queries.append(str(address))
        return self.city_records.get(str(address), GeoRecord())

    def languages(self):
        return self._languages

    def close(self):
        self.closed = True


class FakeResolver:
    """PTR resolver answering from a dict."""

    def __init__(self, hostnames=None):
        self.hostnames = hostnames or {}
        self.calls = []
        self.closed = False

    async def resolve(self, ip):
        self.calls.append(ip)
        return self.hostnames.get(ip)

    def close(self):
        self.closed = True


def city_response(names=None, subdivisions=(), country=None, latitude=None,
                  longitude=None, time_zone=None, postal=None):
    """Object shaped like geoip2.models.City."""
    return SimpleNamespace(
        city=SimpleNamespace(names=names or {}),
        subdivisions=[SimpleNamespace(iso_code=code) for code in subdivisions],
        country=SimpleNamespace(iso_code=country),
        location=SimpleNamespace(latitude=latitude, longitude=longitude, time_zone=time_zone),
        postal=SimpleNamespace(code=postal),
    )


def asn_response(number=None, organization=None):
    """Object shaped like geoip2.models.ASN."""
    return SimpleNamespace(
        autonomous_system_number=number,
        autonomous_system_organization=organization,
    )


VALID_CONTENT = b"stub-mmdb"


class StubReader:
    """
    Stands in for geoip2.database.Reader.

    Files must exist and contain VALID_CONTENT, anything else is rejected
    the way maxminddb rejects a corrupt file. Records come from the
    `databases` mapping, keyed by file name.
    """

    databases = {}
    opened = []

    def __init__(self, path, mode=None):
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        if path.read_bytes() != VALID_CONTENT:
            raise maxminddb.InvalidDatabaseError(
                f"Error opening database file ({path}). Is this a valid MaxMind DB file?"
            )
        self.path = path
        self.mode = mode
        self.closed = False
        self._db = self.databases[path.name]
        self.opened.append(self)

    def metadata(self):
        return SimpleNamespace(
            database_type=self._db["type"],
            languages=self._db.get("languages", []),
        )

    def _get(self, ip):
        try:
            record = self._db["records"][str(ip)]
        except KeyError:
            raise geoip2.errors.AddressNotFoundError(
                f"The address {ip} is not in the database."
            ) from None
        if isinstance(record, Exception):
            raise record
        return record

    def asn(self, ip):
        return self._get(ip)

    def city(self, ip):
        return self._get(ip)

    def close(self):
        self.closed = True


ZURICH_IP = "142.250.203.110"


@pytest.fixture
def fake_database():
    return FakeDatabase


@pytest.fixture
def fake_resolver():
    return FakeResolver


@pytest.fixture
def stub_reader(monkeypatch):
    """Patch geoip2's Reader; returns the class so tests can inspect it."""
    monkeypatch.setattr(StubReader, "databases", {})
    monkeypatch.setattr(StubReader, "opened", [])
    monkeypatch.setattr(geoip2.database, "Reader", StubReader)
    return StubReader


@pytest.fixture
def mmdb_dir(tmp_path, stub_reader):
    """
    Directory with a GeoLite2 ASN and a GeoIP2 City database knowing
    one Zurich address.
    """
    stub_reader.databases.update({
        "GeoLite2-ASN.mmdb": {
            "type": "GeoLite2-ASN",
            "records": {ZURICH_IP: asn_response(15169, "Google LLC")},
        },
        "GeoIP2-City.mmdb": {
            "type": "GeoIP2-City",
            "languages": ["de", "en", "fr"],
            "records": {
                ZURICH_IP: city_response(
                    names={"de": "Zürich", "en": "Zurich"},
                    subdivisions=["ZH", "8"],
                    country="CH",
                    latitude=47.3667,
                    longitude=8.55,
                    time_zone="Europe/Zurich",
                    postal="8000",
                ),
            },
        },
    })
    (tmp_path / "GeoLite2-ASN.mmdb").write_bytes(VALID_CONTENT)
    (tmp_path / "GeoIP2-City.mmdb").write_bytes(VALID_CONTENT)
    return tmp_path
