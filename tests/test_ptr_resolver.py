"""Tests for the reverse DNS resolver."""

import asyncio
import os
import socket
import subprocess
import sys
import textwrap
import time
from pathlib import Path
from types import SimpleNamespace

import dns.exception
import dns.name
import dns.resolver
import pytest

from iplens.enrichment import PTRResolver


class StubDNSResolver:
    """Replacement for dns.resolver.Resolver.resolve_address."""

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.queries = []

    def resolve_address(self, ip):
        self.queries.append(ip)
        if self.error:
            raise self.error
        return [SimpleNamespace(target=dns.name.from_text(self.answer))]


@pytest.fixture
def resolver():
    r = PTRResolver(timeout=0.5)
    yield r
    r.close()


class TestPTRResolver:
    def test_returns_hostname_without_trailing_dot(self, resolver):
        resolver._resolver = StubDNSResolver("dns.google.")
        assert asyncio.run(resolver.resolve("8.8.8.8")) == "dns.google"
        assert resolver._resolver.queries == ["8.8.8.8"]

    @pytest.mark.parametrize("error", [
        dns.resolver.NXDOMAIN(),
        dns.resolver.NoAnswer(),
        dns.resolver.NoNameservers(),
        dns.exception.Timeout(),
    ])
    def test_dns_failures_are_absent(self, resolver, error):
        resolver._resolver = StubDNSResolver(error=error)
        assert asyncio.run(resolver.resolve("192.0.2.1")) is None

    def test_timeout_is_absent(self, resolver, monkeypatch):
        resolver.timeout = 0.05
        monkeypatch.setattr(resolver, "_resolve_sync", lambda ip: time.sleep(0.5) or "late.example")
        assert asyncio.run(resolver.resolve("8.8.8.8")) is None

    def test_empty_address(self, resolver):
        assert asyncio.run(resolver.resolve("")) is None

    def test_system_resolver_fallback(self, resolver, monkeypatch):
        resolver._resolver = None
        monkeypatch.setattr(socket, "gethostbyaddr",
                            lambda ip: ("one.one.one.one", [], [ip]))
        assert asyncio.run(resolver.resolve("1.1.1.1")) == "one.one.one.one"

    def test_system_resolver_failure(self, resolver, monkeypatch):
        def fail(ip):
            raise socket.herror(1, "Unknown host")

        resolver._resolver = None
        monkeypatch.setattr(socket, "gethostbyaddr", fail)
        assert asyncio.run(resolver.resolve("1.1.1.1")) is None

    def test_no_resolver_configuration(self, monkeypatch):
        def unconfigured():
            raise dns.resolver.NoResolverConfiguration()

        monkeypatch.setattr(dns.resolver, "Resolver", unconfigured)
        with PTRResolver(timeout=1.0) as r:
            assert r._resolver is None

    def test_closed_resolver_skips_lookup(self, monkeypatch):
        calls = []
        r = PTRResolver(timeout=0.5)
        monkeypatch.setattr(r, "_resolve_sync", lambda ip: calls.append(ip) or "dns.google")
        r.close()

        assert asyncio.run(r.resolve("8.8.8.8")) is None
        assert calls == []


HANGING_LOOKUP = textwrap.dedent("""
    import asyncio
    import socket
    import time

    import dns.resolver

    def unconfigured():
        raise dns.resolver.NoResolverConfiguration()

    def hang(ip):
        time.sleep(5)
        return ("late.example", [], [ip])

    dns.resolver.Resolver = unconfigured
    socket.gethostbyaddr = hang

    from iplens.enrichment import PTRResolver

    with PTRResolver(timeout=0.2) as r:
        print(asyncio.run(r.resolve("8.8.8.8")))
""")


def test_blocked_system_lookup_does_not_delay_exit():
    env = dict(os.environ)
    root = str(Path(__file__).resolve().parents[1])
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [root, env.get("PYTHONPATH")]))

    started = time.monotonic()
    result = subprocess.run([sys.executable, "-c", HANGING_LOOKUP], env=env,
                            capture_output=True, text=True, timeout=30)
    elapsed = time.monotonic() - started

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "None"
    assert elapsed < 3.0
