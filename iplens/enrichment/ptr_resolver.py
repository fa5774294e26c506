"""
PTR (reverse DNS) resolver
"""

import asyncio
import logging
import socket
import threading
from typing import Optional

import dns.exception
import dns.resolver


logger = logging.getLogger(__name__)


class PTRResolver:
    """
    Async PTR record resolver.

    Queries the configured DNS servers through dnspython, bounded by
    `timeout`. Hosts without a resolver configuration fall back to the
    system resolver (which also honours /etc/hosts). Every failure,
    including a timeout, yields None.
    """

    def __init__(self, timeout: float = 2.0):
        self.timeout = timeout
        self._closed = False
        try:
            self._resolver: Optional[dns.resolver.Resolver] = dns.resolver.Resolver()
            self._resolver.timeout = timeout
            self._resolver.lifetime = timeout
        except dns.resolver.NoResolverConfiguration:
            logger.debug("No DNS resolver configuration, using system resolver")
            self._resolver = None

    def _query_ptr(self, ip: str) -> Optional[str]:
        """PTR query via dnspython"""
        try:
            answers = self._resolver.resolve_address(ip)
            for rdata in answers:
                return rdata.target.to_text(omit_final_dot=True)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer,
                dns.resolver.NoNameservers, dns.exception.Timeout) as e:
            logger.debug("No PTR record for %s: %s", ip, e)
        except dns.exception.DNSException as e:
            logger.debug("PTR query for %s failed: %s", ip, e)
        return None

    def _gethostbyaddr(self, ip: str) -> Optional[str]:
        """PTR lookup via the system resolver"""
        try:
            hostname, _, _ = socket.gethostbyaddr(ip)
            return hostname
        except (socket.herror, socket.gaierror, socket.timeout, OSError) as e:
            logger.debug("No hostname for %s: %s", ip, e)
            return None

    def _resolve_sync(self, ip: str) -> Optional[str]:
        """Synchronous PTR lookup"""
        if self._resolver is not None:
            return self._query_ptr(ip)
        return self._gethostbyaddr(ip)

    async def resolve(self, ip: str) -> Optional[str]:
        """
        Async PTR lookup for single IP.

        The lookup runs on a daemon thread, so a query still blocked in
        the system resolver when the timeout expires does not keep the
        process alive.

        Args:
            ip: IP address to resolve

        Returns:
            Hostname or None if not found
        """
        if not ip or self._closed:
            return None

        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def deliver(hostname):
            if not future.done():
                future.set_result(hostname)

        def worker():
            hostname = self._resolve_sync(ip)
            try:
                loop.call_soon_threadsafe(deliver, hostname)
            except RuntimeError:
                # Loop already closed after a timeout
                pass

        threading.Thread(target=worker, name=f"ptr-{ip}", daemon=True).start()
        try:
            return await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug("PTR lookup for %s timed out after %.1fs", ip, self.timeout)
            return None

    def close(self):
        """Stop accepting lookups; threads already running are abandoned"""
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
