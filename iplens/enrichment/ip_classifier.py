"""
IP address classifier
"""

import ipaddress
from enum import Enum
from typing import Union


AddressLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]


class IPType(Enum):
    """IP address classification types"""
    UNSPECIFIED = "unspecified"
    BROADCAST = "broadcast"
    LOOPBACK = "loopback"
    LINKLOCAL = "linklocal"
    MULTICAST = "multicast"
    DOCUMENTATION = "documentation"
    CGNAT = "cgnat"
    PRIVATE = "private"
    RESERVED = "reserved"
    PUBLIC = "public"


class IPClassifier:
    """
    Classify IPv4 and IPv6 addresses into categories.

    Categories:
    - unspecified: 0.0.0.0, ::
    - broadcast: 255.255.255.255
    - loopback: 127/8, ::1
    - linklocal: 169.254/16, fe80::/10
    - multicast: 224/4, ff00::/8
    - documentation: RFC 5737 TEST-NETs, 2001:db8::/32, 3fff::/20
    - cgnat: Carrier-grade NAT (100.64/10)
    - private: RFC 1918, ULA and other private-use blocks
    - reserved: any other IANA special-purpose block
    - public: Globally routable

    IPv4-mapped IPv6 addresses (::ffff:a.b.c.d) are not globally reachable
    themselves and count as reserved, whatever address they embed.
    """

    CGNAT_NETWORK = ipaddress.IPv4Network('100.64.0.0/10')
    BROADCAST_ADDRESS = ipaddress.IPv4Address('255.255.255.255')
    DOCUMENTATION_NETWORKS = (
        ipaddress.IPv4Network('192.0.2.0/24'),
        ipaddress.IPv4Network('198.51.100.0/24'),
        ipaddress.IPv4Network('203.0.113.0/24'),
        ipaddress.IPv6Network('2001:db8::/32'),
        ipaddress.IPv6Network('3fff::/20'),
    )

    # IANA special-purpose blocks that are not globally reachable, listed
    # here so the verdict does not depend on the ipaddress tables of the
    # running interpreter
    SPECIAL_PURPOSE_NETWORKS = (
        ipaddress.IPv4Network('192.0.0.0/24'),
        ipaddress.IPv6Network('::ffff:0:0/96'),
        ipaddress.IPv6Network('64:ff9b:1::/48'),
        ipaddress.IPv6Network('100::/64'),
        ipaddress.IPv6Network('2001::/23'),
        ipaddress.IPv6Network('2002::/16'),
        ipaddress.IPv6Network('5f00::/16'),
        ipaddress.IPv6Network('fec0::/10'),
    )

    # Globally reachable exceptions inside the blocks above
    GLOBAL_EXCEPTIONS = (
        ipaddress.IPv4Network('192.0.0.9/32'),
        ipaddress.IPv4Network('192.0.0.10/32'),
        ipaddress.IPv6Network('2001:1::1/128'),
        ipaddress.IPv6Network('2001:1::2/128'),
        ipaddress.IPv6Network('2001:3::/32'),
        ipaddress.IPv6Network('2001:4:112::/48'),
        ipaddress.IPv6Network('2001:20::/28'),
        ipaddress.IPv6Network('2001:30::/28'),
    )

    @staticmethod
    def _in_any(addr, networks) -> bool:
        return any(addr.version == net.version and addr in net for net in networks)

    @classmethod
    def classify(cls, ip: AddressLike) -> IPType:
        """
        Classify an IP address.

        Args:
            ip: IPv4/IPv6 address string or ipaddress object

        Returns:
            IPType enum value

        Raises:
            ValueError: if ip is not a valid address
        """
        addr = ipaddress.ip_address(ip)

        if addr.is_unspecified:
            return IPType.UNSPECIFIED

        if addr == cls.BROADCAST_ADDRESS:
            return IPType.BROADCAST

        if addr.is_loopback:
            return IPType.LOOPBACK

        if addr.is_link_local:
            return IPType.LINKLOCAL

        if addr.is_multicast:
            return IPType.MULTICAST

        if cls._in_any(addr, cls.DOCUMENTATION_NETWORKS):
            return IPType.DOCUMENTATION

        # CGNAT range (not covered by is_private)
        if addr.version == 4 and addr in cls.CGNAT_NETWORK:
            return IPType.CGNAT

        if cls._in_any(addr, cls.GLOBAL_EXCEPTIONS):
            return IPType.PUBLIC

        if cls._in_any(addr, cls.SPECIAL_PURPOSE_NETWORKS):
            return IPType.RESERVED

        if addr.is_private:
            return IPType.PRIVATE

        if addr.is_global:
            return IPType.PUBLIC

        return IPType.RESERVED

    @classmethod
    def is_routable(cls, ip: AddressLike) -> bool:
        """Check if IP is publicly routable"""
        return cls.classify(ip) == IPType.PUBLIC
