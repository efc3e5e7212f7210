"""Exceptions raised by the DNSBL checker."""

from netutils.ip import InvalidAddressError

__all__ = [
    "ConfigError",
    "DnsblError",
    "InvalidAddressError",
    "NameNotFound",
    "ResolverError",
]


class DnsblError(Exception):
    """Base class for DNSBL checker errors."""


class ConfigError(DnsblError, ValueError):
    """Invalid checker configuration (unknown resolver, bad value)."""


class ResolverError(DnsblError):
    """DNS lookup failed for a reason other than a missing name."""

    def __init__(self, hostname: str, message: str = ""):
        self.hostname = hostname
        super().__init__(message or f"Lookup failed for {hostname}")


class NameNotFound(ResolverError):
    """NXDOMAIN: the queried name does not exist."""

    def __init__(self, hostname: str):
        super().__init__(hostname, f"{hostname} does not exist")
