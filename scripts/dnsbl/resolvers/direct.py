"""Resolver sending queries with dnspython.

Many DNSBLs refuse queries from large public resolvers and answer with
error codes instead. Pointing this resolver at your own recursive resolver
(or the zone's authoritative servers) avoids that.
"""

from typing import Optional

import dns.exception
import dns.resolver

from ..errors import ConfigError, NameNotFound, ResolverError
from .base import Resolver


class DnsPythonResolver(Resolver):
    """A-record lookups through ``dns.resolver.Resolver``.

    Args:
        nameservers: Nameserver IPs to query. Empty uses /etc/resolv.conf.
        timeout: Per-server timeout in seconds. None keeps dnspython's default.
        lifetime: Total time budget per query. None keeps dnspython's default.
    """

    def __init__(
        self,
        nameservers: Optional[list[str]] = None,
        timeout: Optional[float] = None,
        lifetime: Optional[float] = None,
    ):
        super().__init__()
        self.nameservers = list(nameservers or [])

        try:
            self._resolver = dns.resolver.Resolver(configure=not self.nameservers)
            if self.nameservers:
                self._resolver.nameservers = self.nameservers
        except (dns.exception.DNSException, ValueError) as e:
            raise ConfigError(f"Cannot configure dnspython resolver: {e}") from e
        if timeout is not None:
            self._resolver.timeout = timeout
        if lifetime is not None:
            self._resolver.lifetime = lifetime

    @property
    def name(self) -> str:
        return "dnspython"

    def resolve(self, hostname: str) -> list[str]:
        try:
            answers = self._resolver.resolve(hostname, "A")
        except dns.resolver.NXDOMAIN as e:
            raise NameNotFound(hostname) from e
        except dns.resolver.NoAnswer:
            return []
        except dns.resolver.NoNameservers as e:
            raise ResolverError(hostname, f"{hostname}: no nameserver answered") from e
        except dns.exception.Timeout as e:
            raise ResolverError(hostname, f"{hostname}: timed out") from e
        except dns.exception.DNSException as e:
            raise ResolverError(hostname, f"{hostname}: {e}") from e
        return [answer.to_text() for answer in answers]
