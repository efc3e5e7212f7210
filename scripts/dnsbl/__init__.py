"""DNSBL lookup package (RFC 5782).

Public API:
    - DnsblChecker: Checks IPs against an ordered list of blocklists
    - status / is_blocked: One-shot checks against DEFAULT_BLOCKLISTS
    - DnsblConfig: Configuration dataclass
    - DnsblStatus: Status result (not listed / blocked / error)
    - BlacklistResult: Per-blocklist result

Resolver API (for extending):
    - Resolver: Base class for DNS resolvers
    - register_resolver / get_resolver: Resolver registry
"""

from .checker import DnsblChecker, is_blocked, listed_codes, status
from .config import DEFAULT_BLOCKLISTS, DnsblConfig
from .errors import (
    ConfigError,
    DnsblError,
    InvalidAddressError,
    NameNotFound,
    ResolverError,
)
from .models import BlacklistResult, DnsblStatus, Listing
from .resolvers import (
    DnsPythonResolver,
    Resolver,
    SystemResolver,
    get_resolver,
    register_resolver,
)
from .reverse import query_name, reverse_ip

__all__ = [
    # Main API
    "DnsblChecker",
    "status",
    "is_blocked",
    "listed_codes",
    "reverse_ip",
    "query_name",
    "DnsblConfig",
    "DEFAULT_BLOCKLISTS",
    "DnsblStatus",
    "Listing",
    "BlacklistResult",
    # Errors
    "DnsblError",
    "ConfigError",
    "InvalidAddressError",
    "ResolverError",
    "NameNotFound",
    # Resolver API
    "Resolver",
    "SystemResolver",
    "DnsPythonResolver",
    "get_resolver",
    "register_resolver",
]
