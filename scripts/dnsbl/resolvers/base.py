"""
Base class for DNS resolvers used by the DNSBL checker.

A resolver turns a query name into the list of IPv4 addresses it resolves
to. Missing names raise NameNotFound, every other failure ResolverError;
the checker decides what either means for a blocklist.
"""

import logging
from abc import ABC, abstractmethod


class Resolver(ABC):
    """Abstract base class for DNSBL query resolvers."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name of the resolver."""
        ...

    @abstractmethod
    def resolve(self, hostname: str) -> list[str]:
        """Resolve ``hostname`` to its IPv4 addresses.

        Returns:
            Address strings; empty if the name exists without A records.

        Raises:
            NameNotFound: the name does not exist (NXDOMAIN).
            ResolverError: any other lookup failure.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
