"""
Resolver Registry

Factory for creating resolver instances by name or from a DnsblConfig.
"""

import logging
from typing import Type

from ..config import DnsblConfig
from ..errors import ConfigError
from .base import Resolver

logger = logging.getLogger(__name__)

# Resolver registry
_resolvers: dict[str, Type[Resolver]] = {}


def register_resolver(name: str, resolver_class: Type[Resolver]) -> None:
    """Register a resolver class under ``name``."""
    _resolvers[name.lower()] = resolver_class
    logger.debug(f"Registered resolver: {name}")


def list_resolvers() -> list[str]:
    """Return the registered resolver names."""
    return sorted(_resolvers)


def get_resolver(resolver_name: str, **kwargs) -> Resolver:
    """
    Create a resolver instance.

    Args:
        resolver_name: Registered name (e.g., "system", "dnspython")
        **kwargs: Resolver-specific options

    Raises:
        ConfigError: unknown resolver or unsupported option
    """
    resolver_name = resolver_name.lower()

    if resolver_name not in _resolvers:
        raise ConfigError(
            f"Unknown resolver: {resolver_name} "
            f"(available: {', '.join(list_resolvers())})"
        )

    try:
        return _resolvers[resolver_name](**kwargs)
    except TypeError as e:
        raise ConfigError(f"Invalid options for resolver {resolver_name}: {e}") from e


def resolver_from_config(config: DnsblConfig) -> Resolver:
    """Build the resolver a DnsblConfig asks for."""
    if config.resolver.lower() == "dnspython":
        return get_resolver(
            "dnspython",
            nameservers=config.nameservers,
            timeout=config.timeout,
            lifetime=config.timeout,
        )

    if config.nameservers:
        logger.warning(
            f"Nameservers {config.nameservers} ignored by resolver {config.resolver}"
        )
    return get_resolver(config.resolver)


def _register_builtin_resolvers() -> None:
    from .direct import DnsPythonResolver
    from .system import SystemResolver

    register_resolver("system", SystemResolver)
    register_resolver("dnspython", DnsPythonResolver)


_register_builtin_resolvers()
