"""DNS resolvers for DNSBL queries."""

from .base import Resolver
from .direct import DnsPythonResolver
from .registry import (
    get_resolver,
    list_resolvers,
    register_resolver,
    resolver_from_config,
)
from .system import SystemResolver

__all__ = [
    "Resolver",
    "SystemResolver",
    "DnsPythonResolver",
    "get_resolver",
    "list_resolvers",
    "register_resolver",
    "resolver_from_config",
]
