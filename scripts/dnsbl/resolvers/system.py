"""Resolver using the operating system's name lookup."""

import socket

from ..errors import NameNotFound, ResolverError
from .base import Resolver

# getaddrinfo codes meaning "this name has no address"
_NOT_FOUND_CODES = {
    code
    for code in (
        getattr(socket, "EAI_NONAME", None),
        getattr(socket, "EAI_NODATA", None),
    )
    if code is not None
}


class SystemResolver(Resolver):
    """Resolves through ``socket.gethostbyname_ex``.

    Subject to the host's resolver configuration, timeouts and caching.
    """

    @property
    def name(self) -> str:
        return "system"

    def resolve(self, hostname: str) -> list[str]:
        try:
            _, _, addresses = socket.gethostbyname_ex(hostname)
        except socket.gaierror as e:
            if e.errno in _NOT_FOUND_CODES:
                raise NameNotFound(hostname) from e
            raise ResolverError(hostname, f"{hostname}: {e}") from e
        except OSError as e:
            raise ResolverError(hostname, f"{hostname}: {e}") from e
        return list(addresses)
