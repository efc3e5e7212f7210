"""DNSBL checker (RFC 5782).

An IP is listed on a blocklist when its reversed query name resolves to an
address in 127.0.0.0/24 (127.0.0.x). Any other answer is ignored: some
resolvers "hijack" missing names and answer with the address of an ISP
search page, and Spamhaus answers 127.255.255.x when it refuses a query.
"""

import ipaddress
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Generator, Iterable, Optional, Sequence

from netutils.ip import ip_to_string

from .config import DEFAULT_BLOCKLISTS, DnsblConfig, _split
from .errors import NameNotFound, ResolverError
from .models import BlacklistResult, DnsblStatus
from .resolvers import Resolver, SystemResolver, resolver_from_config
from .reverse import reverse_ip

LISTED_NETWORK = ipaddress.IPv4Network("127.0.0.0/24")


def listed_codes(addresses: Iterable[str]) -> list[str]:
    """Return the answers that signal a listing (127.0.0.x)."""
    codes: list[str] = []
    for address in addresses:
        try:
            ip = ipaddress.ip_address(address)
        except ValueError:
            continue
        if ip.version == 4 and ip in LISTED_NETWORK:
            codes.append(str(ip))
    return codes


class DnsblChecker:
    """Checks IP addresses against an ordered list of DNSBL zones."""

    def __init__(
        self,
        config: Optional[DnsblConfig] = None,
        resolver: Optional[Resolver] = None,
    ):
        self.config = config or DnsblConfig()
        self.resolver = resolver or resolver_from_config(self.config)
        self.logger = logging.getLogger(__name__)

    @property
    def lists(self) -> list[str]:
        return self.config.lists

    def _zones(self, lists: Optional[Sequence[str]]) -> list[str]:
        """``lists`` as a list of zones; a string is split on commas."""
        if lists is None:
            return self.lists
        if isinstance(lists, str):
            return _split(lists)
        return list(lists)

    def check_ip(
        self, ip: object, dnsbl: str, label: Optional[str] = None
    ) -> BlacklistResult:
        """Check a single IP against a single DNSBL."""
        if label is None:
            label = reverse_ip(ip)
        target = ip_to_string(ip)
        query = label + dnsbl.lstrip(".")

        try:
            addresses = self.resolver.resolve(query)
        except NameNotFound:
            self.logger.debug(f"{query}: not listed (NXDOMAIN)")
            return BlacklistResult(target=target, dnsbl=dnsbl, listed=False)
        except ResolverError as e:
            self.logger.debug(f"{dnsbl} lookup failed for {target}: {e}")
            return BlacklistResult(
                target=target, dnsbl=dnsbl, listed=False, error=str(e)
            )

        codes = listed_codes(addresses)
        if not codes:
            if addresses:
                self.logger.debug(
                    f"{query}: ignoring non-127.0.0.x answer {', '.join(addresses)}"
                )
            return BlacklistResult(target=target, dnsbl=dnsbl, listed=False)

        return BlacklistResult(
            target=target, dnsbl=dnsbl, listed=True, return_codes=codes
        )

    def _run(
        self, ip: object, lists: Sequence[str]
    ) -> Generator[BlacklistResult, None, None]:
        """Yield per-list results in configured order.

        Sequential mode resolves lazily so callers can stop early; parallel
        mode submits every lookup up front.
        """
        label = reverse_ip(ip)

        if not self.config.parallel or len(lists) < 2:
            for dnsbl in lists:
                yield self.check_ip(ip, dnsbl, label)
            return

        workers = min(self.config.max_workers, len(lists))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self.check_ip, ip, dnsbl, label) for dnsbl in lists
            ]
            for future in futures:
                yield future.result()

    def status(self, ip: object, lists: Optional[Sequence[str]] = None) -> DnsblStatus:
        """Blocklist status of ``ip``.

        The first list (in order) that answers with a 127.0.0.x address
        is reported. Lookup failures count as "not listed" on that list
        unless the config is strict and every list failed.

        Raises:
            InvalidAddressError: ``ip`` is malformed.
        """
        lists = self._zones(lists)
        results = self._run(ip, lists)

        errors: list[str] = []
        try:
            for result in results:
                if result.listed:
                    self.logger.warning(
                        f"{result.target} is listed on {result.dnsbl} "
                        f"({', '.join(result.return_codes)})"
                    )
                    return DnsblStatus.blocked(
                        result.dnsbl, tuple(result.return_codes)
                    )
                if result.error:
                    errors.append(result.error)
        finally:
            results.close()

        if self.config.strict and lists and len(errors) == len(lists):
            self.logger.error(
                f"All {len(lists)} DNSBL lookups failed for {ip_to_string(ip)}"
            )
            return DnsblStatus.failed(errors[-1])

        return DnsblStatus.not_listed()

    def is_blocked(self, ip: object, lists: Optional[Sequence[str]] = None) -> bool:
        """True if ``ip`` is listed on any of the lists."""
        return self.status(ip, lists).is_blocked

    def check_all(
        self, ip: object, lists: Optional[Sequence[str]] = None
    ) -> list[BlacklistResult]:
        """Check ``ip`` against every list, without stopping at a listing."""
        lists = self._zones(lists)
        results = list(self._run(ip, lists))

        listed = [r for r in results if r.listed]
        if listed:
            self.logger.warning(
                f"{ip_to_string(ip)} listed on {len(listed)} of {len(results)} blacklist(s)"
            )
        else:
            self.logger.info(
                f"{ip_to_string(ip)} clean on all {len(results)} blacklists"
            )
        return results


def status(
    ip: object,
    lists: Optional[Sequence[str]] = None,
    resolver: Optional[Resolver] = None,
) -> DnsblStatus:
    """Check ``ip`` against ``lists`` (default: DEFAULT_BLOCKLISTS)."""
    checker = DnsblChecker(resolver=resolver or SystemResolver())
    return checker.status(ip, DEFAULT_BLOCKLISTS if lists is None else lists)


def is_blocked(
    ip: object,
    lists: Optional[Sequence[str]] = None,
    resolver: Optional[Resolver] = None,
) -> bool:
    """True if ``ip`` is listed on any of ``lists`` (default: DEFAULT_BLOCKLISTS)."""
    return status(ip, lists, resolver).is_blocked
