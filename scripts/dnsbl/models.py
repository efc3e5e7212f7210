"""Data models for DNSBL lookups."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Listing(str, Enum):
    """Outcome of a DNSBL status check."""

    NOT_LISTED = "notlisted"
    BLOCKED = "blocked"
    ERROR = "error"


@dataclass(frozen=True)
class DnsblStatus:
    """Result of checking one IP against an ordered list of DNSBLs.

    ``dnsbl`` is set for BLOCKED (the first provider that listed the IP),
    ``error`` for ERROR.
    """

    listing: Listing
    dnsbl: str = ""
    return_codes: tuple[str, ...] = ()
    error: str = ""

    @classmethod
    def not_listed(cls) -> "DnsblStatus":
        return cls(Listing.NOT_LISTED)

    @classmethod
    def blocked(cls, dnsbl: str, return_codes: tuple[str, ...] = ()) -> "DnsblStatus":
        return cls(Listing.BLOCKED, dnsbl=dnsbl, return_codes=tuple(return_codes))

    @classmethod
    def failed(cls, error: str) -> "DnsblStatus":
        return cls(Listing.ERROR, error=error)

    @property
    def is_blocked(self) -> bool:
        return self.listing is Listing.BLOCKED

    def to_dict(self) -> dict:
        data: dict = {"status": self.listing.value}
        if self.listing is Listing.BLOCKED:
            data["dnsbl"] = self.dnsbl
            data["return_codes"] = list(self.return_codes)
        elif self.listing is Listing.ERROR:
            data["error"] = self.error
        return data


@dataclass
class BlacklistResult:
    """Result of checking one IP against a single DNSBL."""

    target: str  # IP address being checked
    dnsbl: str
    listed: bool
    return_codes: list[str] = field(default_factory=list)  # 127.x answers
    error: str = ""  # Resolver failure, empty on NXDOMAIN
    check_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "dnsbl": self.dnsbl,
            "listed": self.listed,
            "return_codes": list(self.return_codes),
            "error": self.error,
            "check_time": self.check_time.isoformat(),
        }
