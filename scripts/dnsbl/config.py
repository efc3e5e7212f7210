"""Configuration for DNSBL checks."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

# http://www.spamhaus.org/zen/ and http://www.sorbs.net/general/using.shtml
DEFAULT_BLOCKLISTS: tuple[str, ...] = (
    "zen.spamhaus.org",
    "dnsbl.sorbs.net",
)


def _split(value: str) -> list[str]:
    return [x.strip() for x in value.split(",") if x.strip()]


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class DnsblConfig:
    """Configuration for DNSBL checks."""

    # Blocklist zones, checked in this order
    lists: list[str] = field(default_factory=lambda: list(DEFAULT_BLOCKLISTS))

    # Resolver backend: "system" or "dnspython"
    resolver: str = "system"

    # Nameserver IPs for the dnspython resolver (empty = system config)
    nameservers: list[str] = field(default_factory=list)

    # Query timeout in seconds (None = resolver default)
    timeout: Optional[float] = None

    # Query all lists concurrently instead of one at a time
    parallel: bool = False
    max_workers: int = 20

    # Report an error when every list lookup fails
    strict: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError for values the checker cannot use."""
        if isinstance(self.lists, str):
            self.lists = _split(self.lists)
        if isinstance(self.nameservers, str):
            self.nameservers = _split(self.nameservers)
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be positive, got {self.max_workers}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if any(not isinstance(x, str) or not x.strip(".") for x in self.lists):
            raise ConfigError(f"Invalid blocklist zone in {self.lists!r}")

    @classmethod
    def from_env(cls) -> "DnsblConfig":
        """Create config from environment variables."""
        lists_env = os.environ.get("DNSBL_LISTS", "")
        lists = _split(lists_env) if lists_env else list(DEFAULT_BLOCKLISTS)

        custom_lists = os.environ.get("DNSBL_CUSTOM_LISTS", "")
        if custom_lists:
            lists.extend(_split(custom_lists))

        timeout_env = os.environ.get("DNSBL_TIMEOUT", "")

        try:
            return cls(
                lists=lists,
                resolver=os.environ.get("DNSBL_RESOLVER", "system").lower(),
                nameservers=_split(os.environ.get("DNSBL_DNS_SERVER", "")),
                timeout=float(timeout_env) if timeout_env else None,
                parallel=_as_bool(os.environ.get("DNSBL_PARALLEL", "false")),
                max_workers=int(os.environ.get("DNSBL_MAX_WORKERS", "20")),
                strict=_as_bool(os.environ.get("DNSBL_STRICT", "false")),
            )
        except ValueError as e:
            if isinstance(e, ConfigError):
                raise
            raise ConfigError(f"Invalid DNSBL environment setting: {e}") from e

    @classmethod
    def load(
        cls, path: str | Path, base: Optional["DnsblConfig"] = None
    ) -> "DnsblConfig":
        """Load a YAML config file.

        Keys in the file override ``base`` (environment config by default).
        Unknown keys are rejected.
        """
        with open(path) as f:
            try:
                data: Any = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{path}: invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")

        # Allow the settings to live under a top-level "dnsbl" key
        if set(data) == {"dnsbl"} and isinstance(data["dnsbl"], dict):
            data = data["dnsbl"]

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"{path}: unknown settings: {', '.join(unknown)}")

        config = base if base is not None else cls.from_env()
        values = {f.name: getattr(config, f.name) for f in fields(cls)}
        values.update(data)
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigError(f"{path}: {e}") from e
