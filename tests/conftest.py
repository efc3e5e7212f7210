"""Shared fixtures: a scripted resolver that never touches the network."""

from __future__ import annotations

import threading
from typing import Union

import pytest

from dnsbl.errors import NameNotFound, ResolverError
from dnsbl.resolvers import Resolver

# Per-zone scripted answer: a list of addresses, "NXDOMAIN" or "SERVFAIL"
Answer = Union[list[str], str]


class FakeResolver(Resolver):
    """Answers from a zone -> answer table and records every query."""

    def __init__(self, answers: dict[str, Answer] | None = None):
        super().__init__()
        self.answers = dict(answers or {})
        self.calls: list[str] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "fake"

    def resolve(self, hostname: str) -> list[str]:
        with self._lock:
            self.calls.append(hostname)

        for zone, answer in self.answers.items():
            if hostname.endswith("." + zone) or hostname.endswith("." + zone + "."):
                if answer == "NXDOMAIN":
                    raise NameNotFound(hostname)
                if answer == "SERVFAIL":
                    raise ResolverError(hostname, f"{hostname}: SERVFAIL")
                return list(answer)

        raise NameNotFound(hostname)


@pytest.fixture
def fake_resolver() -> type[FakeResolver]:
    return FakeResolver
