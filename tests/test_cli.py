"""Tests for the blacklist_check command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from blacklist_check import EXIT_CLEAN, EXIT_ERROR, EXIT_INVALID, EXIT_LISTED, main
from dnsbl import checker as checker_module
from tests.test_config import ENV_VARS

STRICT_ALL = ["--all", "--strict", "--lists", "a.example,b.example"]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def use_resolver(monkeypatch: pytest.MonkeyPatch, fake_resolver):
    """Install a FakeResolver with the given answers for every DnsblChecker."""

    def install(answers: dict) -> object:
        resolver = fake_resolver(answers)
        configs = []

        def factory(config):
            configs.append(config)
            return resolver

        monkeypatch.setattr(checker_module, "resolver_from_config", factory)
        resolver.configs = configs
        return resolver

    return install


class TestStatusMode:
    def test_clean(self, use_resolver, capsys: pytest.CaptureFixture[str]) -> None:
        use_resolver({})
        assert main(["192.0.2.1", "--lists", "bl.one.example"]) == EXIT_CLEAN
        assert capsys.readouterr().out == "192.0.2.1: not listed\n"

    def test_listed(self, use_resolver, capsys: pytest.CaptureFixture[str]) -> None:
        use_resolver({"bl.two.example": ["127.0.0.2"]})
        code = main(["192.0.2.1", "--lists", "bl.one.example,bl.two.example"])

        assert code == EXIT_LISTED
        assert "LISTED on bl.two.example (127.0.0.2)" in capsys.readouterr().out

    def test_json(self, use_resolver, capsys: pytest.CaptureFixture[str]) -> None:
        use_resolver({"bl.one.example": ["127.0.0.3"]})
        code = main(["192.0.2.1", "192.0.2.2", "--lists", "bl.one.example", "--json"])

        assert code == EXIT_LISTED
        report = json.loads(capsys.readouterr().out)
        assert report[0] == {
            "ip": "192.0.2.1",
            "status": "blocked",
            "dnsbl": "bl.one.example",
            "return_codes": ["127.0.0.3"],
        }
        assert report[1]["ip"] == "192.0.2.2"

    def test_strict_error(self, use_resolver, capsys: pytest.CaptureFixture[str]) -> None:
        use_resolver({"bl.one.example": "SERVFAIL"})
        code = main(["192.0.2.1", "--lists", "bl.one.example", "--strict"])

        assert code == EXIT_ERROR
        assert "ERROR" in capsys.readouterr().out

    def test_default_lists(self, use_resolver) -> None:
        resolver = use_resolver({})
        main(["127.0.0.2"])

        assert resolver.calls == [
            "2.0.0.127.zen.spamhaus.org",
            "2.0.0.127.dnsbl.sorbs.net",
        ]


class TestAllMode:
    def test_reports_every_list(
        self, use_resolver, capsys: pytest.CaptureFixture[str]
    ) -> None:
        use_resolver({"bl.one.example": ["127.0.0.2"], "bl.two.example": "SERVFAIL"})
        code = main(
            ["192.0.2.1", "--all", "--lists", "bl.one.example,bl.two.example,bl.x"]
        )

        out = capsys.readouterr().out
        assert code == EXIT_LISTED
        assert "listed on 1 of 3 blacklist(s)" in out
        assert "LISTED  bl.one.example: 127.0.0.2" in out
        assert "ERROR   bl.two.example" in out
        assert "clean   bl.x" in out

    def test_json(self, use_resolver, capsys: pytest.CaptureFixture[str]) -> None:
        use_resolver({})
        code = main(["192.0.2.1", "--all", "--json", "--lists", "a.example,b.example"])

        report = json.loads(capsys.readouterr().out)
        assert code == EXIT_CLEAN
        assert [r["dnsbl"] for r in report] == ["a.example", "b.example"]
        assert all(r["listed"] is False for r in report)

    def test_strict_all_lookups_failed(
        self, use_resolver, capsys: pytest.CaptureFixture[str]
    ) -> None:
        use_resolver({"a.example": "SERVFAIL", "b.example": "SERVFAIL"})
        code = main(["192.0.2.1", *STRICT_ALL])

        assert code == EXIT_ERROR
        assert "ERROR   a.example" in capsys.readouterr().out

    def test_all_lookups_failed_without_strict(self, use_resolver) -> None:
        use_resolver({"a.example": "SERVFAIL", "b.example": "SERVFAIL"})

        assert main(["192.0.2.1", "--all", "--lists", "a.example,b.example"]) == (
            EXIT_CLEAN
        )

    def test_strict_with_a_clean_list(self, use_resolver) -> None:
        use_resolver({"a.example": "SERVFAIL"})
        code = main(["192.0.2.1", *STRICT_ALL])

        assert code == EXIT_CLEAN

    def test_strict_listing_wins_over_errors(self, use_resolver) -> None:
        use_resolver({"a.example": "SERVFAIL", "b.example": ["127.0.0.2"]})
        code = main(["192.0.2.1", *STRICT_ALL])

        assert code == EXIT_LISTED


class TestConfiguration:
    def test_flags_override_config_file(self, use_resolver, tmp_path: Path) -> None:
        path = tmp_path / "dnsbl.yaml"
        path.write_text("lists: [file.example]\nparallel: false\n")
        resolver = use_resolver({})

        main(["192.0.2.1", "--config", str(path), "--parallel", "--timeout", "2"])

        config = resolver.configs[0]
        assert config.lists == ["file.example"]
        assert config.parallel is True
        assert config.timeout == 2.0

    def test_dns_server_selects_dnspython(self, use_resolver) -> None:
        resolver = use_resolver({})
        main(["192.0.2.1", "--dns-server", "192.0.2.53,198.51.100.53"])

        config = resolver.configs[0]
        assert config.resolver == "dnspython"
        assert config.nameservers == ["192.0.2.53", "198.51.100.53"]

    def test_bad_config_file(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "dnsbl.yaml"
        path.write_text("bogus: 1\n")

        assert main(["192.0.2.1", "--config", str(path)]) == EXIT_INVALID
        assert "Invalid configuration" in capsys.readouterr().err

    def test_malformed_yaml(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "dnsbl.yaml"
        path.write_text("lists: [a.example\n")

        assert main(["192.0.2.1", "--config", str(path)]) == EXIT_INVALID
        assert "invalid YAML" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path: Path) -> None:
        assert main(["192.0.2.1", "--config", str(tmp_path / "nope.yaml")]) == (
            EXIT_INVALID
        )


class TestInput:
    def test_invalid_ip(self, use_resolver, capsys) -> None:
        resolver = use_resolver({})

        assert main(["192.0.2.1", "300.1.1.1"]) == EXIT_INVALID
        assert "Invalid IP address" in capsys.readouterr().err
        assert resolver.calls == []

    def test_no_ips(self, capsys) -> None:
        assert main([]) == EXIT_INVALID
        assert "No IP addresses given" in capsys.readouterr().err


    def test_scoped_ipv6_address(self, use_resolver, capsys) -> None:
        resolver = use_resolver({})

        assert main(["fe80::1%eth0"]) == EXIT_INVALID
        assert "Invalid IP address" in capsys.readouterr().err
        assert resolver.calls == []
