#!/usr/bin/env python3
"""
Blacklist Check - Checks IP addresses against DNS-based blocklists.

Reverses each IP (octets for IPv4, nibbles for IPv6), prefixes it to the
configured DNSBL zones and resolves the result per RFC 5782. An answer in
127.0.0.x means the IP is listed; anything else is ignored.

Environment Variables:
    DNSBL_LISTS                 Comma-separated DNSBL zones (default: zen.spamhaus.org,dnsbl.sorbs.net)
    DNSBL_CUSTOM_LISTS          Additional zones appended to the list
    DNSBL_RESOLVER              "system" or "dnspython" (default: system)
    DNSBL_DNS_SERVER            Comma-separated nameserver IPs (dnspython resolver)
    DNSBL_TIMEOUT               Query timeout in seconds (default: resolver default)
    DNSBL_PARALLEL              Query all zones concurrently (true/false)
    DNSBL_MAX_WORKERS           Worker threads for parallel queries (default: 20)
    DNSBL_STRICT                Fail when every zone lookup fails (true/false)

Note on DNS resolvers:
    Many DNSBLs (Spamhaus in particular) refuse queries coming from public
    DNS resolvers (Google 8.8.8.8, Cloudflare 1.1.1.1). Use your own
    recursive resolver with --resolver dnspython --dns-server IP.

Exit codes:
    0  all IPs clean
    1  at least one IP listed
    2  invalid input or configuration
    3  lookup error (strict mode)

Usage:
    blacklist_check.py [IP ...] [--lists ZONES] [--config FILE] [--all] [--json]
"""

import argparse
import json
import logging
import sys
from typing import Optional

from dnsbl import (
    DnsblChecker,
    DnsblConfig,
    DnsblError,
    InvalidAddressError,
    Listing,
)
from dnsbl.resolvers import list_resolvers
from netutils.ip import ip_to_string

EXIT_CLEAN = 0
EXIT_LISTED = 1
EXIT_INVALID = 2
EXIT_ERROR = 3

logger = logging.getLogger("blacklist_check")


def setup_logging(verbose: bool = False):
    """Configure logging"""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check IP addresses against DNS-based blocklists (RFC 5782)"
    )

    parser.add_argument("ips", nargs="*", metavar="IP", help="IP addresses to check")
    parser.add_argument(
        "--lists",
        type=str,
        default=None,
        help="Comma-separated DNSBL zones (overrides config and environment)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file",
    )
    parser.add_argument(
        "--resolver",
        choices=list_resolvers(),
        default=None,
        help="DNS resolver backend",
    )
    parser.add_argument(
        "--dns-server",
        type=str,
        default=None,
        help="Comma-separated nameserver IPs (implies --resolver dnspython)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Query timeout in seconds",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Query all blocklists concurrently",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error when every blocklist lookup fails",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Report every blocklist instead of stopping at the first listing",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def load_config(args: argparse.Namespace) -> DnsblConfig:
    """Environment, then config file, then command-line flags."""
    config = DnsblConfig.from_env()
    if args.config:
        config = DnsblConfig.load(args.config, base=config)

    if args.lists is not None:
        config.lists = [x.strip() for x in args.lists.split(",") if x.strip()]
    if args.dns_server:
        config.nameservers = [
            x.strip() for x in args.dns_server.split(",") if x.strip()
        ]
        config.resolver = "dnspython"
    if args.resolver:
        config.resolver = args.resolver
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.parallel:
        config.parallel = True
    if args.strict:
        config.strict = True

    config.validate()
    return config


def check_status(checker: DnsblChecker, ips: list[str], as_json: bool) -> int:
    """Report the first listing per IP."""
    exit_code = EXIT_CLEAN
    report: list[dict] = []

    for ip in ips:
        result = checker.status(ip)
        report.append({"ip": ip_to_string(ip), **result.to_dict()})

        if result.listing is Listing.BLOCKED:
            exit_code = max(exit_code, EXIT_LISTED)
            line = f"{ip}: LISTED on {result.dnsbl} ({', '.join(result.return_codes)})"
        elif result.listing is Listing.ERROR:
            exit_code = max(exit_code, EXIT_ERROR)
            line = f"{ip}: ERROR {result.error}"
        else:
            line = f"{ip}: not listed"

        if not as_json:
            print(line)

    if as_json:
        print(json.dumps(report, indent=2))
    return exit_code


def check_all(checker: DnsblChecker, ips: list[str], as_json: bool) -> int:
    """Report every blocklist per IP.

    In strict mode an IP whose lookups all failed is an error, as in
    :func:`check_status`.
    """
    exit_code = EXIT_CLEAN
    report: list[dict] = []

    for ip in ips:
        results = checker.check_all(ip)
        report.extend(r.to_dict() for r in results)

        listed = [r for r in results if r.listed]
        if listed:
            exit_code = max(exit_code, EXIT_LISTED)
        elif checker.config.strict and results and all(r.error for r in results):
            exit_code = max(exit_code, EXIT_ERROR)

        if as_json:
            continue

        print(f"{ip}: listed on {len(listed)} of {len(results)} blacklist(s)")
        for r in results:
            if r.listed:
                print(f"  LISTED  {r.dnsbl}: {', '.join(r.return_codes)}")
            elif r.error:
                print(f"  ERROR   {r.dnsbl}: {r.error}")
            else:
                print(f"  clean   {r.dnsbl}")

    if as_json:
        print(json.dumps(report, indent=2))
    return exit_code


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        config = load_config(args)
    except (DnsblError, OSError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_INVALID

    ips = list(args.ips)
    if not ips:
        parser.print_usage(sys.stderr)
        print("No IP addresses given", file=sys.stderr)
        return EXIT_INVALID

    try:
        ips = [ip_to_string(ip) for ip in ips]
    except InvalidAddressError as e:
        print(f"Invalid IP address: {e}", file=sys.stderr)
        return EXIT_INVALID

    try:
        checker = DnsblChecker(config)
        logger.debug(
            f"Checking {len(ips)} IP(s) against {len(config.lists)} blocklist(s) "
            f"using {checker.resolver.name} resolver"
        )
        if args.all:
            return check_all(checker, ips, args.json)
        return check_status(checker, ips, args.json)
    except DnsblError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
