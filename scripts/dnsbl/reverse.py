"""Reversed-label construction for DNSBL queries (RFC 5782, section 2.1).

IPv4 addresses are reversed octet by octet, IPv6 addresses nibble by
nibble. The label always ends in a dot so the blocklist zone can be
appended directly.
"""

from netutils.ip import to_address


def reverse_ip(ip: object) -> str:
    """Return the reversed query label for ``ip``.

    >>> reverse_ip((127, 0, 0, 1))
    '1.0.0.127.'

    Raises:
        InvalidAddressError: ``ip`` is malformed.
    """
    address = to_address(ip)
    if address.version == 4:
        parts = [str(octet) for octet in address.packed]
    else:
        parts = list(address.packed.hex())
    return "".join(f"{part}." for part in reversed(parts))


def query_name(ip: object, dnsbl: str) -> str:
    """Full DNS name to resolve for ``ip`` on blocklist zone ``dnsbl``."""
    return reverse_ip(ip) + dnsbl.lstrip(".")
