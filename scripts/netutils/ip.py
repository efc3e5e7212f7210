"""IP value coercion.

Converts loosely-typed IP values (address tuples, strings, ``ipaddress``
objects, big-endian integers) into canonical representations.
"""

from __future__ import annotations

import ipaddress
from typing import Union

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_COMPONENT_LIMITS = {4: 0xFF, 8: 0xFFFF}


class InvalidAddressError(ValueError):
    """IP value has the wrong shape or out-of-range components."""


def _from_tuple(value: tuple) -> Address:
    limit = _COMPONENT_LIMITS.get(len(value))
    if limit is None:
        raise InvalidAddressError(
            f"IP tuple must have 4 or 8 components, got {len(value)}"
        )

    for part in value:
        # bool is an int subclass but never a valid component
        if not isinstance(part, int) or isinstance(part, bool):
            raise InvalidAddressError(f"Invalid IP component {part!r} in {value!r}")
        if not 0 <= part <= limit:
            raise InvalidAddressError(
                f"IP component {part} out of range 0-{limit} in {value!r}"
            )

    if len(value) == 4:
        return ipaddress.IPv4Address(bytes(value))

    packed = 0
    for group in value:
        packed = (packed << 16) | group
    return ipaddress.IPv6Address(packed)


def to_address(value: object) -> Address:
    """Coerce an IP value to an ``ipaddress`` object.

    Accepts 4-tuples (IPv4), 8-tuples (IPv6), textual addresses and
    ``IPv4Address``/``IPv6Address`` instances.

    Raises:
        InvalidAddressError: value is not a well-formed IP address, or is
            an IPv6 address with a zone index.
    """
    if isinstance(value, (tuple, list)):
        return _from_tuple(tuple(value))
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")

    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        address = value
    elif isinstance(value, str):
        try:
            address = ipaddress.ip_address(value.strip())
        except ValueError as e:
            raise InvalidAddressError(str(e)) from e
    else:
        raise InvalidAddressError(f"Unsupported IP value: {value!r}")

    # A zone index ("fe80::1%eth0") has no place in a DNS name
    if getattr(address, "scope_id", None):
        raise InvalidAddressError(f"Scoped IPv6 address not supported: {value}")
    return address


def ip_to_tuple(value: object) -> tuple[int, ...]:
    """Return the 4-tuple (IPv4) or 8-tuple of 16-bit groups (IPv6)."""
    address = to_address(value)
    if address.version == 4:
        return tuple(address.packed)
    packed = address.packed
    return tuple(
        int.from_bytes(packed[i : i + 2], "big") for i in range(0, len(packed), 2)
    )


def ip_to_string(value: object) -> str:
    """Render an IP value as text.

    An ``(ip, port)`` pair is accepted as well; the port is dropped.
    """
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and isinstance(value[1], int)
        and not isinstance(value[0], int)
    ):
        value = value[0]
    return str(to_address(value))


def ip_to_long(value: object) -> int:
    """Big-endian integer representation of an IP value."""
    return int(to_address(value))


def long_to_ip(value: int, version: int = 4) -> tuple[int, ...]:
    """Convert a big-endian integer back into an address tuple."""
    if version not in (4, 6):
        raise InvalidAddressError(f"Unknown IP version: {version}")
    try:
        if version == 4:
            address: Address = ipaddress.IPv4Address(value)
        else:
            address = ipaddress.IPv6Address(value)
    except (ipaddress.AddressValueError, ValueError, TypeError) as e:
        raise InvalidAddressError(f"Cannot convert {value!r} to IPv{version}") from e
    return ip_to_tuple(address)
