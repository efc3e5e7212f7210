# Network utility modules
from .ip import (
    InvalidAddressError,
    ip_to_long,
    ip_to_string,
    ip_to_tuple,
    long_to_ip,
    to_address,
)

__all__ = [
    "InvalidAddressError",
    "ip_to_long",
    "ip_to_string",
    "ip_to_tuple",
    "long_to_ip",
    "to_address",
]
