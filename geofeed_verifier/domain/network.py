"""Turns the first geofeed field into a CIDR prefix."""
from __future__ import annotations

from ipaddress import ip_interface

from geofeed_verifier.config import SETTINGS

from .invalidity import RowInvalidity
from .models import NormalizedNetwork


class InvalidNetwork(ValueError):
    def __init__(self, kind: RowInvalidity, token: str, reason: str) -> None:
        super().__init__(reason)
        self.kind = kind
        self.token = token
        self.reason = reason


def infer_prefix(token: str) -> str:
    """Append a host prefix length when the token has none."""
    if "/" in token:
        return token
    if ":" in token:
        return f"{token}/{SETTINGS.ipv6_host_prefix}"
    return f"{token}/{SETTINGS.ipv4_host_prefix}"


def normalize_network(token: str) -> NormalizedNetwork:
    token = token.strip()
    if not token:
        raise InvalidNetwork(RowInvalidity.EMPTY_NETWORK, token, "network field is empty")

    network_or_ip = infer_prefix(token)
    address_part, _, bits = network_or_ip.partition("/")
    if "%" in address_part:
        raise InvalidNetwork(
            RowInvalidity.UNABLE_TO_PARSE_NETWORK,
            network_or_ip,
            f"IPv6 zones cannot be present in a prefix: {network_or_ip}",
        )
    # ip_interface also takes netmask notation; a prefix length must be decimal
    # without leading zeros.
    if not bits.isdigit() or not bits.isascii() or (len(bits) > 1 and bits[0] == "0"):
        raise InvalidNetwork(
            RowInvalidity.UNABLE_TO_PARSE_NETWORK,
            network_or_ip,
            f"bad bits after slash: {bits!r}",
        )
    try:
        interface = ip_interface(network_or_ip)
    except ValueError as exc:
        raise InvalidNetwork(RowInvalidity.UNABLE_TO_PARSE_NETWORK, network_or_ip, str(exc)) from exc

    return NormalizedNetwork(prefix=network_or_ip, address=interface.ip)
