"""User name normalization utilities.

Anonymous actors are named after the IP address they edited from. The same
address can be written many ways ("2001:db8::1", "2001:DB8:0:0:0:0:0:1",
"010.000.000.001" for IPv4), so names are reduced to one canonical form
before they are stored or compared:

- IPv4: dotted quad without leading zeros ("10.0.0.1")
- IPv6: all eight groups, upper-case hex, no leading zeros
  ("2001:DB8:0:0:0:0:0:1")

Registered user names are only trimmed; their case is significant.
"""

import ipaddress
import re

_IPV4_SHAPE = re.compile(r"^[0-9]{1,3}(\.[0-9]{1,3}){3}$")


def _parse_ipv4(value: str) -> ipaddress.IPv4Address | None:
    if not _IPV4_SHAPE.match(value):
        return None
    octets = [int(part) for part in value.split(".")]
    if any(octet > 255 for octet in octets):
        return None
    return ipaddress.IPv4Address(".".join(str(octet) for octet in octets))


def _parse_ipv6(value: str) -> ipaddress.IPv6Address | None:
    if ":" not in value:
        return None
    try:
        return ipaddress.IPv6Address(value)
    except ValueError:
        return None


def is_ip_address(name: str) -> bool:
    """
    Check whether a name is an IPv4 or IPv6 literal.

    Parameters
    ----------
    name : str
        Candidate user name.

    Returns
    -------
    bool
        True if the trimmed name parses as an IP address.

    Examples
    --------
    >>> is_ip_address("127.0.0.1")
    True
    >>> is_ip_address("2001:db8::1")
    True
    >>> is_ip_address("TestUser")
    False
    """
    value = name.strip()
    return _parse_ipv4(value) is not None or _parse_ipv6(value) is not None


def sanitize_ip(ip: str) -> str:
    """
    Convert an IP literal to its canonical actor-name form.

    Parameters
    ----------
    ip : str
        IPv4 or IPv6 literal, in any case and abbreviation.

    Returns
    -------
    str
        The canonical form, or the trimmed input if it is not an IP literal.

    Examples
    --------
    >>> sanitize_ip("2001:db8::1")
    '2001:DB8:0:0:0:0:0:1'
    >>> sanitize_ip("010.001.000.255")
    '10.1.0.255'
    """
    value = ip.strip()

    ipv4 = _parse_ipv4(value)
    if ipv4 is not None:
        return str(ipv4)

    ipv6 = _parse_ipv6(value)
    if ipv6 is not None:
        groups = ipv6.exploded.split(":")
        return ":".join((group.lstrip("0") or "0").upper() for group in groups)

    return value


def normalize_user_name(name: str) -> str:
    """
    Normalize a user name for storage and comparison.

    Parameters
    ----------
    name : str
        Raw user name or IP literal.

    Returns
    -------
    str
        The trimmed name, with IP literals canonicalized.

    Examples
    --------
    >>> normalize_user_name("  TestUser ")
    'TestUser'
    >>> normalize_user_name("2600:1004:b14a:5ddd:3ebe:bba4:bfba:f37e")
    '2600:1004:B14A:5DDD:3EBE:BBA4:BFBA:F37E'
    """
    return sanitize_ip(name)
