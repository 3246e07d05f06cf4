"""Coarse visitor location derivation.

This is a placeholder for a real geo-IP lookup. Anything matching the
`tinylinks.types.Locator` signature can be handed to the registry instead.

Functions:
    strip_port(address: str) -> str
        Remove a trailing ':<port>' suffix from a network address.
    coarse_location(address: str) -> str
        Mask a dotted address down to its first two segments.

Example:
    >>> coarse_location('192.168.4.20:51234')
    '192.168.x.x'
    >>> coarse_location('localhost')
    'Unknown'
"""

UNKNOWN_LOCATION = 'Unknown'


def strip_port(address: str) -> str:
    """Drop everything from the last ':' on, if the address has one."""
    idx = address.rfind(':')
    return address[:idx] if idx != -1 else address


def coarse_location(address: str) -> str:
    """Derive a coarse location from a client network address

    Args:
        address (str):
            Client address, optionally with a trailing port (e.g. '10.1.2.3:8080').

    Returns:
        str: '<a>.<b>.x.x' for dotted addresses with at least two segments,
             'Unknown' otherwise.
    """
    host = strip_port(address.strip())
    parts = host.split('.')
    if len(parts) >= 2:
        return f'{parts[0]}.{parts[1]}.x.x'
    return UNKNOWN_LOCATION
