"""Unit tests for coarse location derivation in location.py."""

import pytest

from tinylinks.utils import strip_port, coarse_location


@pytest.mark.parametrize(
    'address, expected',
    [
        ('192.168.1.10:8080', '192.168.1.10'),
        ('192.168.1.10', '192.168.1.10'),
        ('localhost:3001', 'localhost'),
        ('[::1]:3001', '[::1]'),
        ('', ''),
    ],
)
def test_strip_port(address, expected):
    assert strip_port(address) == expected


@pytest.mark.parametrize(
    'address, expected',
    [
        ('192.168.1.10', '192.168.x.x'),
        ('192.168.1.10:51234', '192.168.x.x'),
        ('10.0.0.1', '10.0.x.x'),
        ('203.0.113.7:443', '203.0.x.x'),
        (' 172.16.5.4 ', '172.16.x.x'),
        ('localhost', 'Unknown'),
        ('localhost:3001', 'Unknown'),
        ('::1', 'Unknown'),
        ('', 'Unknown'),
    ],
)
def test_coarse_location(address, expected):
    assert coarse_location(address) == expected
