"""Shortcode generation utility

This module provides a helper function for generating random, fixed-length
Base62 shortcodes. Uniqueness is not guaranteed here; the registry retries on
collision.

Functions:
    generate_shortcode(length=6):
        Generate a random alphanumeric string suitable for use as a URL slug.

Example:
    >>> from tinylinks.utils import generate_shortcode
    >>> generate_shortcode()
    'q3ZfA9'
"""

import secrets
import string

from tinylinks.constants import Defaults


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Defaults.SHORTCODE_LENGTH) -> str:
    """Generate a random Base62 shortcode of a fixed length.

    Every character is drawn uniformly and independently from the Base62
    alphabet [a-zA-Z0-9] using the operating system's entropy source, so two
    process starts never replay the same sequence.

    Args:
        length (int, optional):
            Number of characters in the resulting shortcode.
            Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is smaller than 1.

    Example:
        >>> len(generate_shortcode(8))
        8
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
