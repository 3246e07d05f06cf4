import urllib.parse


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def is_valid_url(url: str) -> bool:
    """Return True for absolute http(s) URLs with a non-empty host

    Control characters are refused anywhere. Whitespace is refused around the
    URL and inside the authority; path, query and fragment may contain spaces.

    Example:
        >>> is_valid_url('https://example.com/page?id=1')
        True
        >>> is_valid_url('https://example.com/a b')
        True
        >>> is_valid_url('not-a-url')
        False
        >>> is_valid_url('ftp://example.com')
        False
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    if not url.isprintable():
        return False

    try:
        components = urllib.parse.urlsplit(url)
    except ValueError:
        return False

    if any(ch.isspace() for ch in components.netloc):
        return False
    return components.scheme in ALLOWED_SCHEMES and bool(components.hostname)
