from tinylinks.handlers import redirect_url, shorten_url, url_stats


__all__ = [
    'redirect_url',
    'shorten_url',
    'url_stats',
]
