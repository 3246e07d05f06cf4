from tinylinks.dao.memory.helpers import ReadWriteLock
from tinylinks.dao.memory.short_url_memory_dao import ShortURLMemoryDAO


__all__ = [
    'ReadWriteLock',
    'ShortURLMemoryDAO',
]
