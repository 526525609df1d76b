from ummah_speaks.storage.base import KeyValueStorage
from ummah_speaks.storage.disk import DiskStorage
from ummah_speaks.storage.memory import InMemoryStorage

__all__ = ["DiskStorage", "InMemoryStorage", "KeyValueStorage"]
