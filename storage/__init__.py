#Marks storage as a package.
#Re-exports the store lifecycle base and the error family so capability
#packages can do: from storage import Store, StoreError

from .base import Store, StoreError, StoreClosedError, RecordNotFoundError
from .locks import KeyedLocks

__all__ = [
    "Store",
    "StoreError",
    "StoreClosedError",
    "RecordNotFoundError",
    "KeyedLocks",
]
