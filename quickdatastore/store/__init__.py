"""
quickdatastore Persistence Layer.

This module saves primitives, records and lists to a key/value backing store.
"""

from .datastore import DataStore, default_store_path
from .mapping import TypeRegistry
from .value_store import FileValueStore, MemoryValueStore

__all__ = [
    'DataStore', 'default_store_path', 'TypeRegistry',
    'FileValueStore', 'MemoryValueStore',
]
