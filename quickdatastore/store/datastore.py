"""
DataStore - save and load Python values by key.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from ..core.interfaces import ValueStore
from ..utils.config import StoreConfig
from .mapping import TypeRegistry, decode, encode
from .value_store import FileValueStore


class DataStore:
    """
    Key/value persistence for primitives, records and lists of them.

    Values are wrapped in a small JSON envelope (see ``store.mapping``) and
    handed to a ValueStore, one document per key. Saving a key again replaces
    its document.

    Example:
        store = DataStore.for_path("~/settings.qds")
        store.save("volume", 11)
        store.load("volume")  # 11
    """

    def __init__(
        self,
        value_store: ValueStore,
        registry: Optional[TypeRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.value_store = value_store
        self.registry = registry if registry is not None else TypeRegistry()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def for_path(
        cls,
        path: Union[str, os.PathLike],
        registry: Optional[TypeRegistry] = None,
        config: Optional[StoreConfig] = None,
    ) -> "DataStore":
        """A DataStore backed by the file at path (``~`` is expanded)."""
        config = config or StoreConfig()
        store = FileValueStore(Path(path).expanduser(), config)
        return cls(store, registry, config.logger)

    def register(self, cls: Optional[type] = None, type_id: Optional[str] = None) -> Any:
        """Register a record class with this store's registry."""
        return self.registry.register(cls, type_id)

    def save(self, key: str, value: Any) -> None:
        """Serialize value and store it under key."""
        text = encode(value, self.registry)
        self.value_store.write_value(key, text)
        self.logger.debug(f"Saved {type(value).__name__} under {key!r}")

    def load(self, key: str) -> Any:
        """The value stored under key, or None if nothing was saved."""
        text = self.value_store.load_value(key)
        if text is None:
            self.logger.debug(f"No value stored under {key!r}")
            return None
        return decode(text, self.registry)

    @property
    def path(self) -> Optional[Path]:
        """Backing file, for file-backed stores."""
        return getattr(self.value_store, "path", None)

    def __repr__(self) -> str:
        return f"DataStore({self.value_store!r})"


def default_store_path(
    name: str, home: Optional[Union[str, os.PathLike]] = None
) -> Path:
    """
    Build the conventional store file path for an application name.

    Only the letters of name are kept, so ``"com.example.App2"`` becomes
    ``<home>/comexampleApp.qds``.

    Args:
        name: Application or module name.
        home: Base directory; defaults to the user's home directory.

    Raises:
        ValueError: If name contains no letters.
    """
    letters = "".join(char for char in name if char.isalpha())
    if not letters:
        raise ValueError(f"Store name {name!r} contains no letters")
    base = Path(home) if home is not None else Path.home()
    return base / f"{letters}.qds"
