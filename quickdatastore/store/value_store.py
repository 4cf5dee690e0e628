"""
Backing stores for serialized documents.

FileValueStore keeps one ``key=value`` line per key in a plain text file.
Every write goes through a swap file: the data file is renamed aside, then
rewritten line by line with the new value in place, so a crash mid-write
leaves the previous contents recoverable from ``<path>.swap``.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..security.exceptions import StoreError
from ..utils.config import StoreConfig


class FileValueStore:
    """A ValueStore backed by a line-oriented text file."""

    def __init__(
        self, path: Union[str, os.PathLike], config: Optional[StoreConfig] = None
    ):
        self.config = config or StoreConfig()
        self.path = Path(path)
        self.swap_path = self.path.with_name(self.path.name + self.config.swap_suffix)
        self.logger = self.config.logger or logging.getLogger(__name__)

    def _prefix(self, key: str) -> str:
        return key + self.config.separator

    def _validate(self, key: str, value: Optional[str] = None) -> None:
        if not isinstance(key, str) or not key:
            raise StoreError("Store keys must be non-empty strings", str(self.path))
        if any(char in key for char in (self.config.separator, "\n", "\r")):
            raise StoreError(f"Invalid store key {key!r}", str(self.path))
        if value is not None and ("\n" in value or "\r" in value):
            raise StoreError(
                f"Value for {key!r} must not contain line breaks", str(self.path)
            )

    def write_value(self, key: str, value: str) -> None:
        """Store value under key, replacing the first existing line for key."""
        self._validate(key, value)
        line = self._prefix(key) + value

        if self.swap_path.exists():
            try:
                self.swap_path.unlink()
            except OSError as e:
                raise StoreError(
                    "Unable to delete swap file", str(self.swap_path)
                ) from e

        if not self.path.exists():
            # First write
            self._write_lines([line])
            self.logger.debug(f"Created {self.path} with key {key!r}")
            return

        try:
            self.path.replace(self.swap_path)
        except OSError as e:
            raise StoreError("Unable to rename file for writing", str(self.path)) from e

        lines = self._read_lines(self.swap_path)
        prefix = self._prefix(key)
        for index, existing in enumerate(lines):
            if existing.startswith(prefix):
                lines[index] = line
                break
        else:
            lines.append(line)
        self._write_lines(lines)
        self.logger.debug(f"Wrote key {key!r} to {self.path}")

        try:
            self.swap_path.unlink()
        except OSError as e:
            self.logger.warning(f"Unable to delete swap file {self.swap_path}: {e}")

    def load_value(self, key: str) -> Optional[str]:
        """Return the value of the last line for key, or None."""
        self._validate(key)
        if not self.path.exists():
            return None

        prefix = self._prefix(key)
        found: Optional[str] = None
        for line in self._read_lines(self.path):
            if line.startswith(prefix):
                found = line[len(prefix) :]
        self.logger.debug(
            f"Loaded key {key!r} from {self.path}: {'hit' if found is not None else 'miss'}"
        )
        return found

    def keys(self) -> list[str]:
        """Keys present in the file, in file order."""
        if not self.path.exists():
            return []
        separator = self.config.separator
        return [
            line.split(separator, 1)[0]
            for line in self._read_lines(self.path)
            if separator in line
        ]

    def _read_lines(self, path: Path) -> list[str]:
        try:
            with path.open("r", encoding=self.config.encoding, newline="") as handle:
                return [line.rstrip("\r\n") for line in handle]
        except OSError as e:
            raise StoreError("Error loading file", str(path)) from e

    def _write_lines(self, lines: list[str]) -> None:
        try:
            with self.path.open(
                "w", encoding=self.config.encoding, newline="\n"
            ) as handle:
                for line in lines:
                    handle.write(line + "\n")
        except OSError as e:
            raise StoreError("Error writing file", str(self.path)) from e

    def __repr__(self) -> str:
        return f"FileValueStore({str(self.path)!r})"


class MemoryValueStore:
    """A ValueStore that keeps documents in a dict."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def write_value(self, key: str, value: str) -> None:
        self._values[key] = value

    def load_value(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def keys(self) -> list[str]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)
