# SPDX-License-Identifier: MIT

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalCache:
    """
    Device-local key -> string store, one file per key.

    Collections are stored as JSON arrays, scalar content as raw text. Nothing
    here raises to the caller: unreadable or malformed data reads as empty and
    failed writes are logged and reported through the boolean return value.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def __path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"invalid cache key: {key!r}")
        return self.directory / f"{key}.cache"

    def get_item(self, key: str) -> Optional[str]:
        try:
            path = self.__path(key)
            if not path.is_file():
                return None
            return path.read_text(encoding="utf-8")
        except (OSError, ValueError):
            logger.exception("Error reading cache key %s", key)
            return None

    def set_item(self, key: str, value: str) -> bool:
        try:
            path = self.__path(key)
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
            return True
        except (OSError, ValueError):
            logger.exception("Error writing cache key %s", key)
            return False

    def has(self, key: str) -> bool:
        try:
            return self.__path(key).is_file()
        except ValueError:
            return False

    def remove(self, key: str) -> None:
        try:
            self.__path(key).unlink(missing_ok=True)
        except (OSError, ValueError):
            logger.exception("Error removing cache key %s", key)

    def copy(self, source_key: str, target_key: str) -> bool:
        value = self.get_item(source_key)
        if value is None:
            return False
        return self.set_item(target_key, value)

    def get(self, entry_type: str) -> list[Any]:
        stored = self.get_item(entry_type)
        logger.debug(
            "Retrieving data for key %s from cache, found: %s",
            entry_type,
            "data" if stored else "nothing",
        )
        if not stored:
            return []

        try:
            parsed = json.loads(stored)
        except json.JSONDecodeError:
            logger.error("Cached data for key %s is not valid JSON", entry_type)
            return []

        if not isinstance(parsed, list):
            logger.warning(
                "Data for key %s is not an array, converting to array", entry_type
            )
            return [parsed]
        return parsed

    def put(self, entry_type: str, collection: list[Any]) -> bool:
        try:
            serialized = json.dumps(collection)
        except (TypeError, ValueError):
            logger.exception("Error serializing data for key %s", entry_type)
            return False
        logger.debug("Storing %d items for key %s to cache", len(collection), entry_type)
        return self.set_item(entry_type, serialized)

    def get_scalar(self, entry_type: str) -> str:
        return self.get_item(entry_type) or ""

    def put_scalar(self, entry_type: str, content: str) -> bool:
        return self.set_item(entry_type, content)
