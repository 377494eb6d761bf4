"""Key-value storage for the quota record and the guest session identifier."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import diskcache

from decodedesk.core.exceptions import ConfigurationError, StorageError

logger = logging.getLogger(__name__)

QUOTA_KEY = "decodedesk_guest_quota"
SESSION_KEY = "decodedesk_session"


class QuotaStorage(ABC):
    """Opaque string slots. Implementations raise StorageError on failure."""

    storage_type = "abstract"

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored string or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""

    def close(self) -> None:
        """Release files or connections held by the backend."""

    def get_stats(self) -> Dict[str, Any]:
        return {"type": self.storage_type}


class MemoryQuotaStorage(QuotaStorage):
    """Dict-backed storage, lost when the process exits."""

    storage_type = "memory"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def get_stats(self) -> Dict[str, Any]:
        return {"type": self.storage_type, "size": len(self.data)}


class DiskQuotaStorage(QuotaStorage):
    """Persistent storage in a diskcache directory."""

    storage_type = "disk"

    def __init__(self, directory: str = ".cache/decodedesk"):
        """
        Open (or create) the storage directory.

        Args:
            directory: Directory for the diskcache files

        Raises:
            StorageError: If the directory cannot be created or opened
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self.cache = diskcache.Cache(str(self.directory))
        except Exception as e:
            raise StorageError(
                f"Failed to open quota storage at {self.directory}: {e}",
                storage_type=self.storage_type,
                operation="init"
            ) from e
        logger.debug(f"Using disk quota storage at {self.directory}")

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.cache.get(key)
        except Exception as e:
            raise StorageError(f"Quota storage read failed: {e}", self.storage_type, "get", key) from e
        if value is not None and not isinstance(value, str):
            raise StorageError(
                f"Unexpected {type(value).__name__} stored under {key}",
                self.storage_type, "get", key
            )
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self.cache.set(key, value)
        except Exception as e:
            raise StorageError(f"Quota storage write failed: {e}", self.storage_type, "set", key) from e

    def delete(self, key: str) -> None:
        try:
            self.cache.delete(key)
        except Exception as e:
            raise StorageError(f"Quota storage delete failed: {e}", self.storage_type, "delete", key) from e

    def close(self) -> None:
        self.cache.close()

    def get_stats(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {"type": self.storage_type, "location": str(self.directory)}
        try:
            stats["size"] = len(self.cache)
        except Exception as e:
            stats["error"] = str(e)
        return stats


def create_storage(config: Optional[Dict[str, Any]] = None) -> QuotaStorage:
    """
    Build the storage backend named in the ``storage`` config section.

    Falls back to memory storage when the disk directory cannot be opened.
    """
    section = (config or {}).get("storage", {}) or {}
    backend = str(section.get("backend", "disk")).strip().lower()

    if backend == "memory":
        return MemoryQuotaStorage()
    if backend == "disk":
        try:
            return DiskQuotaStorage(section.get("directory") or ".cache/decodedesk")
        except StorageError as e:
            logger.warning(f"{e.message}. Falling back to memory storage.")
            return MemoryQuotaStorage()

    raise ConfigurationError(
        f"Unknown storage backend: {backend}",
        config_key="storage.backend",
        invalid_value=backend,
        valid_values=["disk", "memory"]
    )
