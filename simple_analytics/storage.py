"""
Key-value persistence for tracker settings and visit state.

Values are grouped into scopes. ``scope=None`` is the process-default scope;
a named scope is shared by every tracker (and every process) that uses the
same name, e.g. an app and its companion extension.
"""

import json
import logging
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

VISIT_DATE_KEY = "simpleanalytics.visitdate"
OPTED_OUT_KEY = "simpleanalytics.isoptedout"

DEFAULT_SCOPE_NAME = "standard"


class KeyValueStore(ABC):
    """Minimal scoped key-value storage used by the tracker."""

    @abstractmethod
    def get(self, key: str, scope: Optional[str] = None) -> Any:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, scope: Optional[str], value: Any) -> None:
        """Store *value* under *key* in *scope*."""


class InMemoryStore(KeyValueStore):
    """Dictionary backed store, mainly for tests and throwaway trackers."""

    def __init__(self):
        self._scopes: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str, scope: Optional[str] = None) -> Any:
        return self._scopes.get(scope or DEFAULT_SCOPE_NAME, {}).get(key)

    def set(self, key: str, scope: Optional[str], value: Any) -> None:
        self._scopes.setdefault(scope or DEFAULT_SCOPE_NAME, {})[key] = value


class JsonFileStore(KeyValueStore):
    """
    Store each scope as a JSON object in ``<directory>/<scope>.json``.

    Writes replace the file atomically. Access is serialized within a
    process only; processes sharing a scope may overwrite each other.
    """

    def __init__(self, directory: Path):
        """
        Args:
            directory: Directory holding one JSON file per scope
        """
        self.directory = Path(directory).expanduser()
        self._lock = Lock()

    def _scope_file(self, scope: Optional[str]) -> Path:
        name = re.sub(r"[^A-Za-z0-9._-]", "_", scope or DEFAULT_SCOPE_NAME)
        return self.directory / f"{name}.json"

    def _load_scope(self, scope: Optional[str]) -> Dict[str, Any]:
        path = self._scope_file(scope)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading {path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save_scope(self, scope: Optional[str], data: Dict[str, Any]) -> None:
        path = self._scope_file(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str, scope: Optional[str] = None) -> Any:
        with self._lock:
            return self._load_scope(scope).get(key)

    def set(self, key: str, scope: Optional[str], value: Any) -> None:
        with self._lock:
            data = self._load_scope(scope)
            data[key] = value
            self._save_scope(scope, data)
