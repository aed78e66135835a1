"""
On-disk key-value session.

Plays the part of the phone's local storage: the access token, the signed-in
user and the last fetched cart live in one JSON document. Writes replace the
file atomically so a crash never leaves half a document behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger("clothing.client")

TOKEN_KEY = "token"
USER_KEY = "user"
CART_KEY = "cart"


class SessionStore:
    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else None
        self._memory: dict[str, Any] = {}

    def _load(self) -> dict[str, Any]:
        if self.path is None:
            return dict(self._memory)
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning("session_file_corrupt", extra={"path": str(self.path)})
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        if self.path is None:
            self._memory = dict(data)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".session-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def clear(self) -> None:
        self._save({})
