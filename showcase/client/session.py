"""
Client-side persisted state.

LocalStorage is a small JSON-file key/value store standing in for the
browser's localStorage. SessionContext is the single owner of the auth
token: everything that needs it goes through get/set/clear.
"""

import json
import logging
import os
import threading
from ..core.config import Config

logger = logging.getLogger(__name__)

TOKEN_KEY = 'token'


class LocalStorage:
    """JSON-file backed key/value store. path=None keeps everything in memory."""

    def __init__(self, path=None):
        self.path = path
        self._lock = threading.Lock()
        self._data = self._read()

    def _read(self):
        if not self.path or not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self):
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._data, f)

    def get_item(self, key):
        with self._lock:
            return self._data.get(key)

    def set_item(self, key, value):
        with self._lock:
            self._data[key] = value
            self._write()

    def remove_item(self, key):
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._write()


class SessionContext:
    """Process-wide holder of the admin bearer token"""

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else LocalStorage(Config.SHOWCASE_STORAGE_PATH)

    def get(self):
        return self.storage.get_item(TOKEN_KEY)

    def set(self, token):
        self.storage.set_item(TOKEN_KEY, token)

    def clear(self):
        """Invalidate the session (logout)"""
        self.storage.remove_item(TOKEN_KEY)

    def is_authenticated(self):
        return bool(self.get())
