import json
import os
import logging

logger = logging.getLogger(__name__)

class LocalStorage:
    """String key/value store persisted to a JSON file.

    Every write rewrites the file. An unreadable file is treated as empty.
    """

    def __init__(self, path: str = None):
        self.path = path
        self._items = {}
        if path and os.path.exists(path):
            try:
                with open(path, "r", encoding="utf-8") as handle:
                    data = json.load(handle)
                if isinstance(data, dict):
                    self._items = {str(k): str(v) for k, v in data.items()}
                else:
                    logger.warning(f"Ignoring storage file {path}: not a JSON object")
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable storage file {path}: {str(e)}")

    def get_item(self, key: str):
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = str(value)
        self._save()

    def remove_item(self, key: str):
        if self._items.pop(key, None) is not None:
            self._save()

    def clear(self):
        self._items.clear()
        self._save()

    def keys(self) -> list:
        return list(self._items)

    def _save(self):
        if not self.path:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(self._items, handle, indent=2)
