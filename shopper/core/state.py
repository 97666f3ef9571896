"""Client-held key-value state: cart, user profile and the admin product mirror."""
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CART_KEY = "cart"
USER_KEY = "user"
PRODUCTS_KEY = "products"


class ClientStateStore:
    """
    Durable string key-value slots, starting empty on first run.

    Values are kept as serialized JSON text so that whatever was written
    by another page (or tampered with) is read back verbatim, and parsing
    is left to the caller. With a ``path`` every write is flushed to a
    JSON file; without one the state lives for the life of the object.
    """

    def __init__(self, path: Path | str | None = None):
        self._path = Path(path) if path else None
        self._items: dict[str, str] = {}
        if self._path and self._path.exists():
            self._items = self._load(self._path)

    @staticmethod
    def _load(path: Path) -> dict[str, str]:
        """Read the slots saved at ``path``; non-string slots are dropped"""
        try:
            saved = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable client state file %s", path)
            return {}
        if not isinstance(saved, dict):
            logger.warning("Ignoring client state file %s: not a JSON object", path)
            return {}

        items = {key: value for key, value in saved.items() if isinstance(value, str)}
        for key in saved.keys() - items.keys():
            logger.warning("Dropping non-text value under %r from %s", key, path)
        logger.debug("Loaded client state from %s", path)
        return items

    @classmethod
    def from_settings(cls, settings) -> "ClientStateStore":
        """State store at the configured ``state_file``, or in memory"""
        return cls(settings.state_file)

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._flush()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._items = {}
        self._flush()

    def read_json(self, key: str) -> Any:
        """Parse the stored value. Raises ValueError on malformed JSON."""
        raw = self.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    def write_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    def merge(self, key: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Overlay ``updates`` onto the stored object, keeping every other field."""
        try:
            current = self.read_json(key)
        except ValueError:
            logger.warning("Discarding unparseable value under %r", key)
            current = None
        record = dict(current) if isinstance(current, dict) else {}
        record.update(updates)
        self.write_json(key, record)
        return record

    def _flush(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._items), encoding="utf-8")
