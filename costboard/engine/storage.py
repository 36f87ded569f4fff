# engine/storage.py
import json
import logging
import math
import os
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def load_records(path: str) -> List[dict] | None:
    """Reads a record list; ``None`` means nothing usable was stored yet."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return None
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable store %s: %s", path, exc)
        return None
    if not isinstance(data, list):
        logger.warning("Ignoring store %s: expected a list of records", path)
        return None
    return _sanitize_json_compat(data)


def save_records(path: str, records: List[dict]) -> None:
    ensure_user_data_dir(path)
    tmp_path = f"{path}.tmp"
    clean = _sanitize_json_compat(records)
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(clean, f, allow_nan=False)
    os.replace(tmp_path, path)


class JsonKeyValueStore:
    """Local durable storage: one JSON file per store name under ``root``."""

    def __init__(self, root: str = "user_data") -> None:
        self.root = root

    def path_for(self, name: str) -> str:
        return os.path.join(self.root, f"{name}.json")

    def load(self, name: str) -> List[dict] | None:
        return load_records(self.path_for(name))

    def save(self, name: str, records: List[dict]) -> None:
        save_records(self.path_for(name), records)


class MemoryKeyValueStore:
    """Non-durable store with the same interface, for tests and previews."""

    def __init__(self, initial: Dict[str, List[dict]] | None = None) -> None:
        self.data: Dict[str, List[dict]] = {k: list(v) for k, v in (initial or {}).items()}

    def load(self, name: str) -> List[dict] | None:
        if name not in self.data:
            return None
        return json.loads(json.dumps(self.data[name]))

    def save(self, name: str, records: List[dict]) -> None:
        self.data[name] = json.loads(json.dumps(_sanitize_json_compat(records)))
