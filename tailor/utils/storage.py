"""
Local key-value store for resume and job description text.

A single JSON file (store.json under TAILOR_HOME) holding raw strings. Every call
reads or rewrites the whole file; there are no transactional guarantees.
"""

import json
import os
from pathlib import Path
from typing import Dict, Iterable, Optional

from dotenv import load_dotenv

load_dotenv()
TAILOR_HOME = Path(os.getenv("TAILOR_HOME", str(Path.home() / ".resume-tailor"))).expanduser()
STORE_PATH = TAILOR_HOME / "store.json"


class LocalStore:
    """
    JSON-file key-value store.

    Example:
        >>> store = LocalStore(tmp_path / "store.json")
        >>> store.set(jobDescription="Senior Python engineer")
        >>> store.get("jobDescription")
        'Senior Python engineer'
        >>> store.remove("jobDescription")
        >>> store.get("jobDescription") is None
        True
    """

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else STORE_PATH

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._read().get(key, default)

    def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        """Return the stored values for the keys that are present."""
        data = self._read()
        return {key: data[key] for key in keys if key in data}

    def set(self, **values: str):
        data = self._read()
        data.update(values)
        self._write(data)

    def remove(self, *keys: str):
        data = self._read()
        for key in keys:
            data.pop(key, None)
        self._write(data)
