"""Shared file helpers for the JSON-backed repositories.

Each file holds a JSON list of records.  Writes go to a temporary file
that is then renamed over the original, and every read-modify-write goes
through a lock shared by all repositories pointing at the same path.
The lock is process-local; separate processes are not serialised.
"""

from __future__ import annotations

import json
import os
import threading
from pathlib import Path

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self.path = Path(file_path)
        with _locks_guard:
            self.lock = _locks.setdefault(self.path.resolve(), threading.RLock())
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
