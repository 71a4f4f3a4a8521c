"""File-backed SessionStore for the CLI, one token per data directory."""

from __future__ import annotations

import json
from pathlib import Path

from storefront.domain.repository.session_store import SessionStore


class JsonSessionStore(SessionStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def read(self) -> str | None:
        if not self._file_path.exists():
            return None
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return raw.get("token") or None

    def set(self, token: str) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(
            json.dumps({"token": token}, indent=2) + "\n", encoding="utf-8"
        )

    def clear(self) -> None:
        self._file_path.unlink(missing_ok=True)
