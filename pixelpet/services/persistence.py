# pixelpet/services/persistence.py
"""
Snapshot storage as one JSON file per save key.

The file lives in the running Kivy app's user_data_dir, in ./.userdata when
no app is running (tools, tests), or in an explicitly given directory.
Writing goes through a sibling temp file that os.replace() swaps in, so a
crash mid-write leaves the previous save intact. Nothing here raises into
the engine: save/clear report False and load reports None.
"""

from __future__ import annotations

import json
import logging
import os
from tempfile import NamedTemporaryFile
from typing import Any, Dict, Optional

from kivy.app import App
from pixelpet.models.snapshot import SAVE_KEY, Snapshot

logger = logging.getLogger(__name__)

LOCAL_DIR = os.path.join(".", ".userdata")


def _write_atomic(path: str, payload: Dict[str, Any]) -> None:
    """Write payload as UTF-8 JSON to path via a temp file in the same directory."""
    directory = os.path.dirname(path)
    os.makedirs(directory, exist_ok=True)
    with NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=directory,
        prefix=".pet-",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        try:
            json.dump(payload, tmp, indent=2, ensure_ascii=False)
            tmp.flush()
            os.fsync(tmp.fileno())
        except Exception:
            tmp.close()
            os.remove(tmp.name)
            raise
    try:
        os.replace(tmp.name, path)
    except OSError:
        os.remove(tmp.name)
        raise


class Persistence:
    """Loads, saves and deletes the pet snapshot."""

    def __init__(self, base_dir: Optional[str] = None, key: str = SAVE_KEY) -> None:
        self._base_dir = base_dir
        self._key = key
        self._path: Optional[str] = None

    @property
    def path(self) -> str:
        """Save file location; resolved once, on first use."""
        if self._path is None:
            base = self._base_dir or self._app_dir() or LOCAL_DIR
            self._path = os.path.join(base, f"{self._key}.json")
        return self._path

    @staticmethod
    def _app_dir() -> Optional[str]:
        app = App.get_running_app()
        return getattr(app, "user_data_dir", None) if app is not None else None

    def save(self, snapshot: Snapshot) -> bool:
        try:
            _write_atomic(self.path, snapshot.to_dict())
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not save snapshot to %s: %s", self.path, exc)
            return False
        logger.debug("Saved snapshot to %s", self.path)
        return True

    def load(self) -> Optional[Snapshot]:
        """
        Read the snapshot back.

        A missing file, unreadable file, invalid JSON, or data without a
        usable pet all mean "no existing pet" and return None.
        """
        if not os.path.exists(self.path):
            logger.info("No save at %s", self.path)
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Snapshot.from_dict(data)
        except (OSError, ValueError, TypeError, OverflowError) as exc:
            logger.warning("Could not read snapshot %s: %s", self.path, exc)
            return None

    def clear(self) -> bool:
        """Delete the save file if there is one."""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            return True
        except OSError as exc:
            logger.warning("Could not delete save %s: %s", self.path, exc)
            return False
        logger.info("Deleted save %s", self.path)
        return True
