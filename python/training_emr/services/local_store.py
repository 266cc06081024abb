"""
Local Store for Training EMR

Key-value persistence backed by a directory of JSON files, one file per key.
Mirrors browser local storage: reads and writes are synchronous, values are
JSON-serialised, and concurrent writers race with last-write-wins semantics.

Keys are percent-encoded into file names, so distinct keys never share a file.
An entry that cannot be decoded is moved aside to ``<file>.corrupt`` before the
default is returned; the next write starts a fresh file and the bad bytes stay
on disk for inspection.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote, unquote

logger = logging.getLogger(__name__)

USERS_KEY = "emr_users"
SESSION_KEY = "emr_session"
PATIENTS_KEY_PREFIX = "emr_patients_"

CORRUPT_SUFFIX = ".corrupt"

def patients_key(user_id: str) -> str:
    """Storage key for one user's patient collection"""
    return f"{PATIENTS_KEY_PREFIX}{user_id}"

class LocalStore:
    """JSON file key-value store with typed accessors for users, session and patients"""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{quote(key, safe='')}.json"

    def _quarantine(self, path: Path) -> Optional[Path]:
        """Move an unreadable entry aside without overwriting earlier ones"""
        target = path.with_name(path.name + CORRUPT_SUFFIX)
        n = 1
        while target.exists():
            target = path.with_name(f"{path.name}{CORRUPT_SUFFIX}.{n}")
            n += 1
        try:
            os.replace(path, target)
        except OSError as e:
            logger.error(f"Could not move unreadable entry {path.name} aside: {e}")
            return None
        return target

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a value

        Args:
            key: Storage key
            default: Returned (as a copy) when the key is absent or unreadable

        Returns:
            Decoded JSON value or the default
        """
        path = self._path(key)
        if not path.exists():
            return copy.deepcopy(default)

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except ValueError as e:
            moved = self._quarantine(path)
            logger.warning(f"Corrupt store entry '{key}' moved to {moved}, using default: {e}")
            return copy.deepcopy(default)
        except OSError as e:
            logger.warning(f"Unreadable store entry '{key}', using default: {e}")
            return copy.deepcopy(default)

    def set(self, key: str, value: Any) -> None:
        """Write a value, replacing any previous one"""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)

        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Stored '{key}'")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> List[str]:
        if not self.data_dir.exists():
            return []
        return sorted(unquote(p.stem) for p in self.data_dir.glob("*.json"))

    # Typed accessors

    def get_users(self) -> List[Dict[str, Any]]:
        return self.get(USERS_KEY, [])

    def set_users(self, users: List[Dict[str, Any]]) -> None:
        self.set(USERS_KEY, users)

    def get_session(self) -> Optional[Dict[str, Any]]:
        return self.get(SESSION_KEY, None)

    def set_session(self, session: Dict[str, Any]) -> None:
        self.set(SESSION_KEY, session)

    def clear_session(self) -> None:
        self.remove(SESSION_KEY)

    def get_patients(self, user_id: str) -> List[Dict[str, Any]]:
        return self.get(patients_key(user_id), [])

    def set_patients(self, user_id: str, patients: List[Dict[str, Any]]) -> None:
        self.set(patients_key(user_id), patients)
