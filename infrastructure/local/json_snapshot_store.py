"""
File-backed implementation of LocalSnapshotStore.

The on-device key-value area is a directory; each key is one JSON file
(``<data_dir>/<key>.json``). The lifting log uses a single fixed key.
"""
import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Union

from pydantic import ValidationError

from domain.models import Snapshot, default_snapshot, parse_snapshot

logger = logging.getLogger(__name__)

LOCAL_STORAGE_KEY = "liftinglog_db_v1"


class JsonFileSnapshotStore:
    """
    JSON file implementation of the LocalSnapshotStore protocol.

    Reads never fail: a missing or unreadable file yields the structural
    default snapshot. Writes replace the file atomically.
    """

    def __init__(self, data_dir: Union[str, Path], key: str = LOCAL_STORAGE_KEY):
        self._data_dir = Path(data_dir).expanduser()
        self._key = key

    @property
    def path(self) -> Path:
        return self._data_dir / f"{self._key}.json"

    def read(self) -> Snapshot:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default_snapshot()
        except OSError as e:
            logger.warning(f"Could not read local snapshot {self.path}: {e}")
            return default_snapshot()
        except UnicodeDecodeError as e:
            logger.warning(f"Local snapshot {self.path} is not UTF-8 ({e.reason}); using default")
            return default_snapshot()

        try:
            return parse_snapshot(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.warning(f"Local snapshot {self.path} is not valid JSON ({e}); using default")
        except ValidationError as e:
            logger.warning(
                f"Local snapshot {self.path} failed validation "
                f"({e.error_count()} error(s)); using default"
            )
        return default_snapshot()

    def write(self, snapshot: Snapshot) -> bool:
        payload = json.dumps(snapshot.to_document(), ensure_ascii=False)
        temp_path = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", dir=self._data_dir, delete=False, encoding="utf-8", suffix=".tmp"
            ) as tmp:
                tmp.write(payload)
                temp_path = Path(tmp.name)
            temp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Failed to write local snapshot {self.path}: {e}")
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            return False
        return True

    def clear(self) -> None:
        """Remove the stored snapshot; the next read returns the default."""
        self.path.unlink(missing_ok=True)
