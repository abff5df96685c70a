"""
File-backed key/value store.

Each key is kept in its own file under a storage directory, so values survive
process restarts the way browser storage survives page reloads.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

import structlog

from ..config import settings
from ..domain.exceptions import StorageDecodeException, StorageWriteException
from .key_value_store import IKeyValueStore

logger = structlog.get_logger(__name__)


class FileKeyValueStore(IKeyValueStore):
    """
    Directory of ``<key>.json`` files.

    Keys are percent-encoded into file names, so distinct keys never share
    a file. Writes go to a temporary file that is renamed over the target,
    so a reader never sees a half-written value.
    """

    def __init__(self, directory: Union[str, Path, None] = None):
        """
        Initialize file store.

        Args:
            directory: Storage directory, defaults to ``settings.STORAGE_PATH``.
                       Created on first write.
        """
        self.directory = Path(directory or settings.STORAGE_PATH)

    def _path_for(self, key: str) -> Path:
        safe_key = quote(key, safe="", errors="surrogatepass")
        return self.directory / f"{safe_key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageDecodeException(key, str(e)) from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, UnicodeEncodeError) as e:
            raise StorageWriteException(key, str(e)) from e

        logger.debug("store_write", key=key, path=str(path), size=len(value))

    def remove_item(self, key: str) -> None:
        try:
            self._path_for(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageWriteException(key, str(e)) from e
