"""Low-level JSON file I/O with locking, and a file-backed key-value store."""
import json
import logging
import os
import sys
import tempfile
import threading
import shutil
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

if sys.platform != "win32":
    import fcntl

logger = logging.getLogger(__name__)


def load_json(file_path: str, retry_count: int = 3, retry_delay: float = 0.1) -> Dict[str, Any]:
    """
    Load and parse a JSON object file with UTF-8 encoding.

    Args:
        file_path: Path to JSON file
        retry_count: Number of attempts on permission errors (default: 3)
        retry_delay: Delay in seconds between attempts (default: 0.1)

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        PermissionError: If file not readable after retries
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    for attempt in range(retry_count):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except PermissionError:
            if attempt < retry_count - 1:
                time.sleep(retry_delay)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            )

    raise PermissionError(f"Cannot read file after {retry_count} attempts: {file_path}")


def save_json(file_path: str, data: Dict[str, Any], backup: bool = True) -> None:
    """
    Save data to a JSON file atomically.

    Args:
        file_path: Path to JSON file
        data: Dictionary to save
        backup: If True, copy the current file to <file>.backup first

    Raises:
        IOError: If the backup or the write fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    if backup and os.path.exists(file_path):
        try:
            shutil.copy2(file_path, f"{file_path}.backup")
        except OSError as e:
            raise IOError(f"Failed to create backup: {e}")

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path or ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except OSError as e:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                logger.warning(f"Could not remove temp file {temp_path}")
        raise IOError(f"Failed to write file {file_path}: {e}")


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive advisory lock on a file.

    Args:
        file_path: Path to file to lock (must exist)
        timeout: Maximum seconds to wait for the lock (default: 5.0)

    Usage:
        with lock_file("data/local_store.json"):
            data = load_json("data/local_store.json")
            data["inscriptions"] = "[]"
            save_json("data/local_store.json", data)

    Raises:
        TimeoutError: If the lock isn't acquired within timeout
        FileNotFoundError: If file doesn't exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Cannot lock non-existent file: {file_path}")

    if sys.platform == "win32":
        lock_path = f"{file_path}.lock"
        start_time = time.time()
        while True:
            try:
                lock_fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_RDWR)
                break
            except FileExistsError:
                if time.time() - start_time > timeout:
                    raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                time.sleep(0.05)

        try:
            yield
        finally:
            os.close(lock_fd)
            try:
                os.remove(lock_path)
            except OSError:
                logger.warning(f"Could not remove lock file {lock_path}")
    else:
        # Lock a sidecar too; save_json replaces the data file's inode
        handle = open(f"{file_path}.lock", "a+")
        try:
            start_time = time.time()
            while True:
                try:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                    break
                except OSError:
                    if time.time() - start_time > timeout:
                        raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
                    time.sleep(0.05)

            yield

        finally:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            finally:
                handle.close()


class KeyValueStore:
    """
    String key-value store persisted as one JSON object file.

    Mirrors the browser localStorage API: values are strings, missing keys
    read as None, and every write rewrites the whole file.
    """

    def __init__(self, file_path: str, backup: bool = True):
        self.file_path = file_path
        self.backup = backup
        # Serializes threads sharing this instance; the file lock covers processes
        self._thread_lock = threading.RLock()
        self._held = threading.local()

        if not os.path.exists(file_path):
            save_json(file_path, {}, backup=False)

    @contextmanager
    def lock(self):
        """Exclusive lock on the store file; re-entrant within one thread."""
        with self._thread_lock:
            depth = getattr(self._held, "depth", 0)
            if depth > 0:
                self._held.depth = depth + 1
                try:
                    yield
                finally:
                    self._held.depth = depth
                return

            with lock_file(self.file_path):
                self._held.depth = 1
                try:
                    yield
                finally:
                    self._held.depth = 0

    def _read(self) -> Dict[str, Any]:
        try:
            data = load_json(self.file_path)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.error(f"Key-value store {self.file_path} is unreadable, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Key-value store {self.file_path} does not hold an object, treating as empty")
            return {}
        return data

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None."""
        value = self._read().get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)

    def set_item(self, key: str, value: str) -> None:
        """Store value under key."""
        with self.lock():
            data = self._read()
            data[key] = str(value)
            save_json(self.file_path, data, backup=self.backup)

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        with self.lock():
            data = self._read()
            if key in data:
                del data[key]
                save_json(self.file_path, data, backup=self.backup)

    def keys(self):
        return list(self._read().keys())
