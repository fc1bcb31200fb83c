"""On-disk store for downloaded block lists.

Keeps the most recently persisted text of each block list in
memory and mirrors it to ``<directory>/<list>.txt``.  Writes go to
a temporary file in the same directory and are moved into place
with :func:`os.replace`, so readers never see a half-written list.

Fetching and parsing the lists is handled elsewhere; this module
only stores text.
"""

from __future__ import annotations

import contextlib
import enum
import os
import pathlib
import tempfile
import threading

from site_rating import config
from site_rating.utils import logger
from site_rating.utils.errors import ListStoreError, get_error_message

log = logger.create_logger("ListStore")


def _file_mode() -> int:
    """Return the mode a plain ``open()`` would give a new file."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


# Persisted lists get regular file permissions, not mkstemp's 0600.
FILE_MODE = _file_mode()


class BlockList(enum.StrEnum):
    """Block lists the store knows about."""

    EASYLIST = "easylist"
    EASYLIST_PRIVACY = "easylistPrivacy"


class ListStore:
    """Persisted block list text, one slot per :class:`BlockList`."""

    def __init__(self, directory: pathlib.Path | None = None) -> None:
        """Create a store rooted at *directory*.

        Defaults to ``Settings.list_store_dir``.  Nothing is read
        from disk until :meth:`load` is called.
        """
        self._directory = directory if directory is not None else config.get_settings().list_store_dir
        self._lock = threading.Lock()
        self._texts: dict[BlockList, str] = {b: "" for b in BlockList}

    @property
    def directory(self) -> pathlib.Path:
        return self._directory

    @property
    def has_data(self) -> bool:
        """True once every block list holds some text."""
        return all(self.text(b) for b in BlockList)

    @property
    def easylist(self) -> str:
        return self.text(BlockList.EASYLIST)

    @property
    def easylist_privacy(self) -> str:
        return self.text(BlockList.EASYLIST_PRIVACY)

    def path_for(self, block_list: BlockList) -> pathlib.Path:
        """Return the file a block list is persisted to."""
        return self._directory / f"{block_list.value}.txt"

    def text(self, block_list: BlockList) -> str:
        """Return the last persisted text, or ``""`` if none."""
        with self._lock:
            return self._texts[block_list]

    def persist(self, block_list: BlockList, data: bytes) -> None:
        """Decode *data* as UTF-8, write it atomically, and expose it.

        The in-memory text only changes once the file is in place.

        Raises:
            ListStoreError: If *data* is not valid UTF-8 or the
                file cannot be written.
        """
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ListStoreError(f"{block_list.value} is not valid UTF-8") from exc

        path = self.path_for(block_list)
        with self._lock:
            try:
                _atomic_write(path, data)
            except OSError as exc:
                log.error(
                    "Failed to persist block list",
                    {"list": block_list.value, "path": str(path), "error": get_error_message(exc)},
                )
                raise ListStoreError(f"Could not write {path}") from exc
            self._texts[block_list] = text

        log.success("Block list persisted", {"list": block_list.value, "bytes": len(data)})

    def persist_easylist(self, data: bytes) -> None:
        self.persist(BlockList.EASYLIST, data)

    def persist_easylist_privacy(self, data: bytes) -> None:
        self.persist(BlockList.EASYLIST_PRIVACY, data)

    def load(self) -> int:
        """Read previously persisted lists back into memory.

        Missing files leave their slot empty.  Unreadable or
        undecodable files are logged and also left empty.

        Returns:
            The number of lists loaded.
        """
        loaded = 0
        for block_list in BlockList:
            path = self.path_for(block_list)
            if not path.exists():
                log.debug("No persisted block list", {"list": block_list.value})
                continue
            with self._lock:
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    log.warn(
                        "Failed to read block list",
                        {"list": block_list.value, "error": get_error_message(exc)},
                    )
                    continue
                self._texts[block_list] = text
            loaded += 1

        log.info("Block lists loaded", {"loaded": loaded, "hasData": self.has_data})
        return loaded


def _atomic_write(path: pathlib.Path, data: bytes) -> None:
    """Write *data* to a sibling temp file, then move it over *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
