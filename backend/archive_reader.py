"""
archive_reader.py
-----------------
Opens an uploaded ZIP held in memory. Nothing is extracted to disk.

Public API:
    has_zip_magic(data)                  -> bool
    read_archive(data, max_entry_bytes)  -> list[ArchiveEntry]
"""

import io
import logging
import zipfile
import zlib

from errors import EntryReadError, InvalidArchive

log = logging.getLogger(__name__)

ZIP_MAGIC = b"PK"
DEFAULT_MAX_ENTRY_BYTES = 100 * 1024 * 1024  # 100 MB uncompressed per member


def has_zip_magic(data: bytes) -> bool:
    """Cheap check on the local-file-header signature before a full parse."""
    return len(data) >= 4 and data[:2] == ZIP_MAGIC


def base_name(name: str) -> str:
    return name.replace("\\", "/").rsplit("/", 1)[-1]


class ArchiveEntry:
    """One file inside the archive. Content is decompressed on read()."""

    def __init__(self, zf: zipfile.ZipFile, info: zipfile.ZipInfo, max_bytes: int):
        self._zf = zf
        self._info = info
        self._max_bytes = max_bytes

    @property
    def name(self) -> str:
        return self._info.filename

    @property
    def size(self) -> int:
        return self._info.file_size

    def read(self) -> bytes:
        if self.size > self._max_bytes:
            raise EntryReadError(f"{base_name(self.name)}: {self.size} bytes exceeds entry limit")
        try:
            return self._zf.read(self._info)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise EntryReadError(f"{base_name(self.name)}: corrupt member ({type(e).__name__})") from e
        except NotImplementedError as e:
            raise EntryReadError(f"{base_name(self.name)}: unsupported compression") from e
        except RuntimeError as e:
            # zipfile raises RuntimeError for encrypted members without a password
            raise EntryReadError(f"{base_name(self.name)}: encrypted member") from e

    def __repr__(self) -> str:
        return f"ArchiveEntry({self.name!r}, size={self.size})"


def read_archive(data: bytes, max_entry_bytes: int = DEFAULT_MAX_ENTRY_BYTES) -> list[ArchiveEntry]:
    """
    Parse the central directory of an in-memory ZIP.
    Raises InvalidArchive when the buffer is not a ZIP. Directories are skipped.
    """
    if not has_zip_magic(data):
        raise InvalidArchive(InvalidArchive.BAD_FORMAT)
    try:
        zf = zipfile.ZipFile(io.BytesIO(data), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as e:
        log.debug("archive rejected: %s", type(e).__name__)
        raise InvalidArchive(InvalidArchive.UNREADABLE) from e

    entries = [ArchiveEntry(zf, info, max_entry_bytes) for info in zf.infolist() if not info.is_dir()]
    log.debug("archive opened: %d entries", len(entries))
    return entries
