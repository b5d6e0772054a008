"""In-memory reader for app package archives"""

import base64
import binascii
import io
import logging
import zipfile
import zlib
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from appingest.core.packages.exceptions import ArchiveOpenError

logger = logging.getLogger(__name__)

# Security limits
MAX_ARCHIVE_SIZE = 50 * 1024 * 1024  # 50MB


@dataclass(frozen=True)
class ArchiveEntry:
    """A single archive entry: a directory or a leaf with byte content"""
    path: str
    is_directory: bool
    content: bytes = b""

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        """Decode leaf content as text"""
        return self.content.decode(encoding, errors)


class PackageArchive:
    """Archive entries loaded eagerly, in zip enumeration order"""

    def __init__(self, entries: List[ArchiveEntry]):
        self._entries: Tuple[ArchiveEntry, ...] = tuple(entries)
        self._by_path: Dict[str, ArchiveEntry] = {}
        for entry in self._entries:
            self._by_path.setdefault(entry.path, entry)

    @property
    def entries(self) -> Tuple[ArchiveEntry, ...]:
        return self._entries

    def get(self, path: str) -> Optional[ArchiveEntry]:
        """
        Look up an entry by exact archive path

        Directories are found with or without their trailing slash.
        """
        entry = self._by_path.get(path)
        if entry is None and not path.endswith("/"):
            entry = self._by_path.get(f"{path}/")
        return entry

    def files(self) -> Iterator[ArchiveEntry]:
        """Iterate leaf entries only"""
        return (entry for entry in self._entries if not entry.is_directory)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def decode_archive(zip_base64: str) -> bytes:
    """
    Decode a base64 payload into raw archive bytes

    Whitespace is ignored, so line-wrapped (MIME style) payloads are accepted.

    Raises:
        ArchiveOpenError: If the payload is not valid base64
    """
    try:
        return base64.b64decode("".join(zip_base64.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ArchiveOpenError(f"Archive payload is not valid base64: {e}") from e


def open_archive(data: bytes, max_size: int = MAX_ARCHIVE_SIZE) -> PackageArchive:
    """
    Open a zip archive from bytes and load every entry into memory

    Args:
        data: Raw zip bytes
        max_size: Maximum accepted archive size in bytes

    Returns:
        PackageArchive with entries in enumeration order

    Raises:
        ArchiveOpenError: If the archive is too large, empty, corrupt, encrypted
            or uses an unsupported compression method
    """
    if len(data) > max_size:
        raise ArchiveOpenError(
            f"Archive too large: {len(data) / 1024 / 1024:.2f}MB "
            f"(max: {max_size / 1024 / 1024}MB)"
        )

    try:
        with zipfile.ZipFile(io.BytesIO(data), "r") as zf:
            entries = []
            for info in zf.infolist():
                if info.is_dir():
                    entries.append(ArchiveEntry(path=info.filename, is_directory=True))
                else:
                    entries.append(
                        ArchiveEntry(path=info.filename, is_directory=False, content=zf.read(info))
                    )
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError,
            RuntimeError, NotImplementedError) as e:
        raise ArchiveOpenError(f"Invalid zip file: {e}") from e

    if not entries:
        raise ArchiveOpenError("Zip file is empty")

    logger.debug(f"Opened archive with {len(entries)} entries ({len(data) / 1024:.2f}KB)")
    return PackageArchive(entries)
