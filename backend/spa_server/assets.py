"""In-memory index of the frontend build.

The whole bundle is read once at startup and kept as an immutable
``path -> AssetEntry`` mapping shared by every request.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from spa_server.content_type import resolve_content_type

logger = logging.getLogger(__name__)


class AssetBundleError(RuntimeError):
    """The asset bundle could not be loaded; the server must not start."""


class AssetEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    data: bytes
    content_type: str


class AssetIndex:
    """Read-only lookup from a relative bundle path to its entry.

    Keys are the exact relative paths of the bundle (forward slashes,
    case-sensitive). ``lookup`` does no normalization of its own; callers
    strip the leading ``/`` of the URL path.
    """

    def __init__(self, entries: Mapping[str, AssetEntry]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_mapping(cls, files: Mapping[str, bytes]) -> "AssetIndex":
        return cls(
            {
                path: AssetEntry(path=path, data=bytes(data), content_type=resolve_content_type(path))
                for path, data in files.items()
            }
        )

    @classmethod
    def from_directory(cls, root: Union[str, Path], entry_document: str = "index.html") -> "AssetIndex":
        """Read every regular file under ``root`` into memory.

        Raises AssetBundleError if the directory is missing or a file
        cannot be read.
        """
        root = Path(root)
        if not root.is_dir():
            raise AssetBundleError(f"Asset bundle directory not found: {root}")

        files: Dict[str, bytes] = {}
        for file_path in sorted(root.rglob("*")):
            if not file_path.is_file():
                continue
            key = file_path.relative_to(root).as_posix()
            try:
                files[key] = file_path.read_bytes()
            except OSError as e:
                raise AssetBundleError(f"Failed to read asset {file_path}: {e}") from e

        index = cls.from_mapping(files)
        logger.info(f"Loaded {len(index)} assets from {root}")
        if entry_document not in index:
            logger.warning(f"Entry document '{entry_document}' is missing from {root}; SPA routes will 404")
        return index

    def lookup(self, path: str) -> Optional[AssetEntry]:
        return self._entries.get(path)

    def paths(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
