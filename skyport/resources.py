"""
Resource pack access

Converters never touch the filesystem directly. They read and write through a
ResourceAccessor, which maps identifiers onto ``<type>/<namespace>/<path>``
entries of an unpacked directory, a zip archive or an in-memory store.
"""

import logging
import zipfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, Optional, Set, Tuple

from skyport.identifier import Identifier

logger = logging.getLogger(__name__)


class ResourceType(str, Enum):
    """Top-level directory of a pack"""
    ASSETS = "assets"
    DATA = "data"


def _to_identifier(namespace: str, path: str) -> Optional[Identifier]:
    try:
        return Identifier(namespace, path)
    except ValueError:
        logger.debug(f"Ignoring non-resource file: {namespace}/{path}")
        return None


class ResourceAccessor(ABC):
    """Read/write access to the resources of one pack"""

    @abstractmethod
    def get_namespaces(self, resource_type: ResourceType) -> Set[str]:
        """Namespaces present under the given resource type"""

    @abstractmethod
    def search_in(self, resource_type: ResourceType, parent: Identifier) -> Iterator[Identifier]:
        """Lazily yield every resource located below ``parent``"""

    @abstractmethod
    def get_bytes(self, resource_type: ResourceType, identifier: Identifier) -> Optional[bytes]:
        """Content of a resource, or None if it does not exist"""

    @abstractmethod
    def put(self, resource_type: ResourceType, identifier: Identifier, data: bytes) -> None:
        """Create or replace a resource"""

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class DirectoryResourceAccessor(ResourceAccessor):
    """An unpacked resource pack rooted at ``root``"""

    def __init__(self, root):
        self.root = Path(root)

    def _path(self, resource_type: ResourceType, identifier: Identifier) -> Path:
        return self.root / resource_type.value / identifier.namespace / identifier.path

    def get_namespaces(self, resource_type: ResourceType) -> Set[str]:
        base = self.root / resource_type.value
        if not base.is_dir():
            return set()
        return {p.name for p in base.iterdir() if p.is_dir()}

    def search_in(self, resource_type: ResourceType, parent: Identifier) -> Iterator[Identifier]:
        namespace_dir = self.root / resource_type.value / parent.namespace
        base = namespace_dir / parent.path
        if not base.is_dir():
            return
        for path in sorted(base.rglob("*")):
            if not path.is_file():
                continue
            identifier = _to_identifier(parent.namespace, path.relative_to(namespace_dir).as_posix())
            if identifier is not None:
                yield identifier

    def get_bytes(self, resource_type: ResourceType, identifier: Identifier) -> Optional[bytes]:
        path = self._path(resource_type, identifier)
        if not path.is_file():
            return None
        return path.read_bytes()

    def put(self, resource_type: ResourceType, identifier: Identifier, data: bytes) -> None:
        path = self._path(resource_type, identifier)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


class ZipResourceAccessor(ResourceAccessor):
    """
    A zipped resource pack.

    Opened with mode ``"r"`` for reading an input pack or ``"w"`` for writing
    an output pack. Resources written in ``"w"`` mode stay readable through the
    accessor until it is closed.
    """

    def __init__(self, path, mode: str = "r"):
        if mode not in ("r", "w"):
            raise ValueError(f"Unsupported zip mode: {mode}")
        self.path = Path(path)
        self.mode = mode
        self._zip = zipfile.ZipFile(self.path, mode, compression=zipfile.ZIP_DEFLATED)
        self._written: Dict[str, bytes] = {}

    def _names(self) -> Iterator[str]:
        if self.mode == "r":
            yield from self._zip.namelist()
        else:
            yield from self._written

    def _entries(self, resource_type: ResourceType) -> Iterator[Tuple[str, str]]:
        prefix = f"{resource_type.value}/"
        for name in self._names():
            if not name.startswith(prefix) or name.endswith("/"):
                continue
            parts = PurePosixPath(name[len(prefix):]).parts
            if len(parts) < 2:
                continue
            yield parts[0], "/".join(parts[1:])

    def get_namespaces(self, resource_type: ResourceType) -> Set[str]:
        return {namespace for namespace, _ in self._entries(resource_type)}

    def search_in(self, resource_type: ResourceType, parent: Identifier) -> Iterator[Identifier]:
        prefix = parent.path.rstrip("/") + "/"
        for namespace, path in sorted(self._entries(resource_type)):
            if namespace != parent.namespace or not path.startswith(prefix):
                continue
            identifier = _to_identifier(namespace, path)
            if identifier is not None:
                yield identifier

    def get_bytes(self, resource_type: ResourceType, identifier: Identifier) -> Optional[bytes]:
        name = f"{resource_type.value}/{identifier.namespace}/{identifier.path}"
        if self.mode == "w":
            return self._written.get(name)
        try:
            return self._zip.read(name)
        except KeyError:
            return None

    def put(self, resource_type: ResourceType, identifier: Identifier, data: bytes) -> None:
        if self.mode != "w":
            raise ValueError(f"Zip pack opened read-only: {self.path}")
        name = f"{resource_type.value}/{identifier.namespace}/{identifier.path}"
        if name in self._written:
            raise ValueError(f"Resource already written to {self.path}: {identifier}")
        self._zip.writestr(name, data)
        self._written[name] = data

    def close(self) -> None:
        self._zip.close()


class MemoryResourceAccessor(ResourceAccessor):
    """Resources held in a dictionary, for embedding callers and tests"""

    def __init__(self, resources: Optional[Dict[Tuple[ResourceType, Identifier], bytes]] = None):
        self.resources: Dict[Tuple[ResourceType, Identifier], bytes] = dict(resources or {})

    def get_namespaces(self, resource_type: ResourceType) -> Set[str]:
        return {identifier.namespace for rtype, identifier in self.resources if rtype == resource_type}

    def search_in(self, resource_type: ResourceType, parent: Identifier) -> Iterator[Identifier]:
        prefix = parent.path.rstrip("/") + "/"
        matches = [
            identifier for rtype, identifier in self.resources
            if rtype == resource_type
            and identifier.namespace == parent.namespace
            and identifier.path.startswith(prefix)
        ]
        yield from sorted(matches, key=str)

    def get_bytes(self, resource_type: ResourceType, identifier: Identifier) -> Optional[bytes]:
        return self.resources.get((resource_type, identifier))

    def put(self, resource_type: ResourceType, identifier: Identifier, data: bytes) -> None:
        self.resources[(resource_type, identifier)] = data


def open_accessor(path, writable: bool = False) -> ResourceAccessor:
    """
    Open a pack as a zip archive (``*.zip``) or as a directory.

    Args:
        path: Pack location
        writable: Open for output; zip archives are created from scratch and
                  directories are created if missing

    Raises:
        FileNotFoundError: If a pack opened for reading does not exist
    """
    path = Path(path)
    if not writable and not path.exists():
        raise FileNotFoundError(f"Input pack not found: {path}")
    if path.suffix.lower() == ".zip":
        return ZipResourceAccessor(path, "w" if writable else "r")
    if writable:
        path.mkdir(parents=True, exist_ok=True)
    return DirectoryResourceAccessor(path)
