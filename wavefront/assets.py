"""
Asset paths, byte sources and lazily loaded handles.

These stand in for the asset system embedding the loaders: it owns the
bytes, decides how relative paths resolve and loads dependencies such as
textures when they are actually needed.
"""

from typing import Any, Callable, Dict, Generic, Optional, TypeVar, Self, Final
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from io import BytesIO
import logging
from PIL import Image, UnidentifiedImageError
from geoutil import ImageInfo
from wavefront import AssetIOException, InvalidPathException, InvalidImageException


logger = logging.getLogger(__name__)

LABEL_SEPARATOR: Final[str] = '#'
T = TypeVar('T')


@dataclass(frozen=True)
class AssetPath:
    """A '/' separated path relative to the asset root, with an optional label"""
    path: PurePosixPath
    label: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> Self:
        path, _, label = text.partition(LABEL_SEPARATOR)
        normalized = normalize(PurePosixPath(path.replace('\\', '/')), text)
        return cls(normalized, label or None)

    @property
    def extension(self) -> str: return self.path.suffix.lstrip('.').lower()

    def without_label(self) -> 'AssetPath': return AssetPath(self.path)

    def with_label(self, label: str) -> 'AssetPath': return AssetPath(self.path, label)

    def resolve_embed(self, relative: str) -> 'AssetPath':
        """Resolves a path referenced from inside this asset against its directory"""
        if relative.startswith('/'):
            return AssetPath.parse(relative)
        path, _, label = relative.partition(LABEL_SEPARATOR)
        joined = self.path.parent / PurePosixPath(path.replace('\\', '/'))
        return AssetPath(normalize(joined, relative), label or None)

    def __str__(self):
        text = self.path.as_posix()
        return f"{text}{LABEL_SEPARATOR}{self.label}" if self.label else text


def normalize(path: PurePosixPath, original: str) -> PurePosixPath:
    """Collapses '.' and '..' parts, refusing to leave the asset root"""
    parts: list[str] = []
    for part in path.parts:
        if part in ('/', '.', ''):
            continue
        if part == '..':
            if not parts:
                raise InvalidPathException(original)
            parts.pop()
            continue
        parts.append(part)
    return PurePosixPath(*parts)


class AssetSource:
    """Base class for asset byte sources"""

    def read_bytes(self, path: AssetPath) -> bytes:
        raise NotImplementedError


class DirectorySource(AssetSource):
    def __init__(self, root: Path):
        self.root = root

    def read_bytes(self, path: AssetPath) -> bytes:
        filepath = self.root / path.path
        try:
            return filepath.read_bytes()
        except OSError as e:
            raise AssetIOException(str(path.without_label()), e.strerror or str(e)) from e

    def __repr__(self) -> str: return f"DirectorySource({self.root})"


class MemorySource(AssetSource):
    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = {}
        for name, data in (files or {}).items():
            self.add(name, data)

    def add(self, name: str, data: bytes) -> None:
        self.files[str(AssetPath.parse(name).without_label())] = data

    def read_bytes(self, path: AssetPath) -> bytes:
        key = str(path.without_label())
        if key not in self.files:
            raise AssetIOException(key, 'no such asset')
        return self.files[key]

    def __repr__(self) -> str: return f"MemorySource({len(self.files)} files)"


class AssetHandle(Generic[T]):
    """Reference to an asset that is only read when first requested"""

    def __init__(self, path: AssetPath, source: AssetSource, loader: Callable[[AssetPath, bytes], T]):
        self._path = path
        self._source = source
        self._loader = loader
        self._value: Optional[T] = None

    @property
    def path(self) -> AssetPath: return self._path
    @property
    def loaded(self) -> bool: return self._value is not None

    def get(self) -> T:
        if self._value is None:
            logger.debug(f"Loading dependency {self._path}")
            self._value = self._loader(self._path, self._source.read_bytes(self._path))
        return self._value

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AssetHandle) and other.path == self.path

    def __hash__(self): return hash(self._path)

    def __repr__(self) -> str: return f"AssetHandle({self._path})"


def load_image_info(path: AssetPath, data: bytes) -> ImageInfo:
    """Reads the header of an image to find its dimensions"""
    try:
        with Image.open(BytesIO(data), 'r') as imgfile:
            return ImageInfo(imgfile.width, imgfile.height, imgfile.mode)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageException(str(path), str(e)) from e
