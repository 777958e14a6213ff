"""
Asset Sources
One binary payload per upload, either held in memory or backed by a file.
"""

import io
import mimetypes
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..errors import ValidationError

DEFAULT_MIME_TYPE = "video/mp4"


class AssetSource:
    """
    Interface shared by every payload shape.

    Subclasses tell the encoder whether the payload can be streamed straight
    from memory or has to be referenced on disk.
    """

    streams_from_memory = False

    def __init__(self, filename: str, mime_type: str):
        self.filename = filename
        self.mime_type = mime_type

    @property
    def size(self) -> Optional[int]:
        """Payload size in bytes, None while unknown."""
        return None


class InMemorySource(AssetSource):
    """Blob-like payload: bytes, size and MIME type known up front."""

    streams_from_memory = True

    def __init__(self, data: bytes, mime_type: Optional[str] = None, filename: Optional[str] = None):
        super().__init__(
            filename=filename or "video.mp4",
            mime_type=mime_type or _guess_mime_type(filename)
        )
        self.data = bytes(data)

    @property
    def size(self) -> Optional[int]:
        return len(self.data)

    def __repr__(self) -> str:
        return f"InMemorySource(filename={self.filename!r}, size={self.size}, mime_type={self.mime_type!r})"


class FileBackedSource(AssetSource):
    """
    Payload referenced by a filesystem path or file:// URI.
    Never read fully into memory; size is only known once the file is stat'ed.
    """

    def __init__(self, path: Union[str, Path], mime_type: Optional[str] = None, filename: Optional[str] = None):
        self.path = _to_path(path)
        super().__init__(
            filename=filename or self.path.name or "video.mp4",
            mime_type=mime_type or _guess_mime_type(str(self.path))
        )

    def stat_size(self) -> int:
        """Size on disk. Raises ValidationError when the file is gone."""
        try:
            return self.path.stat().st_size
        except FileNotFoundError:
            raise ValidationError(f"Video file not found: {self.path}")

    def __repr__(self) -> str:
        return f"FileBackedSource(path={str(self.path)!r}, mime_type={self.mime_type!r})"


def asset_source_for(handle: Any, mime_type: Optional[str] = None, filename: Optional[str] = None) -> AssetSource:
    """
    Pick the AssetSource implementation for a raw handle.

    - AssetSource: returned unchanged
    - bytes / bytearray / memoryview / BytesIO: InMemorySource
    - str / Path (plain path or file:// URI): FileBackedSource
    """
    if handle is None:
        raise ValidationError("No video was provided for upload.")

    if isinstance(handle, AssetSource):
        return handle

    if isinstance(handle, (bytes, bytearray, memoryview)):
        return InMemorySource(bytes(handle), mime_type=mime_type, filename=filename)

    if isinstance(handle, io.BytesIO):
        return InMemorySource(handle.getvalue(), mime_type=mime_type, filename=filename)

    if isinstance(handle, (str, Path)):
        if not str(handle).strip():
            raise ValidationError("No video was provided for upload.")
        return FileBackedSource(handle, mime_type=mime_type, filename=filename)

    raise ValidationError(f"Unsupported video handle type: {type(handle).__name__}")


def _to_path(path: Union[str, Path]) -> Path:
    if isinstance(path, Path):
        return path
    parsed = urlparse(path)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ValidationError(f"Only local files can be uploaded, got URI scheme {parsed.scheme!r}")
    return Path(path)


def _guess_mime_type(name: Optional[str]) -> str:
    if not name:
        return DEFAULT_MIME_TYPE
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_MIME_TYPE
