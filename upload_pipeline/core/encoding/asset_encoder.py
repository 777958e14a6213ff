"""
Asset Encoder
Builds the multipart/related request body of a single-request upload:
a `metadata` JSON part followed by a `video` binary part.
"""

import json
import logging
import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

from ..errors import ValidationError
from ..youtube.media_metadata import MediaMetadata
from .asset_source import AssetSource, FileBackedSource, InMemorySource

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024

Segment = Union[bytes, Path]


class MultipartBody:
    """
    Readable multipart stream with a known length.

    Segments are either bytes or paths on disk; file segments are opened
    lazily and read in chunks, so a large video is never held in memory.
    Exposes read()/__iter__/__len__ so HTTP clients can stream it with a
    Content-Length header.
    """

    def __init__(self, boundary: str, segments: List[Segment], length: int, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.boundary = boundary
        self._segments = segments
        self._length = length
        self._chunk_size = chunk_size
        self._index = 0
        self._offset = 0
        self._handle: Optional[IO[bytes]] = None

    @property
    def content_type(self) -> str:
        return f'multipart/related; boundary="{self.boundary}"'

    @property
    def headers(self) -> dict:
        return {
            "Content-Type": self.content_type,
            "Content-Length": str(self._length),
        }

    def __len__(self) -> int:
        return self._length

    def read(self, size: Optional[int] = -1) -> bytes:
        if size is None:
            size = -1
        out = bytearray()
        while self._index < len(self._segments) and (size < 0 or len(out) < size):
            want = -1 if size < 0 else size - len(out)
            chunk = self._read_segment(want)
            if not chunk:
                self._advance()
                continue
            out += chunk
        return bytes(out)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            chunk = self.read(self._chunk_size)
            if not chunk:
                break
            yield chunk

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def _read_segment(self, want: int) -> bytes:
        segment = self._segments[self._index]
        if isinstance(segment, bytes):
            end = len(segment) if want < 0 else min(len(segment), self._offset + want)
            chunk = segment[self._offset:end]
            self._offset = end
            return chunk

        if self._handle is None:
            self._handle = open(segment, "rb")
        return self._handle.read(self._chunk_size if want < 0 else min(want, self._chunk_size))

    def _advance(self):
        self.close()
        self._index += 1
        self._offset = 0

    def __repr__(self) -> str:
        return f"MultipartBody(boundary={self.boundary!r}, length={self._length}, parts={len(self._segments)})"


class AssetEncoder:
    """
    Encodes an AssetSource plus MediaMetadata into a MultipartBody.

    Two strategies, chosen by the source:
    - In-memory source: body assembled from memory, no temp files.
    - File-backed source: metadata JSON is materialized into a temp file and
      the video part references the original file; both stream from disk.

    build() is a context manager. The temp metadata file is removed when the
    block exits, whether the upload inside it succeeded, raised, or the
    body could not be built at all.
    """

    def __init__(self, temp_dir: Optional[Path] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._temp_dir = temp_dir
        self._chunk_size = chunk_size

    @contextmanager
    def build(self, source: Optional[AssetSource], metadata: MediaMetadata) -> Iterator[MultipartBody]:
        if source is None:
            raise ValidationError("No video was provided for upload.")
        if metadata is None:
            raise ValidationError("Video metadata is required.")
        metadata.validate()

        document = json.dumps(metadata.to_resource_body(), ensure_ascii=False).encode("utf-8")
        boundary = f"upload_{uuid.uuid4().hex}"

        if source.streams_from_memory:
            body = self._build_in_memory(boundary, source, document)
            try:
                yield body
            finally:
                body.close()
            return

        temp_path = self._write_metadata_file(document)
        body = None
        try:
            body = self._build_file_backed(boundary, source, temp_path)
            yield body
        finally:
            if body is not None:
                body.close()
            self._remove_temp_file(temp_path)

    def _build_in_memory(self, boundary: str, source: InMemorySource, document: bytes) -> MultipartBody:
        segments: List[Segment] = [
            self._metadata_header(boundary),
            document,
            self._video_header(boundary, source),
            source.data,
            self._closing(boundary),
        ]
        length = sum(len(s) for s in segments)
        logger.info(f"Encoded in-memory upload body: {source.filename} ({source.size} bytes)")
        return MultipartBody(boundary, segments, length, self._chunk_size)

    def _build_file_backed(self, boundary: str, source: FileBackedSource, metadata_path: Path) -> MultipartBody:
        video_size = source.stat_size()
        metadata_size = metadata_path.stat().st_size

        segments: List[Segment] = [
            self._metadata_header(boundary),
            metadata_path,
            self._video_header(boundary, source),
            source.path,
            self._closing(boundary),
        ]
        length = sum(len(s) for s in segments if isinstance(s, bytes)) + metadata_size + video_size
        logger.info(f"Encoded file-backed upload body: {source.path} ({video_size} bytes)")
        return MultipartBody(boundary, segments, length, self._chunk_size)

    def _write_metadata_file(self, document: bytes) -> Path:
        if self._temp_dir is not None:
            self._temp_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(prefix="video_metadata_", suffix=".json", dir=self._temp_dir)
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(document)
        except BaseException:
            self._remove_temp_file(path)
            raise
        logger.debug(f"Metadata written to temp file: {path}")
        return path

    def _remove_temp_file(self, path: Path):
        try:
            path.unlink()
            logger.debug(f"Temp metadata file removed: {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temp metadata file {path}: {e}")

    @staticmethod
    def _metadata_header(boundary: str) -> bytes:
        return (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="metadata"; filename="metadata.json"\r\n'
            "Content-Type: application/json; charset=UTF-8\r\n"
            "\r\n"
        ).encode("utf-8")

    @staticmethod
    def _video_header(boundary: str, source: AssetSource) -> bytes:
        filename = source.filename.replace('"', "")
        return (
            "\r\n"
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="video"; filename="{filename}"\r\n'
            f"Content-Type: {source.mime_type}\r\n"
            "\r\n"
        ).encode("utf-8")

    @staticmethod
    def _closing(boundary: str) -> bytes:
        return f"\r\n--{boundary}--\r\n".encode("utf-8")
