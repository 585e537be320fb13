"""Body value types with stream, file or structured-source semantics."""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from typing import IO, Optional, Union


class StreamCache(ABC):
    """Stream-backed body that can be re-read from the start after ``reset``."""

    @abstractmethod
    def reset(self) -> None:
        """Move the cursor back to the start. Idempotent."""
        pass

    @abstractmethod
    def read_text(self) -> str:
        """Read the remaining content as text, advancing the cursor."""
        pass

    @abstractmethod
    def length(self) -> int:
        pass


class InputStreamCache(StreamCache):
    """In-memory cache of a binary stream."""

    def __init__(self, data: bytes, encoding: str = 'utf-8'):
        self._buffer = io.BytesIO(data)
        self.encoding = encoding

    @classmethod
    def from_stream(cls, stream: IO[bytes], encoding: str = 'utf-8') -> 'InputStreamCache':
        return cls(stream.read(), encoding)

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    def read_text(self) -> str:
        return self._buffer.read().decode(self.encoding, errors='replace')

    def reset(self) -> None:
        self._buffer.seek(0)

    def length(self) -> int:
        return len(self._buffer.getbuffer())

    def __repr__(self) -> str:
        return f'InputStreamCache(length={self.length()})'


class ReaderCache(StreamCache):
    """In-memory cache of a text stream."""

    def __init__(self, text: str):
        self._buffer = io.StringIO(text)
        self._length = len(text)

    def read(self, size: int = -1) -> str:
        return self._buffer.read(size)

    def read_text(self) -> str:
        return self._buffer.read()

    def reset(self) -> None:
        self._buffer.seek(0)

    def length(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f'ReaderCache(length={self._length})'


class Source(ABC):
    """Structured (XML-like) document source."""

    is_memory_based = False

    @abstractmethod
    def get_text(self) -> str:
        pass


class StringSource(Source):
    is_memory_based = True

    def __init__(self, text: str, system_id: Optional[str] = None):
        self.text = text
        self.system_id = system_id

    def get_text(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


class BytesSource(Source):
    is_memory_based = True

    def __init__(self, data: bytes, encoding: str = 'utf-8', system_id: Optional[str] = None):
        self.data = data
        self.encoding = encoding
        self.system_id = system_id

    def get_text(self) -> str:
        return self.data.decode(self.encoding, errors='replace')

    def __str__(self) -> str:
        return self.get_text()


class StreamSource(Source):
    """Source reading from a live stream; reading it consumes the stream."""

    def __init__(self, stream: IO, encoding: str = 'utf-8', system_id: Optional[str] = None):
        self.stream = stream
        self.encoding = encoding
        self.system_id = system_id

    def get_text(self) -> str:
        data = self.stream.read()
        if isinstance(data, bytes):
            return data.decode(self.encoding, errors='replace')
        return data

    def __repr__(self) -> str:
        return f'StreamSource(system_id={self.system_id!r})'


class WrappedFile:
    """A file on disk, optionally with an already-loaded payload."""

    def __init__(self, file: Union[str, os.PathLike], body: object = None):
        self.file = os.fspath(file)
        self.body = body

    def get_file(self) -> str:
        return self.file

    def __str__(self) -> str:
        return self.file

    def __repr__(self) -> str:
        return f'WrappedFile({self.file!r})'
