"""Classification of body values by how safe they are to materialize as text."""

import io
import os
from enum import Enum
from typing import Any

from msgdiag.body.streams import Source, StreamCache, WrappedFile


class BodyKind(Enum):
    """Runtime shape of a body value, recomputed on every inspection."""

    NULL = 'Null'
    RESETTABLE_STREAM = 'ResettableStream'
    RAW_INPUT_STREAM = 'RawInputStream'
    RAW_OUTPUT_STREAM = 'RawOutputStream'
    READER = 'Reader'
    WRITER = 'Writer'
    STRUCTURED_SOURCE = 'StructuredSource'
    MEMORY_STRUCTURED_SOURCE = 'MemoryStructuredSource'
    FILE_BACKED = 'FileBacked'
    OPAQUE_OBJECT = 'OpaqueObject'

    @property
    def is_stream_like(self) -> bool:
        return self in _STREAM_LIKE

    @property
    def is_file_backed(self) -> bool:
        return self is BodyKind.FILE_BACKED


_STREAM_LIKE = frozenset(
    {
        BodyKind.RESETTABLE_STREAM,
        BodyKind.RAW_INPUT_STREAM,
        BodyKind.RAW_OUTPUT_STREAM,
        BodyKind.READER,
        BodyKind.WRITER,
        BodyKind.STRUCTURED_SOURCE,
    }
)


def _io_direction(body: io.IOBase) -> str:
    # readable()/writable() raise ValueError on closed streams
    try:
        if body.readable():
            return 'in'
        if body.writable():
            return 'out'
    except ValueError:
        pass
    return 'in'


def classify(body: Any) -> BodyKind:
    """Return the :class:`BodyKind` of ``body`` without touching its content."""
    if body is None:
        return BodyKind.NULL
    if isinstance(body, Source):
        return BodyKind.MEMORY_STRUCTURED_SOURCE if body.is_memory_based else BodyKind.STRUCTURED_SOURCE
    if isinstance(body, StreamCache):
        return BodyKind.RESETTABLE_STREAM
    if isinstance(body, (WrappedFile, os.PathLike)):
        return BodyKind.FILE_BACKED
    if isinstance(body, io.TextIOBase):
        return BodyKind.READER if _io_direction(body) == 'in' else BodyKind.WRITER
    if isinstance(body, io.IOBase):
        return BodyKind.RAW_INPUT_STREAM if _io_direction(body) == 'in' else BodyKind.RAW_OUTPUT_STREAM
    return BodyKind.OPAQUE_OBJECT


def is_disallowed(kind: BodyKind, allow_streams: bool, allow_files: bool) -> bool:
    """Whether a body of ``kind`` must not be materialized under the given flags."""
    if kind.is_file_backed:
        return not allow_streams or not allow_files
    if kind.is_stream_like:
        return not allow_streams
    return False


def placeholder(kind: BodyKind, body: Any) -> str:
    """Fixed text logged in place of a body that must not be touched."""
    if kind.is_file_backed:
        return f'[Body is file based: {body}]'
    return f'[Body is instance of {kind.value}]'
