import io
from pathlib import Path

import pytest

from msgdiag.body.classifier import BodyKind, classify, is_disallowed, placeholder
from msgdiag.body.streams import BytesSource, InputStreamCache, ReaderCache, StreamSource, StringSource, WrappedFile


@pytest.mark.parametrize("body,kind", [
    (None, BodyKind.NULL),
    ('text', BodyKind.OPAQUE_OBJECT),
    (b'bytes', BodyKind.OPAQUE_OBJECT),
    ({'a': 1}, BodyKind.OPAQUE_OBJECT),
    (InputStreamCache(b'data'), BodyKind.RESETTABLE_STREAM),
    (ReaderCache('data'), BodyKind.RESETTABLE_STREAM),
    (io.BytesIO(b'data'), BodyKind.RAW_INPUT_STREAM),
    (io.StringIO('data'), BodyKind.READER),
    (StringSource('<a/>'), BodyKind.MEMORY_STRUCTURED_SOURCE),
    (BytesSource(b'<a/>'), BodyKind.MEMORY_STRUCTURED_SOURCE),
    (StreamSource(io.BytesIO(b'<a/>')), BodyKind.STRUCTURED_SOURCE),
    (Path('/tmp/some-file'), BodyKind.FILE_BACKED),
    (WrappedFile('/tmp/some-file'), BodyKind.FILE_BACKED),
])
def test_classify(body, kind):
    assert classify(body) is kind


def test_classify_output_streams(tmp_path):
    with open(tmp_path / 'out.bin', 'wb') as raw, open(tmp_path / 'out.txt', 'w') as text:
        assert classify(raw) is BodyKind.RAW_OUTPUT_STREAM
        assert classify(text) is BodyKind.WRITER


def test_classify_closed_stream_does_not_raise():
    stream = io.BytesIO(b'data')
    stream.close()
    assert classify(stream) is BodyKind.RAW_INPUT_STREAM


def test_classify_does_not_consume():
    stream = io.BytesIO(b'data')
    classify(stream)
    assert stream.tell() == 0


@pytest.mark.parametrize("kind,allow_streams,allow_files,disallowed", [
    (BodyKind.RAW_INPUT_STREAM, False, True, True),
    (BodyKind.RAW_INPUT_STREAM, True, False, False),
    (BodyKind.RESETTABLE_STREAM, False, True, True),
    (BodyKind.STRUCTURED_SOURCE, False, True, True),
    (BodyKind.MEMORY_STRUCTURED_SOURCE, False, False, False),
    (BodyKind.FILE_BACKED, True, False, True),
    (BodyKind.FILE_BACKED, False, True, True),
    (BodyKind.FILE_BACKED, True, True, False),
    (BodyKind.OPAQUE_OBJECT, False, False, False),
])
def test_is_disallowed(kind, allow_streams, allow_files, disallowed):
    assert is_disallowed(kind, allow_streams, allow_files) is disallowed


def test_placeholder():
    assert placeholder(BodyKind.RAW_INPUT_STREAM, object()) == '[Body is instance of RawInputStream]'
    assert placeholder(BodyKind.FILE_BACKED, WrappedFile('/data/in.csv')) == '[Body is file based: /data/in.csv]'
