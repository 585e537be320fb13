"""Body classification, conversion and safe text extraction."""

from .classifier import BodyKind, classify
from .converter import DefaultTypeConverter, TypeConverter
from .extractor import BodyTextExtractor
from .streams import BytesSource, InputStreamCache, ReaderCache, Source, StreamCache, StreamSource, StringSource, WrappedFile

__all__ = [
    'BodyKind',
    'BodyTextExtractor',
    'BytesSource',
    'DefaultTypeConverter',
    'InputStreamCache',
    'ReaderCache',
    'Source',
    'StreamCache',
    'StreamSource',
    'StringSource',
    'TypeConverter',
    'WrappedFile',
    'classify',
]
