"""Conversion of message values into the types diagnostics need."""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from msgdiag.body.streams import Source, StreamCache, WrappedFile
from msgdiag.common.exceptions import NoTypeConversionAvailableException, TypeConversionException

if TYPE_CHECKING:
    from msgdiag.routing.exchange import Exchange


class TypeConverter(ABC):
    """Interface for converting arbitrary values to a target type."""

    @abstractmethod
    def convert_to(self, target_type: type, value: Any, exchange: Optional['Exchange'] = None) -> Any:
        """Convert ``value`` to ``target_type``.

        Raises:
            NoTypeConversionAvailableException: no conversion path exists.
            TypeConversionException: the conversion was attempted and failed.
        """
        pass


class DefaultTypeConverter(TypeConverter):
    """Converter covering text, boolean and integer targets."""

    TRUE_VALUES = {'true'}
    FALSE_VALUES = {'false'}

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def convert_to(self, target_type: type, value: Any, exchange: Optional['Exchange'] = None) -> Any:
        if value is None:
            return None
        if target_type is str:
            converter = self._to_str
        elif target_type is bool:
            converter = self._to_bool
        elif target_type is int:
            converter = self._to_int
        elif isinstance(value, target_type):
            return value
        else:
            raise NoTypeConversionAvailableException(target_type, value, self._exchange_id(exchange))

        try:
            return converter(value)
        except (NoTypeConversionAvailableException, TypeConversionException):
            raise
        except Exception as exc:
            raise TypeConversionException(target_type, value, exc, self._exchange_id(exchange)) from exc

    @staticmethod
    def _exchange_id(exchange: Optional['Exchange']) -> Optional[str]:
        return exchange.exchange_id if exchange is not None else None

    def _decode(self, data: Any) -> str:
        return bytes(data).decode(self.encoding, errors='replace')

    def _to_str(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self._decode(value)
        if isinstance(value, StreamCache):
            return value.read_text()
        if isinstance(value, Source):
            return value.get_text()
        if isinstance(value, WrappedFile):
            if value.body is not None:
                return self._to_str(value.body)
            return self._read_file(Path(value.file), value)
        if isinstance(value, os.PathLike):
            return self._read_file(Path(value), value)
        if isinstance(value, io.IOBase):
            if not value.readable():
                raise NoTypeConversionAvailableException(str, value)
            data = value.read()
            return data if isinstance(data, str) else self._decode(data)
        return str(value)

    def _read_file(self, path: Path, value: Any) -> str:
        if not path.is_file():
            raise NoTypeConversionAvailableException(str, value)
        return path.read_text(encoding=self.encoding, errors='replace')

    def _to_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        text = self._to_str(value).strip().lower()
        if text in self.TRUE_VALUES:
            return True
        if text in self.FALSE_VALUES:
            return False
        raise ValueError(f'{text!r} is not a boolean')

    def _to_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise NoTypeConversionAvailableException(int, value)
        if isinstance(value, int):
            return value
        return int(self._to_str(value).strip())
