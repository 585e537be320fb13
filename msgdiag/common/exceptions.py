"""Diagnostics domain exceptions."""

from typing import Any, Optional


class DiagnosticsException(Exception):
    """Base exception for diagnostics operations."""

    def __init__(self, message: str, exchange_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.exchange_id = exchange_id


class TypeConversionException(DiagnosticsException):
    """A converter was found but failed while converting the value."""

    def __init__(self, to_type: type, value: Any, cause: Optional[BaseException] = None, exchange_id: Optional[str] = None):
        super().__init__(f'Error converting value of type {type(value).__name__} to {to_type.__name__}: {cause}', exchange_id)
        self.to_type = to_type
        self.value = value
        self.cause = cause


class NoTypeConversionAvailableException(DiagnosticsException):
    """No converter knows how to produce the requested type."""

    def __init__(self, to_type: type, value: Any, exchange_id: Optional[str] = None):
        super().__init__(f'No type converter available to convert from type {type(value).__name__} to {to_type.__name__}', exchange_id)
        self.to_type = to_type
        self.value = value
