"""Free-function entry points for message diagnostics.

Each function builds the service objects it needs from the collaborators
passed in, so callers can inject a converter, escaper or clock without
constructing the services themselves.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from msgdiag.body.converter import TypeConverter
from msgdiag.body.extractor import DEFAULT_PREPEND, BodyTextExtractor
from msgdiag.common.escaping import xml_escape
from msgdiag.common.utils import type_name
from msgdiag.config.models import DiagnosticsConfig
from msgdiag.observability.exchange_formatter import ExchangeFormatter
from msgdiag.observability.history import MessageHistoryFormatter, utc_now
from msgdiag.observability.xml_dumper import MessageXmlDumper
from msgdiag.routing.exchange import Exchange, Message
from msgdiag.routing.headers import copy_headers

__all__ = [
    'copy_headers',
    'dump_as_xml',
    'dump_message_history_stacktrace',
    'extract_body_as_string',
    'extract_body_for_logging',
    'get_body_type_name',
    'get_content_encoding',
    'get_content_type',
    'reset_stream_cache',
]


def extract_body_for_logging(
    message: Message,
    prepend: str = DEFAULT_PREPEND,
    allow_streams: Optional[bool] = None,
    allow_files: bool = False,
    max_chars: Optional[int] = None,
    type_converter: Optional[TypeConverter] = None,
    config: Optional[DiagnosticsConfig] = None,
) -> str:
    """Extract the body for logging, clipped to ``max_chars``.

    When ``allow_streams`` or ``max_chars`` are omitted they are read from the
    pipeline context properties, defaulting to ``False`` and ``1000``.
    """
    extractor = BodyTextExtractor(type_converter, config)
    return extractor.extract_for_logging(message, prepend, allow_streams, allow_files, max_chars)


def dump_as_xml(
    message: Message,
    include_body: bool = True,
    indent: int = 0,
    allow_streams: bool = False,
    allow_files: bool = True,
    max_chars: int = 128 * 1024,
    type_converter: Optional[TypeConverter] = None,
    escaper: Callable[[str], str] = xml_escape,
) -> str:
    """Dump the message as a generic XML structure."""
    dumper = MessageXmlDumper(BodyTextExtractor(type_converter), escaper)
    return dumper.dump(message, include_body, indent, allow_streams, allow_files, max_chars)


def dump_message_history_stacktrace(
    exchange: Exchange,
    exchange_formatter: Optional[ExchangeFormatter] = None,
    log_stacktrace: bool = False,
    clock: Callable[[], datetime] = utc_now,
) -> Optional[str]:
    """Dump the message history as a table, or None when the exchange has none."""
    return MessageHistoryFormatter(clock).format(exchange, exchange_formatter, log_stacktrace)


def extract_body_as_string(message: Optional[Message], type_converter: Optional[TypeConverter] = None) -> Optional[str]:
    return BodyTextExtractor(type_converter).extract_as_string(message)


def get_body_type_name(message: Optional[Message]) -> Optional[str]:
    if message is None:
        return None
    return type_name(message.body)


def reset_stream_cache(message: Optional[Message]) -> None:
    BodyTextExtractor().reset_stream_cache(message)


def _header_as_string(message: Message, key: str, type_converter: Optional[TypeConverter]) -> Optional[str]:
    value = message.get_header(key)
    if value is None:
        return None
    return BodyTextExtractor(type_converter).convert(str, value, message.exchange).unwrap_or(None)


def get_content_type(message: Message, type_converter: Optional[TypeConverter] = None) -> Optional[str]:
    """MIME content type of the message, or None if not set."""
    return _header_as_string(message, Exchange.CONTENT_TYPE, type_converter)


def get_content_encoding(message: Message, type_converter: Optional[TypeConverter] = None) -> Optional[str]:
    """MIME content encoding of the message, or None if not set."""
    return _header_as_string(message, Exchange.CONTENT_ENCODING, type_converter)
