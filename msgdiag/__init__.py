"""Safe, bounded diagnostic dumps of in-flight pipeline messages.

Call :func:`msgdiag.config.log.configure_structlog` at startup so the DEBUG
records of swallowed conversion failures are filtered by the configured level.
Services built from a loaded config come from :mod:`msgdiag.dependencies`.
"""

from msgdiag.helpers import (
    copy_headers,
    dump_as_xml,
    dump_message_history_stacktrace,
    extract_body_as_string,
    extract_body_for_logging,
    get_body_type_name,
    get_content_encoding,
    get_content_type,
    reset_stream_cache,
)
from msgdiag.routing.exchange import Endpoint, Exchange, Message, MessageHistoryEntry, PipelineContext

__all__ = [
    'Endpoint',
    'Exchange',
    'Message',
    'MessageHistoryEntry',
    'PipelineContext',
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
