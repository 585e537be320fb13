"""In-process message/exchange primitives inspected by the diagnostics helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from msgdiag.body.converter import TypeConverter


@dataclass(frozen=True, slots=True)
class MessageHistoryEntry:
    """One visit of a processing node, recorded in traversal order."""

    route_id: Optional[str]
    node_id: Optional[str]
    label: Optional[str]
    elapsed_millis: int = 0


@dataclass(slots=True)
class Endpoint:
    """Descriptor of the endpoint an exchange entered the pipeline from."""

    endpoint_uri: str


@dataclass(slots=True)
class PipelineContext:
    """Context shared by all exchanges of one pipeline."""

    LOG_DEBUG_BODY_STREAMS = 'msgdiag.logDebugBodyStreams'
    LOG_DEBUG_BODY_MAX_CHARS = 'msgdiag.logDebugBodyMaxChars'

    properties: Dict[str, str] = field(default_factory=dict)
    type_converter: Optional['TypeConverter'] = None

    def get_property(self, name: str) -> Optional[str]:
        return self.properties.get(name)

    def get_type_converter(self) -> 'TypeConverter':
        if self.type_converter is None:
            from msgdiag.body.converter import DefaultTypeConverter

            self.type_converter = DefaultTypeConverter()
        return self.type_converter


@dataclass(slots=True, eq=False)
class Message:
    """Headers plus a body of any type, optionally owned by an exchange."""

    body: Any = None
    headers: Dict[str, Any] = field(default_factory=dict)
    exchange: Optional['Exchange'] = None

    def get_header(self, key: str, default: Any = None) -> Any:
        return self.headers.get(key, default)

    def set_header(self, key: str, value: Any) -> None:
        self.headers[key] = value

    def remove_header(self, key: str) -> Any:
        return self.headers.pop(key, None)

    def has_headers(self) -> bool:
        return bool(self.headers)


@dataclass(slots=True, eq=False)
class Exchange:
    """Unit of work wrapping the current message plus cross-cutting metadata."""

    CREATED_TIMESTAMP = 'msgdiag.createdTimestamp'
    MESSAGE_HISTORY = 'msgdiag.messageHistory'
    CONTENT_TYPE = 'Content-Type'
    CONTENT_ENCODING = 'Content-Encoding'

    context: PipelineContext = field(default_factory=PipelineContext)
    exchange_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    properties: Dict[str, Any] = field(default_factory=dict)
    from_endpoint: Optional[Endpoint] = None
    from_route_id: Optional[str] = None
    message: Optional[Message] = None

    def __post_init__(self):
        if self.message is None:
            self.message = Message()
        self.message.exchange = self

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def set_message(self, message: Message) -> None:
        message.exchange = self
        self.message = message
