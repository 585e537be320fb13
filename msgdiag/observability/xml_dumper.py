"""Generic XML dump of a message's headers and body."""

from __future__ import annotations

from typing import Callable, List, Optional

from msgdiag.body.extractor import BodyTextExtractor
from msgdiag.body.streams import StreamCache
from msgdiag.common.escaping import xml_escape
from msgdiag.common.utils import type_name
from msgdiag.config.models import DiagnosticsConfig
from msgdiag.routing.exchange import Message
from msgdiag.routing.headers import sorted_headers


class MessageXmlDumper:
    """Renders a message as ``<message>`` with sorted ``<header>`` entries and a ``<body>``."""

    def __init__(
        self,
        extractor: Optional[BodyTextExtractor] = None,
        escaper: Callable[[str], str] = xml_escape,
        config: Optional[DiagnosticsConfig] = None,
    ):
        self.config = config or (extractor.config if extractor is not None else DiagnosticsConfig())
        self.extractor = extractor or BodyTextExtractor(config=self.config)
        self.escaper = escaper

    def dump(
        self,
        message: Message,
        include_body: Optional[bool] = None,
        indent: Optional[int] = None,
        allow_streams: Optional[bool] = None,
        allow_files: Optional[bool] = None,
        max_chars: Optional[int] = None,
    ) -> str:
        """Dump the message as XML.

        Options left as None take their value from the dumper's config
        (body included, no indent, streams off, files on, 128k chars).
        """
        cfg = self.config
        include_body = cfg.dump_include_body if include_body is None else include_body
        indent = cfg.dump_indent if indent is None else indent
        allow_streams = cfg.dump_allow_streams if allow_streams is None else allow_streams
        allow_files = cfg.dump_allow_files if allow_files is None else allow_files
        max_chars = cfg.dump_max_chars if max_chars is None else max_chars

        prefix = ' ' * max(indent, 0)
        lines: List[str] = []

        exchange = message.exchange
        if exchange is not None:
            lines.append(f'{prefix}<message exchangeId="{self.escaper(str(exchange.exchange_id))}">')
        else:
            lines.append(f'{prefix}<message>')

        if message.has_headers():
            lines.append(f'{prefix}  <headers>')
            for key, value in sorted_headers(message.headers):
                lines.append(f'{prefix}    <header key="{self.escaper(str(key))}"{self._type_attribute(value)}>{self._header_text(message, value)}</header>')
            lines.append(f'{prefix}  </headers>')

        if include_body:
            body = self.extractor.extract_for_logging(message, '', allow_streams, allow_files, max_chars)
            lines.append(f'{prefix}  <body{self._type_attribute(message.body)}>{self.escaper(body)}</body>')

        lines.append(f'{prefix}</message>')
        return '\n'.join(lines)

    def _type_attribute(self, value: object) -> str:
        name = type_name(value)
        if name is None:
            return ''
        return f' type="{self.escaper(name)}"'

    def _header_text(self, message: Message, value: object) -> str:
        if value is None:
            return ''
        try:
            text = self.extractor.convert(str, value, message.exchange).unwrap_or(None)
        finally:
            if isinstance(value, StreamCache):
                self.extractor.reset_cache(value)
        if text is None:
            return ''
        return self.escaper(text)
