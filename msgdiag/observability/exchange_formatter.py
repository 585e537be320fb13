"""Single-record summaries of an exchange for log lines and failure reports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from msgdiag.body.extractor import BodyTextExtractor
from msgdiag.common.utils import type_name
from msgdiag.routing.exchange import Exchange
from msgdiag.routing.headers import header_snapshot, sorted_headers


class ExchangeFormatter(ABC):
    """Interface for rendering an exchange as text."""

    @abstractmethod
    def format(self, exchange: Exchange) -> str:
        pass


class DefaultExchangeFormatter(ExchangeFormatter):
    """Renders ``Exchange[Id: ..., Headers: {...}, BodyType: ..., Body: ...]``."""

    def __init__(
        self,
        extractor: Optional[BodyTextExtractor] = None,
        show_exchange_id: bool = True,
        show_route_id: bool = False,
        show_properties: bool = False,
        show_headers: bool = True,
        show_body_type: bool = True,
        show_body: bool = True,
        show_streams: bool = False,
        show_files: bool = False,
        multiline: bool = False,
        max_chars: int = 10000,
    ):
        self.extractor = extractor or BodyTextExtractor()
        self.show_exchange_id = show_exchange_id
        self.show_route_id = show_route_id
        self.show_properties = show_properties
        self.show_headers = show_headers
        self.show_body_type = show_body_type
        self.show_body = show_body
        self.show_streams = show_streams
        self.show_files = show_files
        self.multiline = multiline
        self.max_chars = max_chars

    def format(self, exchange: Exchange) -> str:
        message = exchange.message
        fields: List[str] = []

        if self.show_exchange_id:
            fields.append(f'Id: {exchange.exchange_id}')
        if self.show_route_id:
            fields.append(f'RouteId: {exchange.from_route_id}')
        if self.show_properties:
            properties = {key: value for key, value in sorted_headers(exchange.properties) if key != Exchange.MESSAGE_HISTORY}
            fields.append(f'Properties: {properties}')
        if self.show_headers:
            fields.append(f'Headers: {header_snapshot(message)}')
        if self.show_body_type:
            fields.append(f'BodyType: {type_name(message.body)}')
        if self.show_body:
            body = self.extractor.extract_for_logging(message, '', self.show_streams, self.show_files, self.max_chars)
            fields.append(f'Body: {body}')

        if self.multiline:
            return 'Exchange[\n' + '\n'.join(f'  {field}' for field in fields) + '\n]'
        return 'Exchange[' + ', '.join(fields) + ']'
