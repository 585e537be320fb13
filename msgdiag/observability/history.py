"""Fixed-width table of the route hops an exchange has been through."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence

from msgdiag.common.result import Result
from msgdiag.common.uri import UriSanitizer
from msgdiag.config.log import get_logger
from msgdiag.config.models import DiagnosticsConfig
from msgdiag.observability.exchange_formatter import ExchangeFormatter
from msgdiag.routing.exchange import Exchange, MessageHistoryEntry

logger = get_logger(__name__)

MESSAGE_HISTORY_HEADER = '%-20s %-20s %-80s %-12s'
MESSAGE_HISTORY_OUTPUT = '[%-18.18s] [%-18.18s] [%-78.78s] [%10.10s]'
SEPARATOR = '-' * 139


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _cell(value: Any) -> str:
    return '' if value is None else str(value)


class MessageHistoryFormatter:
    """Dumps the message history of an exchange in a human readable format.

    ``clock`` supplies "now" for the elapsed time of the origin row and
    ``uri_sanitizer`` masks credentials in the origin endpoint URI.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        uri_sanitizer: Optional[UriSanitizer] = None,
        config: Optional[DiagnosticsConfig] = None,
    ):
        self.clock = clock
        self.uri_sanitizer = uri_sanitizer or UriSanitizer(config.redact_uri_parameters if config is not None else None)

    def format(
        self,
        exchange: Exchange,
        exchange_formatter: Optional[ExchangeFormatter] = None,
        include_stacktrace_header: bool = False,
    ) -> Optional[str]:
        """Return the history table, None when there is no history, or '' if dumping failed.

        This is called while reporting failures, so it never raises.
        """
        result = Result.capture(self.try_format, exchange, exchange_formatter, include_stacktrace_header)
        if not result.is_ok:
            logger.debug('message history dump failed', exchange_id=getattr(exchange, 'exchange_id', None), exc_info=result.error)
            return ''
        return result.value

    def try_format(
        self,
        exchange: Exchange,
        exchange_formatter: Optional[ExchangeFormatter] = None,
        include_stacktrace_header: bool = False,
    ) -> Optional[str]:
        """Same as :meth:`format` but lets internal failures propagate."""
        history: Optional[Sequence[MessageHistoryEntry]] = exchange.get_property(Exchange.MESSAGE_HISTORY)
        if not history:
            return None

        lines: List[str] = ['', 'Message History', SEPARATOR]
        lines.append(MESSAGE_HISTORY_HEADER % ('RouteId', 'ProcessorId', 'Processor', 'Elapsed (ms)'))

        # incoming origin of the message goes on top
        route_id = exchange.from_route_id
        label = ''
        if exchange.from_endpoint is not None:
            label = self.uri_sanitizer.sanitize(exchange.from_endpoint.endpoint_uri)
        elapsed = self._elapsed_since(exchange.get_property(Exchange.CREATED_TIMESTAMP))
        lines.append(self.format_row(route_id, route_id, label, elapsed))

        for entry in history:
            lines.append(self.format_row(entry.route_id, entry.node_id, entry.label, entry.elapsed_millis))

        if exchange_formatter is not None:
            lines.extend(['', 'Exchange', SEPARATOR, exchange_formatter.format(exchange)])

        text = '\n'.join(lines) + '\n'
        if include_stacktrace_header:
            text += '\nStacktrace\n' + SEPARATOR
        return text

    @staticmethod
    def format_row(route_id: Any, node_id: Any, label: Any, elapsed_millis: Any) -> str:
        return MESSAGE_HISTORY_OUTPUT % (_cell(route_id), _cell(node_id), _cell(label), _cell(elapsed_millis))

    def _elapsed_since(self, created: Any) -> int:
        if created is None:
            return 0
        now = self.clock()
        if isinstance(created, datetime):
            if created.tzinfo is None and now.tzinfo is not None:
                created = created.replace(tzinfo=timezone.utc)
            elif created.tzinfo is not None and now.tzinfo is None:
                now = now.replace(tzinfo=timezone.utc)
            return int((now - created).total_seconds() * 1000)
        # epoch milliseconds
        return int(now.timestamp() * 1000 - float(created))
