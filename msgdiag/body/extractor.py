"""Safe, bounded extraction of message bodies as text for logging."""

from __future__ import annotations

from typing import Any, Optional

from msgdiag.body.classifier import BodyKind, classify, is_disallowed, placeholder
from msgdiag.body.converter import DefaultTypeConverter, TypeConverter
from msgdiag.body.streams import StreamCache
from msgdiag.common.exceptions import TypeConversionException
from msgdiag.common.result import Result
from msgdiag.config.log import get_logger
from msgdiag.config.models import DiagnosticsConfig
from msgdiag.routing.exchange import Exchange, Message, PipelineContext

logger = get_logger(__name__)

NOT_LOGGED = '[Body is not logged]'
NULL_BODY = '[Body is null]'
CLIP_SUFFIX = '... [Body clipped after {max_chars} chars, total length is {length}]'
DEFAULT_PREPEND = 'Message: '


def clip(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` and note the original length. 0 disables clipping."""
    if max_chars > 0 and len(text) > max_chars:
        return text[:max_chars] + CLIP_SUFFIX.format(max_chars=max_chars, length=len(text))
    return text


class BodyTextExtractor:
    """Turns message bodies into clipped text without consuming stream bodies.

    The converter is used for every body; when none is given, the converter of
    the message's pipeline context is used, falling back to
    :class:`DefaultTypeConverter`. Options not passed explicitly are read from
    the pipeline context properties, then from ``config``.
    """

    def __init__(self, type_converter: Optional[TypeConverter] = None, config: Optional[DiagnosticsConfig] = None):
        self.type_converter = type_converter
        self.config = config or DiagnosticsConfig()
        self._fallback_converter = DefaultTypeConverter()

    def _converter_for(self, exchange: Optional[Exchange]) -> TypeConverter:
        if self.type_converter is not None:
            return self.type_converter
        if exchange is not None and exchange.context is not None:
            return exchange.context.get_type_converter()
        return self._fallback_converter

    def convert(self, target_type: type, value: Any, exchange: Optional[Exchange] = None) -> Result[Any]:
        """Convert ``value`` and report failure as data instead of raising.

        A result that is not an instance of ``target_type`` counts as a failure.
        """
        exchange_id = exchange.exchange_id if exchange is not None else None
        result = Result.capture(self._converter_for(exchange).convert_to, target_type, value, exchange)
        if result.is_ok and result.value is not None and not isinstance(result.value, target_type):
            result = Result.failure(TypeConversionException(target_type, value, exchange_id=exchange_id))
        if not result.is_ok:
            logger.debug(
                'value conversion failed',
                target_type=target_type.__name__,
                value_type=type(value).__name__,
                exchange_id=exchange_id,
                error=str(result.error),
            )
        return result

    def _context_option(self, message: Message, name: str, target_type: type, default: Any) -> Any:
        exchange = message.exchange
        if exchange is None or exchange.context is None:
            return default
        value = exchange.context.get_property(name)
        if value is None:
            return default
        converted = self.convert(target_type, value, exchange).unwrap_or(None)
        return default if converted is None else converted

    def resolve_allow_streams(self, message: Message) -> bool:
        return self._context_option(message, PipelineContext.LOG_DEBUG_BODY_STREAMS, bool, self.config.log_debug_body_streams)

    def resolve_max_chars(self, message: Message) -> int:
        return self._context_option(message, PipelineContext.LOG_DEBUG_BODY_MAX_CHARS, int, self.config.log_debug_body_max_chars)

    def extract_for_logging(
        self,
        message: Message,
        prepend: str = DEFAULT_PREPEND,
        allow_streams: Optional[bool] = None,
        allow_files: bool = False,
        max_chars: Optional[int] = None,
    ) -> str:
        """Extract the body for logging, clipping it when it is too big.

        ``max_chars`` of 0 means no limit and a negative value turns body
        logging off. Stream and file bodies are replaced by a placeholder
        unless allowed.
        """
        if allow_streams is None:
            allow_streams = self.resolve_allow_streams(message)
        if max_chars is None:
            max_chars = self.resolve_max_chars(message)

        if max_chars < 0:
            return prepend + NOT_LOGGED

        body = message.body
        kind = classify(body)
        if kind is BodyKind.NULL:
            return prepend + NULL_BODY

        if is_disallowed(kind, allow_streams, allow_files):
            return prepend + placeholder(kind, body)

        text = self._materialize(body, message.exchange)
        if text is None:
            return prepend + NULL_BODY

        return prepend + clip(text, max_chars)

    def _materialize(self, body: Any, exchange: Optional[Exchange]) -> Optional[str]:
        try:
            text = self.convert(str, body, exchange).unwrap_or(None)
            if text is None:
                text = Result.capture(str, body).unwrap_or(None)
            return text
        finally:
            if isinstance(body, StreamCache):
                self.reset_cache(body)

    def reset_cache(self, cache: StreamCache) -> None:
        """Reset ``cache``, logging instead of raising when the reset fails."""
        result = Result.capture(cache.reset)
        if not result.is_ok:
            logger.debug('stream cache reset failed', cache_type=type(cache).__name__, error=str(result.error))

    def extract_as_string(self, message: Optional[Message]) -> Optional[str]:
        """Return the full body as text, or None when there is no body.

        Stream caches are reset afterwards so the body can be read again.
        """
        if message is None or message.body is None:
            return None
        return self._materialize(message.body, message.exchange)

    def reset_stream_cache(self, message: Optional[Message]) -> None:
        """Reset the body so it can be read again, if it is a stream cache."""
        if message is not None and isinstance(message.body, StreamCache):
            self.reset_cache(message.body)
