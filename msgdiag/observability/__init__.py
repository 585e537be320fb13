"""Diagnostic renderings of messages and exchanges."""

from .exchange_formatter import DefaultExchangeFormatter, ExchangeFormatter
from .history import MessageHistoryFormatter
from .xml_dumper import MessageXmlDumper

__all__ = ['DefaultExchangeFormatter', 'ExchangeFormatter', 'MessageHistoryFormatter', 'MessageXmlDumper']
