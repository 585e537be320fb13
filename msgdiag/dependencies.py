"""Diagnostics services built from a :class:`ConfigurationService`."""

from typing import Optional

from msgdiag.body.converter import TypeConverter
from msgdiag.body.extractor import BodyTextExtractor
from msgdiag.config import ConfigurationService
from msgdiag.observability.history import MessageHistoryFormatter
from msgdiag.observability.xml_dumper import MessageXmlDumper


def get_extractor(config_service: ConfigurationService, type_converter: Optional[TypeConverter] = None) -> BodyTextExtractor:
    """Get an extractor whose defaults come from the loaded config."""
    return BodyTextExtractor(type_converter, config_service.get_config())


def get_xml_dumper(config_service: ConfigurationService, type_converter: Optional[TypeConverter] = None) -> MessageXmlDumper:
    config = config_service.get_config()
    return MessageXmlDumper(BodyTextExtractor(type_converter, config), config=config)


def get_history_formatter(config_service: ConfigurationService) -> MessageHistoryFormatter:
    return MessageHistoryFormatter(config=config_service.get_config())
