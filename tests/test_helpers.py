"""Tests for the free-function entry points."""

import io
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import msgdiag
from msgdiag import Endpoint, Exchange, Message, MessageHistoryEntry, PipelineContext
from msgdiag.body.converter import TypeConverter
from msgdiag.body.streams import InputStreamCache
from msgdiag.observability.exchange_formatter import DefaultExchangeFormatter


def make_message(body=None, headers=None, **properties):
    exchange = Exchange(exchange_id='ex-1', context=PipelineContext(properties=properties), message=Message(body=body, headers=headers or {}))
    return exchange.message


def test_extract_body_for_logging_defaults():
    message = make_message('A' * 1500)
    assert msgdiag.extract_body_for_logging(message) == 'Message: ' + 'A' * 1000 + '... [Body clipped after 1000 chars, total length is 1500]'


def test_extract_body_for_logging_explicit():
    message = make_message(io.BytesIO(b'raw'))
    assert msgdiag.extract_body_for_logging(message, 'Body: ', False, False, 1000) == 'Body: [Body is instance of RawInputStream]'
    assert msgdiag.extract_body_for_logging(message, 'Body: ', True, False, 1000) == 'Body: raw'


def test_extract_body_for_logging_injected_converter():
    converter = Mock(spec=TypeConverter)
    converter.convert_to.return_value = 'via converter'
    assert msgdiag.extract_body_for_logging(Message(body=object()), '', False, False, 0, type_converter=converter) == 'via converter'


def test_dump_as_xml_defaults():
    cache = InputStreamCache(b'cached')
    message = make_message(cache, {'b': 1, 'a': 'x'})

    xml = msgdiag.dump_as_xml(message)

    assert xml == (
        '<message exchangeId="ex-1">\n'
        '  <headers>\n'
        '    <header key="a" type="str">x</header>\n'
        '    <header key="b" type="int">1</header>\n'
        '  </headers>\n'
        '  <body type="msgdiag.body.streams.InputStreamCache">[Body is instance of ResettableStream]</body>\n'
        '</message>'
    )


def test_dump_as_xml_with_streams_keeps_cache_rereadable():
    cache = InputStreamCache(b'cached')
    message = make_message(cache)

    assert '>cached</body>' in msgdiag.dump_as_xml(message, True, 0, True, True, 1000)
    assert '>cached</body>' in msgdiag.dump_as_xml(message, True, 0, True, True, 1000)


def test_dump_message_history_stacktrace():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    exchange = Exchange(exchange_id='ex-1', from_route_id='route1', from_endpoint=Endpoint('timer://tick'), message=Message(body='hi'))
    exchange.set_property(Exchange.CREATED_TIMESTAMP, created)
    exchange.set_property(Exchange.MESSAGE_HISTORY, [MessageHistoryEntry('route1', 'log1', 'log', 2)])

    text = msgdiag.dump_message_history_stacktrace(
        exchange, DefaultExchangeFormatter(), True, clock=lambda: created + timedelta(seconds=2)
    )

    assert '[timer://tick' in text
    assert '[      2000]' in text
    assert 'Exchange[Id: ex-1, Headers: {}, BodyType: str, Body: hi]' in text
    assert text.endswith('Stacktrace\n' + '-' * 139)


def test_dump_message_history_stacktrace_without_history():
    assert msgdiag.dump_message_history_stacktrace(Exchange()) is None


def test_copy_headers():
    source, target = Message(headers={'a': 1}), Message(headers={'a': 0, 'b': 2})
    msgdiag.copy_headers(source, target, False)
    assert target.headers == {'a': 0, 'b': 2}
    msgdiag.copy_headers(source, target, True)
    assert target.headers == {'a': 1, 'b': 2}


def test_extract_body_as_string():
    cache = InputStreamCache(b'full body')
    message = make_message(cache)
    assert msgdiag.extract_body_as_string(message) == 'full body'
    assert cache.read_text() == 'full body'
    assert msgdiag.extract_body_as_string(Message()) is None


def test_get_body_type_name():
    assert msgdiag.get_body_type_name(Message(body='x')) == 'str'
    assert msgdiag.get_body_type_name(Message(body=InputStreamCache(b''))) == 'msgdiag.body.streams.InputStreamCache'
    assert msgdiag.get_body_type_name(Message()) is None
    assert msgdiag.get_body_type_name(None) is None


def test_reset_stream_cache():
    cache = InputStreamCache(b'abc')
    cache.read_text()
    msgdiag.reset_stream_cache(Message(body=cache))
    assert cache.read_text() == 'abc'


def test_content_type_and_encoding():
    message = make_message(headers={Exchange.CONTENT_TYPE: 'text/plain', Exchange.CONTENT_ENCODING: b'gzip'})
    assert msgdiag.get_content_type(message) == 'text/plain'
    assert msgdiag.get_content_encoding(message) == 'gzip'
    assert msgdiag.get_content_type(Message()) is None
