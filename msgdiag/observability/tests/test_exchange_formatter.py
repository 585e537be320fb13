import io

from msgdiag.body.extractor import BodyTextExtractor
from msgdiag.observability.exchange_formatter import DefaultExchangeFormatter
from msgdiag.routing.exchange import Exchange, Message, MessageHistoryEntry


def make_exchange(body='hello', headers=None):
    return Exchange(exchange_id='abc', from_route_id='route1', message=Message(body=body, headers=headers if headers is not None else {'b': 2, 'a': 1}))


def test_default_format():
    assert DefaultExchangeFormatter().format(make_exchange()) == "Exchange[Id: abc, Headers: {'a': 1, 'b': 2}, BodyType: str, Body: hello]"


def test_multiline():
    formatter = DefaultExchangeFormatter(show_headers=False, multiline=True)
    assert formatter.format(make_exchange()) == 'Exchange[\n  Id: abc\n  BodyType: str\n  Body: hello\n]'


def test_route_and_properties_skip_history():
    exchange = make_exchange()
    exchange.set_property('z', 1)
    exchange.set_property('a', 2)
    exchange.set_property(Exchange.MESSAGE_HISTORY, [MessageHistoryEntry('r', 'n', 'l', 1)])
    formatter = DefaultExchangeFormatter(show_exchange_id=False, show_route_id=True, show_properties=True, show_headers=False, show_body_type=False, show_body=False)

    assert formatter.format(exchange) == "Exchange[RouteId: route1, Properties: {'a': 2, 'z': 1}]"


def test_stream_body_placeholder():
    stream = io.BytesIO(b'data')
    text = DefaultExchangeFormatter(show_headers=False).format(make_exchange(body=stream))
    assert 'Body: [Body is instance of RawInputStream]' in text
    assert stream.tell() == 0


def test_body_clipped():
    formatter = DefaultExchangeFormatter(BodyTextExtractor(), show_exchange_id=False, show_headers=False, show_body_type=False, max_chars=2)
    assert formatter.format(make_exchange(body='abcd')) == 'Exchange[Body: ab... [Body clipped after 2 chars, total length is 4]]'
