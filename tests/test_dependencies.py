from msgdiag.config import ConfigurationService
from msgdiag.dependencies import get_extractor, get_history_formatter, get_xml_dumper
from msgdiag.routing.exchange import Endpoint, Exchange, Message, MessageHistoryEntry


def make_service(tmp_path, text):
    path = tmp_path / 'msgdiag.yaml'
    path.write_text(text)
    return ConfigurationService(str(path))


def test_extractor_uses_loaded_config(tmp_path):
    service = make_service(tmp_path, 'log_debug_body_max_chars: 3\n')
    assert get_extractor(service).extract_for_logging(Message(body='abcdef')) == 'Message: abc... [Body clipped after 3 chars, total length is 6]'


def test_xml_dumper_uses_loaded_config(tmp_path):
    service = make_service(tmp_path, 'dump_include_body: false\ndump_indent: 2\n')
    assert get_xml_dumper(service).dump(Message(body='x')) == '  <message>\n  </message>'


def test_history_formatter_uses_loaded_config(tmp_path):
    service = make_service(tmp_path, 'redact_uri_parameters:\n  - sig\n')
    exchange = Exchange(from_route_id='r', from_endpoint=Endpoint('http://host/hook?sig=abc'))
    exchange.set_property(Exchange.MESSAGE_HISTORY, [MessageHistoryEntry('r', 'n', 'label', 1)])

    assert 'http://host/hook?sig=xxxxxx' in get_history_formatter(service).format(exchange)


def test_reload_is_picked_up_by_new_services(tmp_path):
    service = make_service(tmp_path, 'log_debug_body_max_chars: 3\n')
    (tmp_path / 'msgdiag.yaml').write_text('log_debug_body_max_chars: 0\n')
    service.reload_config()
    assert get_extractor(service).extract_for_logging(Message(body='abcdef'), '') == 'abcdef'
