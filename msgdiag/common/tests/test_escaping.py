import pytest

from msgdiag.common.escaping import xml_escape
from msgdiag.common.utils import type_name


@pytest.mark.parametrize("text,expected", [
    ('plain', 'plain'),
    ('a & b', 'a &amp; b'),
    ('<tag attr="v">', '&lt;tag attr=&quot;v&quot;&gt;'),
    ("it's", "it's"),
    ('', ''),
    ('line1\nline2\ttab', 'line1\nline2\ttab'),
])
def test_xml_escape(text, expected):
    assert xml_escape(text) == expected


def test_xml_escape_replaces_characters_invalid_in_xml():
    assert xml_escape('a\x00b\x1bc') == 'a\ufffdb\ufffdc'


def test_xml_escape_none_is_empty():
    assert xml_escape(None) == ''


class TestTypeName:
    def test_builtin_prefix_is_stripped(self):
        assert type_name('x') == 'str'
        assert type_name(1) == 'int'
        assert type_name(b'') == 'bytes'

    def test_module_qualified_name(self):
        from decimal import Decimal

        assert type_name(Decimal('1')) == 'decimal.Decimal'

    def test_none_has_no_type(self):
        assert type_name(None) is None

    def test_local_class_is_unresolvable(self):
        class Local:
            pass

        assert type_name(Local()) is None
