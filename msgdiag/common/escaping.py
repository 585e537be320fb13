"""XML text escaping for diagnostic dumps."""

import re

# Characters that are not allowed in XML 1.0 documents, even as references.
_INVALID_XML_CHARS = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\uFFFE\uFFFF]')

_ENTITIES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
}


def xml_escape(text: str) -> str:
    """Escape ``text`` so it can be placed in element content or an attribute value."""
    if not text:
        return ''
    escaped = ''.join(_ENTITIES.get(ch, ch) for ch in text)
    return _INVALID_XML_CHARS.sub('\uFFFD', escaped)
