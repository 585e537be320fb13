"""Endpoint URI sanitization for diagnostic output."""

from typing import Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

MASK = 'xxxxxx'


class UriSanitizer:
    """Mask credentials embedded in endpoint URIs before they are logged."""

    def __init__(self, redact_parameters: Optional[Iterable[str]] = None):
        base_sensitive = {'password', 'passphrase', 'passwd', 'secret', 'secretkey', 'accesstoken', 'accesskey', 'clientsecret', 'apikey', 'token'}
        additional = {value.lower() for value in (redact_parameters or [])}
        self.sensitive_parameters = base_sensitive | additional

    def sanitize(self, uri: Optional[str]) -> Optional[str]:
        if not uri:
            return uri
        parts = urlsplit(uri)

        netloc = parts.netloc
        if '@' in netloc:
            userinfo, host = netloc.rsplit('@', 1)
            if ':' in userinfo:
                user = userinfo.split(':', 1)[0]
                netloc = f'{user}:{MASK}@{host}'

        query = parts.query
        if query:
            pairs = parse_qsl(query, keep_blank_values=True)
            masked = [(key, MASK if key.lower() in self.sensitive_parameters else value) for key, value in pairs]
            if masked != pairs:
                query = urlencode(masked, safe=':/')

        if netloc == parts.netloc and query == parts.query:
            return uri
        return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


_default_sanitizer = UriSanitizer()


def sanitize_uri(uri: Optional[str]) -> Optional[str]:
    """Sanitize ``uri`` with the built-in list of secret parameter names."""
    return _default_sanitizer.sanitize(uri)
