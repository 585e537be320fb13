"""Header ordering and copying between messages."""

from typing import Any, Dict, List, Mapping, Tuple

from msgdiag.routing.exchange import Message


def sorted_headers(headers: Mapping[str, Any]) -> List[Tuple[str, Any]]:
    """Return header items in ascending key order so dumps are deterministic."""
    if not headers:
        return []
    return sorted(headers.items(), key=lambda item: item[0])


def copy_headers(source: Message, target: Message, override: bool) -> None:
    """Copy headers from ``source`` to ``target``.

    Existing target values are kept unless ``override`` is set. Values are
    copied by reference.
    """
    if not source.has_headers():
        return

    for key, value in list(source.headers.items()):
        if override or target.get_header(key) is None:
            target.set_header(key, value)


def header_snapshot(message: Message) -> Dict[str, Any]:
    """Shallow, key-sorted copy of the message headers."""
    return dict(sorted_headers(message.headers))
