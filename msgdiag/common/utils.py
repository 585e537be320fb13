from pathlib import Path
from typing import Any, Optional


def get_app_dir() -> Path:
    return Path.home() / '.msgdiag'


def type_name(value: Any) -> Optional[str]:
    """Canonical type name of ``value`` with the ``builtins.`` prefix dropped.

    Returns None for None or when the type carries no usable name.
    """
    if value is None:
        return None
    cls = type(value)
    qualname = getattr(cls, '__qualname__', None)
    if not qualname or '<locals>' in qualname:
        return None
    module = getattr(cls, '__module__', None)
    if not module or module == 'builtins':
        return qualname
    return f'{module}.{qualname}'
