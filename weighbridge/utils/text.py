"""Text field cleanup for JSON payloads."""
from typing import Any, Optional


def clean_text(value: Any) -> Optional[str]:
    """
    Strip a JSON scalar to text; blank strings become None.

    Numbers are accepted and rendered with str() (a plate sent as 1234).

    Raises:
        ValueError: for objects, arrays and booleans.
    """
    if value is None:
        return None
    if isinstance(value, (dict, list, bool)):
        raise ValueError('expected text')
    return str(value).strip() or None
