import json
from typing import Any


def to_json(data: Any, indent: int = 4, ensure_ascii: bool = False) -> str:
    """
    Serializes a command value for display or export.

    Values JSON has no representation for (datetimes, paths, models) are
    written with str() instead of failing the export.
    """
    return json.dumps(data, indent=indent, ensure_ascii=ensure_ascii, default=str)
