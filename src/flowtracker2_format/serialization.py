"""
Conversion of output records to JSON-ready structures.
"""

import dataclasses
import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional


def to_native(obj: Any) -> Any:
    """
    Convert records to native Python types for JSON serialization.

    Handles:
    - dataclasses (to dicts, field order preserved)
    - enums (to their values)
    - datetimes (ISO 8601, UTC with Z suffix)
    - floats (NaN/Inf converted to None)
    - numpy scalars (via .item())
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_native(getattr(obj, f.name)) for f in dataclasses.fields(obj)}

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, datetime):
        return format_iso(obj)

    if isinstance(obj, dict):
        return {str(k): to_native(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [to_native(item) for item in obj]

    if hasattr(obj, "item") and not isinstance(obj, (str, bytes)):
        obj = obj.item()

    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        # NaN and Inf are not valid JSON
        return None

    return obj


def format_iso(dt: datetime) -> str:
    """Format datetime as ISO 8601 string with Z suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.isoformat().replace("+00:00", "Z")


def remove_nulls(obj: Any) -> Any:
    """Recursively remove null values from dicts."""
    if isinstance(obj, dict):
        return {k: remove_nulls(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, list):
        return [remove_nulls(item) for item in obj]
    return obj


def to_json(obj: Any, indent: Optional[int] = 2, include_nulls: bool = False) -> str:
    """
    Serialize records to a JSON string.

    Args:
        obj: Record, or structure of records
        indent: JSON indentation (None for compact)
        include_nulls: Whether to include null values
    """
    native = to_native(obj)
    if not include_nulls:
        native = remove_nulls(native)
    return json.dumps(native, indent=indent, default=str)
