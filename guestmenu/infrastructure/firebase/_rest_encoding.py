"""Encode/decode Python values to/from Firestore REST API Value objects.

Documents travel as {"name": ..., "fields": {key: Value}}; a Value is a
single-key dict naming its type (stringValue, mapValue, ...).
"""

import base64
from datetime import UTC, datetime
from typing import Any


def encode_value(v: Any) -> dict:
    """Convert one Python value to a Firestore Value."""
    if v is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass.
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        aware = v if v.tzinfo is not None else v.replace(tzinfo=UTC)
        return {
            "timestampValue": aware.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
        }
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": encode_fields(v)}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_fields(data: dict[str, Any]) -> dict[str, dict]:
    """Convert a Python dict to a Firestore fields map."""
    return {str(k): encode_value(x) for k, x in data.items()}


def _parse_timestamp(raw: str) -> datetime:
    # Firestore emits up to nanosecond precision; fromisoformat takes microseconds.
    raw = raw.replace("Z", "+00:00")
    if "." in raw:
        head, _, rest = raw.partition(".")
        frac, sign, offset = rest.partition("+")
        if not sign:
            frac, sign, offset = rest.partition("-")
        raw = f"{head}.{frac[:6].ljust(6, '0')}{sign}{offset}"
    return datetime.fromisoformat(raw)


def decode_value(obj: dict) -> Any:
    """Convert one Firestore Value to a Python value."""
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return float(obj["doubleValue"])
    if "timestampValue" in obj:
        return _parse_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "referenceValue" in obj:
        return obj["referenceValue"]
    if "geoPointValue" in obj:
        point = obj["geoPointValue"]
        return {"latitude": point.get("latitude", 0.0), "longitude": point.get("longitude", 0.0)}
    if "arrayValue" in obj:
        return [decode_value(x) for x in obj["arrayValue"].get("values") or []]
    if "mapValue" in obj:
        return decode_fields(obj["mapValue"].get("fields"))
    return None


def decode_fields(fields: dict | None) -> dict[str, Any]:
    """Convert a Firestore fields map to a Python dict."""
    if not fields:
        return {}
    return {k: decode_value(v) for k, v in fields.items()}


def decode_document(document: dict | None) -> dict[str, Any]:
    """Return the data of a Firestore Document resource ({"name", "fields", ...})."""
    if not document:
        return {}
    return decode_fields(document.get("fields"))
