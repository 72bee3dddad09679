"""Convert result dataclasses into camelCase JSON-ready payloads."""

from dataclasses import fields, is_dataclass
from datetime import date


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_payload(obj):
    """Recursively convert dataclasses, lists and dicts, camel-casing field names."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {
            to_camel(f.name): to_payload(getattr(obj, f.name))
            for f in fields(obj)
            if f.repr
        }
    if isinstance(obj, dict):
        return {k: to_payload(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_payload(v) for v in obj]
    if isinstance(obj, date):
        return obj.isoformat()
    return obj
