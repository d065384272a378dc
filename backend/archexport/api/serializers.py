from enum import Enum
from typing import Any


PRIMITIVE_TYPES = (str, int, float, bool, type(None))


def serialize_ir(obj: Any):
    """
    Serialize model objects into JSON-compatible structures.
    Deterministic: key order follows field order.
    """

    if isinstance(obj, PRIMITIVE_TYPES):
        return obj

    # Enums travel as their exchange-format value
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, (list, tuple)):
        return [serialize_ir(item) for item in obj]

    if isinstance(obj, dict):
        return {str(serialize_ir(k)): serialize_ir(v) for k, v in obj.items()}

    # dataclasses
    if hasattr(obj, "__dict__"):
        return {
            key: serialize_ir(value)
            for key, value in obj.__dict__.items()
            if not key.startswith("_")
        }

    return str(obj)
