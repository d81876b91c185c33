"""Text helpers shared by tool handlers"""

import json
from typing import Any

from pydantic import BaseModel

BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def to_json(data: Any) -> str:
    """Pretty JSON for response payloads; models are dumped with wire names"""
    if isinstance(data, BaseModel):
        data = data.to_wire() if hasattr(data, "to_wire") else data.model_dump(by_alias=True)
    elif isinstance(data, list):
        data = [item.to_wire() if hasattr(item, "to_wire") else item for item in data]
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_number(value: float) -> str:
    """
    Render a number the short way: integral values without a decimal part

    Examples:
        4.0 -> "4", 2.5 -> "2.5", 0.1 + 0.2 -> "0.30000000000000004"
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_bytes(num_bytes: float) -> str:
    """
    Human readable byte count

    Examples:
        0 -> "0 Bytes", 1024 -> "1 KB", 1536 -> "1.5 KB"
    """
    if num_bytes <= 0:
        return "0 Bytes"
    index = 0
    while index < len(BYTE_UNITS) - 1 and num_bytes >= 1024 ** (index + 1):
        index += 1
    scaled = round(num_bytes / 1024 ** index, 2)
    return f"{format_number(float(scaled))} {BYTE_UNITS[index]}"
