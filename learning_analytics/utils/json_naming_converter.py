from __future__ import annotations

from typing import Any


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def convert_keys_snake_to_camel(value: Any) -> Any:
    """Recursively rename dict keys from snake_case to camelCase."""
    if isinstance(value, dict):
        return {
            (snake_to_camel(key) if isinstance(key, str) else key): convert_keys_snake_to_camel(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [convert_keys_snake_to_camel(item) for item in value]
    return value
