"""
Fallback-chain field resolution.

A policy maps each normalized field to the ordered raw keys it may be read
from and a default. Producers of the remote collections disagree on field
names, so every screen goes through one policy per resource instead of
re-implementing its own chain.
"""
from typing import Any, Callable, Dict, Mapping, Sequence, Tuple, Union

REQUIRED = object()

Default = Union[Any, Callable[[Dict[str, Any]], Any]]
FieldPolicy = Dict[str, Tuple[Sequence[str], Default]]


def is_present(value: Any) -> bool:
    """
    Whether a raw value counts as set.
    None, empty strings, False and numeric zero fall through to the next key;
    collections (even empty ones) do not.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0
    return True


def resolve_fields(raw: Mapping[str, Any], policy: FieldPolicy) -> Dict[str, Any]:
    """
    Resolve every field of the policy against a raw record.
    
    Defaults may be callables receiving the fields resolved so far, so
    policies are evaluated in declaration order.
    
    Raises:
        ValueError: If a required field has no usable source key
    """
    fields: Dict[str, Any] = {}
    
    for name, (source_keys, default) in policy.items():
        for key in source_keys:
            value = raw.get(key)
            if is_present(value):
                fields[name] = value
                break
        else:
            if default is REQUIRED:
                raise ValueError(f"Missing required field '{name}' (tried {', '.join(source_keys)})")
            fields[name] = default(fields) if callable(default) else default
    
    return fields
