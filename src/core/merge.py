"""Structural deep-merge of partial updates into existing records."""

from collections.abc import Mapping
from copy import deepcopy
from typing import Any


def is_mapping(value: Any) -> bool:
    """Return True for keyed mappings (dict-like), never for sequences."""
    return isinstance(value, Mapping)


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``source`` over ``target`` and return a new dict.

    Rules, applied per key of ``source``:

    - mapping value, key absent from target: the value is assigned as-is
    - mapping value, mapping in target: merged recursively
    - anything else (scalar, list, tuple, None): the source value replaces
      the target value

    Sequences are never concatenated. Merging ``{"boards": [b1]}`` over
    ``{"boards": [b0]}`` yields ``{"boards": [b1]}``.

    Neither argument is mutated; values taken from ``source`` are deep-copied.
    """
    output: dict[str, Any] = dict(target)
    for key, value in source.items():
        if is_mapping(value):
            current = target.get(key)
            if key not in target or not is_mapping(current):
                output[key] = deepcopy(dict(value))
            else:
                output[key] = deep_merge(current, value)
        else:
            output[key] = deepcopy(value)
    return output
