"""Format-agnostic document tree for treediff.

JSON and YAML inputs are both converted into DocumentNode trees before they
reach the checkers, so the comparison code never sees parser specific types.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .models import ValueType

_INTEGER_PATTERN = re.compile(r'^-?\d+$')


@dataclass(frozen=True)
class DocumentNode:
    """
    A single tagged value of a parsed document.

    Exactly one variant is active per node, named by `type`:

    - NULL: value is None
    - BOOL: value is a bool
    - NUMBER: value is an int or float
    - STRING: value is a str
    - ARRAY: value is a tuple of child nodes
    - OBJECT: value is a read-only mapping of str keys to child nodes,
      in document order

    The capability accessors return None instead of raising when asked for a
    shape the node does not have.
    """
    type: ValueType
    value: Any = None

    def as_object(self) -> Optional[Mapping[str, DocumentNode]]:
        if self.type == ValueType.OBJECT:
            return self.value
        return None

    def as_array(self) -> Optional[tuple[DocumentNode, ...]]:
        if self.type == ValueType.ARRAY:
            return self.value
        return None

    def canonical(self) -> Optional[str]:
        """Deterministic string form of a scalar, None for arrays and objects."""
        if self.type == ValueType.NULL:
            return "null"
        if self.type == ValueType.BOOL:
            return "true" if self.value else "false"
        if self.type == ValueType.NUMBER:
            return _render_number(self.value)
        if self.type == ValueType.STRING:
            return self.value
        return None

    def to_python(self) -> Any:
        """Convert back into plain Python values (dict, list, scalars)."""
        if self.type == ValueType.OBJECT:
            return {key: child.to_python() for key, child in self.value.items()}
        if self.type == ValueType.ARRAY:
            return [child.to_python() for child in self.value]
        return self.value

    def to_json_text(self) -> str:
        """
        Compact JSON rendering of any node, used to compare array elements.

        Object keys are sorted, so objects that differ only in key order
        render the same.
        """
        return json.dumps(
            self.to_python(),
            separators=(",", ":"),
            ensure_ascii=False,
            sort_keys=True,
        )

    @classmethod
    def from_canonical(cls, value_type: ValueType, text: str) -> DocumentNode:
        """Rebuild a scalar node from its canonical rendering."""
        if value_type == ValueType.NULL:
            if text != "null":
                raise ValueError(f"Invalid null rendering: {text!r}")
            return cls(ValueType.NULL)
        if value_type == ValueType.BOOL:
            if text not in ("true", "false"):
                raise ValueError(f"Invalid bool rendering: {text!r}")
            return cls(ValueType.BOOL, text == "true")
        if value_type == ValueType.NUMBER:
            if _INTEGER_PATTERN.match(text):
                return cls(ValueType.NUMBER, int(text))
            return cls(ValueType.NUMBER, float(text))
        if value_type == ValueType.STRING:
            return cls(ValueType.STRING, text)
        raise ValueError(f"{value_type.value} has no scalar rendering")


def build_node(value: Any) -> DocumentNode:
    """
    Convert a value produced by `json` or `yaml.safe_load` into a DocumentNode.

    YAML timestamps become ISO 8601 strings and non-string YAML keys are
    replaced by their canonical rendering.

    Raises:
        TypeError: if the value (or a key) has no document representation
        ValueError: if two keys of one mapping render to the same string
    """
    # bool must be checked before int, bool subclasses int
    if isinstance(value, bool):
        return DocumentNode(ValueType.BOOL, value)
    if value is None:
        return DocumentNode(ValueType.NULL)
    if isinstance(value, (int, float)):
        return DocumentNode(ValueType.NUMBER, value)
    if isinstance(value, str):
        return DocumentNode(ValueType.STRING, value)
    if isinstance(value, date):
        return DocumentNode(ValueType.STRING, value.isoformat())
    if isinstance(value, dict):
        return _build_object(value)
    if isinstance(value, (list, tuple)):
        return DocumentNode(ValueType.ARRAY, tuple(build_node(item) for item in value))

    raise TypeError(f"Unsupported document value type: {type(value).__name__}")


def _build_object(obj: dict) -> DocumentNode:
    children: dict[str, DocumentNode] = {}
    for raw_key, raw_value in obj.items():
        key = _render_key(raw_key)
        if key in children:
            raise ValueError(f"Duplicate key after conversion: {key!r}")
        children[key] = build_node(raw_value)
    return DocumentNode(ValueType.OBJECT, MappingProxyType(children))


def _render_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    node = build_node(key)
    rendered = node.canonical()
    if rendered is None:
        raise TypeError(f"Unsupported mapping key type: {type(key).__name__}")
    return rendered


def _render_number(number: int | float) -> str:
    if isinstance(number, float):
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        return repr(number)
    return str(number)
