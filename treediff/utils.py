"""Path building helpers for treediff."""

from __future__ import annotations

ROOT_PATH = ""


def build_path(parent_path: str, key: str | int) -> str:
    """
    Build a location string from a parent path and a child key or index.

    Object keys are joined with a dot (no leading dot at the root) and array
    indices are appended as "[i]" with no separator, e.g. "nested.array[2]".
    Keys are used verbatim, never quoted or escaped.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return build_index_path(parent_path, key)
    if parent_path == ROOT_PATH:
        return key
    return f"{parent_path}.{key}"


def build_index_path(parent_path: str, index: int) -> str:
    """Build the location string of an array element."""
    return f"{parent_path}[{index}]"
