"""Per-category diff checkers.

Each checker is a pure recursive function

    checker(path, node_a, node_b, context) -> list of records

that reports exactly one diff category. Checkers share no state, so they can
be run in any order or on their own.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator

from .document import DocumentNode
from .models import (
    ARRAY_TAG_ORDER,
    ArrayDiff,
    ArrayDiffTag,
    KeyDiff,
    TypeDiff,
    ValueDiff,
    WorkingContext,
)
from .utils import build_index_path, build_path


def check_keys(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> list[KeyDiff]:
    """Report keys present on one side only."""
    obj_a = node_a.as_object()
    obj_b = node_b.as_object()

    if obj_a is None or obj_b is None:
        diffs = []
        for child_path, child_a, child_b in _indexed_elements(path, node_a, node_b, context):
            diffs.extend(check_keys(child_path, child_a, child_b, context))
        return diffs

    diffs = []
    for key, child_a in obj_a.items():
        child_path = build_path(path, key)
        child_b = obj_b.get(key)
        if child_b is None:
            diffs.append(KeyDiff(
                path=child_path,
                present_on=context.side_a_label,
                missing_on=context.side_b_label
            ))
        else:
            diffs.extend(check_keys(child_path, child_a, child_b, context))

    for key in obj_b:
        if key not in obj_a:
            diffs.append(KeyDiff(
                path=build_path(path, key),
                present_on=context.side_b_label,
                missing_on=context.side_a_label
            ))

    return diffs


def check_types(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> list[TypeDiff]:
    """Report paths defined on both sides with different type tags."""
    if node_a.type != node_b.type:
        return [TypeDiff(path=path, type_a=node_a.type, type_b=node_b.type)]

    diffs = []
    for child_path, child_a, child_b in _shared_children(path, node_a, node_b, context):
        diffs.extend(check_types(child_path, child_a, child_b, context))
    return diffs


def check_values(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> list[ValueDiff]:
    """Report scalars of the same type whose canonical renderings differ."""
    # Different types are reported by check_types only
    if node_a.type != node_b.type:
        return []

    if node_a.type.is_scalar:
        value_a = node_a.canonical()
        value_b = node_b.canonical()
        if value_a != value_b:
            return [ValueDiff(path=path, value_a=value_a, value_b=value_b)]
        return []

    diffs = []
    for child_path, child_a, child_b in _shared_children(path, node_a, node_b, context):
        diffs.extend(check_values(child_path, child_a, child_b, context))
    return diffs


def check_arrays(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> list[ArrayDiff]:
    """Report array elements without a counterpart on the other side."""
    items_a = node_a.as_array()
    items_b = node_b.as_array()

    if (
        items_a is not None and items_b is not None
        and not _compares_index_wise(items_a, items_b, context)
    ):
        return _multiset_diff(path, items_a, items_b, context)

    diffs = []
    for child_path, child_a, child_b in _shared_children(path, node_a, node_b, context):
        diffs.extend(check_arrays(child_path, child_a, child_b, context))
    return diffs


def _compares_index_wise(
    items_a: tuple[DocumentNode, ...],
    items_b: tuple[DocumentNode, ...],
    context: WorkingContext
) -> bool:
    return context.array_same_order and len(items_a) == len(items_b)


def _shared_children(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> Iterator[tuple[str, DocumentNode, DocumentNode]]:
    """
    Yield (path, child_a, child_b) for every child address both nodes define.

    Objects pair up on the keys they share, in side A's order. Arrays pair up
    index by index, but only when they are compared index-wise.
    """
    obj_a = node_a.as_object()
    obj_b = node_b.as_object()
    if obj_a is not None and obj_b is not None:
        for key, child_a in obj_a.items():
            child_b = obj_b.get(key)
            if child_b is not None:
                yield build_path(path, key), child_a, child_b
        return

    yield from _indexed_elements(path, node_a, node_b, context)


def _indexed_elements(
    path: str,
    node_a: DocumentNode,
    node_b: DocumentNode,
    context: WorkingContext
) -> Iterator[tuple[str, DocumentNode, DocumentNode]]:
    items_a = node_a.as_array()
    items_b = node_b.as_array()
    if items_a is None or items_b is None:
        return
    if not _compares_index_wise(items_a, items_b, context):
        return

    for i, (item_a, item_b) in enumerate(zip(items_a, items_b)):
        yield build_index_path(path, i), item_a, item_b


def _multiset_diff(
    path: str,
    items_a: tuple[DocumentNode, ...],
    items_b: tuple[DocumentNode, ...],
    context: WorkingContext
) -> list[ArrayDiff]:
    rendered_a = [item.to_json_text() for item in items_a]
    rendered_b = [item.to_json_text() for item in items_b]

    a_has = _unmatched(rendered_a, rendered_b)
    b_has = _unmatched(rendered_b, rendered_a)

    # AMisses mirrors BHas and BMisses mirrors AHas
    values_by_tag = {
        ArrayDiffTag.A_HAS: a_has,
        ArrayDiffTag.A_MISSES: b_has,
        ArrayDiffTag.B_HAS: b_has,
        ArrayDiffTag.B_MISSES: a_has,
    }
    if context.mirror_array_tags:
        tags = ARRAY_TAG_ORDER
    else:
        tags = (ArrayDiffTag.A_HAS, ArrayDiffTag.B_HAS)

    return [
        ArrayDiff(path=path, side_tag=tag, value=value)
        for tag in tags
        for value in values_by_tag[tag]
    ]


def _unmatched(items: list[str], other: list[str]) -> list[str]:
    """Items with no one-to-one counterpart in `other`, in input order."""
    available = Counter(other)
    result = []
    for item in items:
        if available[item] > 0:
            available[item] -= 1
        else:
            result.append(item)
    return result
