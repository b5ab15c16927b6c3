"""Data models for treediff."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ValueType(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_scalar(self) -> bool:
        return self not in (ValueType.ARRAY, ValueType.OBJECT)


class DiffCategory(Enum):
    KEY = "key"
    TYPE = "type"
    VALUE = "value"
    ARRAY = "array"


class ArrayDiffTag(Enum):
    A_HAS = "AHas"
    A_MISSES = "AMisses"
    B_HAS = "BHas"
    B_MISSES = "BMisses"


# Emission order of array diff records for a single array path
ARRAY_TAG_ORDER = (
    ArrayDiffTag.A_HAS,
    ArrayDiffTag.A_MISSES,
    ArrayDiffTag.B_HAS,
    ArrayDiffTag.B_MISSES,
)


@dataclass(frozen=True)
class WorkingContext:
    """Run configuration shared read-only by every checker."""
    side_a_label: str
    side_b_label: str
    array_same_order: bool = False
    enabled_categories: frozenset = frozenset(DiffCategory)
    mirror_array_tags: bool = True

    def is_enabled(self, category: DiffCategory) -> bool:
        return category in self.enabled_categories

    def to_dict(self) -> dict:
        return {
            "file_a": self.side_a_label,
            "file_b": self.side_b_label,
            "array_same_order": self.array_same_order,
            "check_for_key_diffs": self.is_enabled(DiffCategory.KEY),
            "check_for_type_diffs": self.is_enabled(DiffCategory.TYPE),
            "check_for_value_diffs": self.is_enabled(DiffCategory.VALUE),
            "check_for_array_diffs": self.is_enabled(DiffCategory.ARRAY),
            "mirror_array_tags": self.mirror_array_tags,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WorkingContext:
        flags = {
            DiffCategory.KEY: "check_for_key_diffs",
            DiffCategory.TYPE: "check_for_type_diffs",
            DiffCategory.VALUE: "check_for_value_diffs",
            DiffCategory.ARRAY: "check_for_array_diffs",
        }
        return cls(
            side_a_label=data["file_a"],
            side_b_label=data["file_b"],
            array_same_order=bool(data.get("array_same_order", False)),
            enabled_categories=frozenset(
                category for category, flag in flags.items() if data.get(flag)
            ),
            mirror_array_tags=bool(data.get("mirror_array_tags", True)),
        )


@dataclass(frozen=True)
class KeyDiff:
    """A key present on one side and missing on the other."""
    path: str
    present_on: str
    missing_on: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "present_on": self.present_on,
            "missing_on": self.missing_on,
        }

    @classmethod
    def from_dict(cls, data: dict) -> KeyDiff:
        return cls(data["path"], data["present_on"], data["missing_on"])


@dataclass(frozen=True)
class TypeDiff:
    """Both sides define the path but with different type tags."""
    path: str
    type_a: ValueType
    type_b: ValueType

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "type_a": self.type_a.value,
            "type_b": self.type_b.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TypeDiff:
        return cls(data["path"], ValueType(data["type_a"]), ValueType(data["type_b"]))


@dataclass(frozen=True)
class ValueDiff:
    """Two scalars of the same type whose canonical renderings differ."""
    path: str
    value_a: str
    value_b: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "value_a": self.value_a,
            "value_b": self.value_b,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ValueDiff:
        return cls(data["path"], data["value_a"], data["value_b"])


@dataclass(frozen=True)
class ArrayDiff:
    """One multiset membership fact about an array pair."""
    path: str
    side_tag: ArrayDiffTag
    value: str

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "side_tag": self.side_tag.value,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ArrayDiff:
        return cls(data["path"], ArrayDiffTag(data["side_tag"]), data["value"])


@dataclass
class DiffCollection:
    """
    Result of one comparison run.

    A category that was not enabled is None, an enabled category without
    findings is an empty list.
    """
    key_diffs: Optional[list[KeyDiff]] = None
    type_diffs: Optional[list[TypeDiff]] = None
    value_diffs: Optional[list[ValueDiff]] = None
    array_diffs: Optional[list[ArrayDiff]] = None

    def get(self, category: DiffCategory) -> Optional[list]:
        return {
            DiffCategory.KEY: self.key_diffs,
            DiffCategory.TYPE: self.type_diffs,
            DiffCategory.VALUE: self.value_diffs,
            DiffCategory.ARRAY: self.array_diffs,
        }[category]

    @property
    def total(self) -> int:
        return sum(len(self.get(category) or []) for category in DiffCategory)

    @property
    def is_match(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict:
        def dump(records):
            if records is None:
                return None
            return [r.to_dict() for r in records]

        return {
            "key_diff": dump(self.key_diffs),
            "type_diff": dump(self.type_diffs),
            "value_diff": dump(self.value_diffs),
            "array_diff": dump(self.array_diffs),
        }

    @classmethod
    def from_dict(cls, data: dict) -> DiffCollection:
        def load(name, record_cls):
            records = data.get(name)
            if records is None:
                return None
            return [record_cls.from_dict(r) for r in records]

        return cls(
            key_diffs=load("key_diff", KeyDiff),
            type_diffs=load("type_diff", TypeDiff),
            value_diffs=load("value_diff", ValueDiff),
            array_diffs=load("array_diff", ArrayDiff),
        )

    def summary_lines(self, context: WorkingContext) -> list[str]:
        """Plain text report of every enabled category."""
        a, b = context.side_a_label, context.side_b_label
        lines = []

        if self.key_diffs is not None:
            lines.append(f"Key differences: {len(self.key_diffs)}")
            for d in self.key_diffs:
                lines.append(f"  - {d.path}: only in {d.present_on}, missing in {d.missing_on}")

        if self.type_diffs is not None:
            lines.append(f"Type differences: {len(self.type_diffs)}")
            for d in self.type_diffs:
                lines.append(
                    f"  - {d.path}: {a}={d.type_a.value}, {b}={d.type_b.value}"
                )

        if self.value_diffs is not None:
            lines.append(f"Value differences: {len(self.value_diffs)}")
            for d in self.value_diffs:
                lines.append(f"  - {d.path}: {a}={d.value_a!r}, {b}={d.value_b!r}")

        if self.array_diffs is not None:
            lines.append(f"Array differences: {len(self.array_diffs)}")
            for path, only_a, only_b in _group_array_diffs(self.array_diffs):
                lines.append(f"  - {path}:")
                if only_a:
                    lines.append(f"      only {a} contains: {', '.join(only_a)}")
                if only_b:
                    lines.append(f"      only {b} contains: {', '.join(only_b)}")

        return lines

    def print_summary(self, context: WorkingContext):
        status = "no differences" if self.is_match else f"{self.total} differences"
        print(f"\nComparing {context.side_a_label} with {context.side_b_label}: {status}")
        for line in self.summary_lines(context):
            print(line)


@dataclass
class _ArrayGroup:
    only_a: list[str] = field(default_factory=list)
    only_b: list[str] = field(default_factory=list)


def _group_array_diffs(diffs: list[ArrayDiff]) -> list[tuple[str, list[str], list[str]]]:
    """Group array diffs per path, keeping first-seen path order."""
    groups: dict[str, _ArrayGroup] = {}
    for d in diffs:
        group = groups.setdefault(d.path, _ArrayGroup())
        if d.side_tag == ArrayDiffTag.A_HAS:
            group.only_a.append(d.value)
        elif d.side_tag == ArrayDiffTag.B_HAS:
            group.only_b.append(d.value)
    return [(path, g.only_a, g.only_b) for path, g in groups.items()]
