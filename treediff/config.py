"""Build validated WorkingContext instances."""

from __future__ import annotations

from typing import Optional

from .exceptions import ConfigError
from .models import DiffCategory, WorkingContext


class ConfigBuilder:
    """
    Fluent helper for creating a WorkingContext.

    Usage:
        context = (
            ConfigBuilder()
            .file_a("old.json")
            .file_b("new.json")
            .check_for_key_diffs(True)
            .check_for_value_diffs(True)
            .build()
        )

    Nothing is checked until build(), which requires both side labels and at
    least one enabled category.
    """

    def __init__(self):
        self._file_a: Optional[str] = None
        self._file_b: Optional[str] = None
        self._array_same_order = False
        self._mirror_array_tags = True
        self._categories: set[DiffCategory] = set()

    def file_a(self, label: str) -> ConfigBuilder:
        self._file_a = label
        return self

    def file_b(self, label: str) -> ConfigBuilder:
        self._file_b = label
        return self

    def array_same_order(self, enabled: bool) -> ConfigBuilder:
        self._array_same_order = enabled
        return self

    def mirror_array_tags(self, enabled: bool) -> ConfigBuilder:
        self._mirror_array_tags = enabled
        return self

    def check_for_key_diffs(self, enabled: bool) -> ConfigBuilder:
        return self._toggle(DiffCategory.KEY, enabled)

    def check_for_type_diffs(self, enabled: bool) -> ConfigBuilder:
        return self._toggle(DiffCategory.TYPE, enabled)

    def check_for_value_diffs(self, enabled: bool) -> ConfigBuilder:
        return self._toggle(DiffCategory.VALUE, enabled)

    def check_for_array_diffs(self, enabled: bool) -> ConfigBuilder:
        return self._toggle(DiffCategory.ARRAY, enabled)

    def check_all(self) -> ConfigBuilder:
        self._categories = set(DiffCategory)
        return self

    def _toggle(self, category: DiffCategory, enabled: bool) -> ConfigBuilder:
        if enabled:
            self._categories.add(category)
        else:
            self._categories.discard(category)
        return self

    def build(self) -> WorkingContext:
        if not self._file_a:
            raise ConfigError("Side A label is required")
        if not self._file_b:
            raise ConfigError("Side B label is required")
        if not self._categories:
            raise ConfigError(
                "At least one diff category must be enabled",
                {"categories": [c.value for c in DiffCategory]}
            )

        return WorkingContext(
            side_a_label=self._file_a,
            side_b_label=self._file_b,
            array_same_order=self._array_same_order,
            enabled_categories=frozenset(self._categories),
            mirror_array_tags=self._mirror_array_tags,
        )
