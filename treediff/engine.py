"""Main comparison engine for treediff."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from .checkers import check_arrays, check_keys, check_types, check_values
from .document import DocumentNode, build_node
from .exceptions import NonObjectRootError
from .models import DiffCategory, DiffCollection, ValueType, WorkingContext
from .utils import ROOT_PATH

logger = logging.getLogger(__name__)

Checker = Callable[[str, DocumentNode, DocumentNode, WorkingContext], list]

CHECKERS: dict[DiffCategory, Checker] = {
    DiffCategory.KEY: check_keys,
    DiffCategory.TYPE: check_types,
    DiffCategory.VALUE: check_values,
    DiffCategory.ARRAY: check_arrays,
}


class DiffEngine:
    """
    Runs the enabled checkers over two documents and collects their records.

    Each checker starts at the root path and walks side A's structure
    depth-first. Categories that are not enabled in the context are left as
    None in the result, enabled categories always produce a list.
    """

    def compare(
        self,
        doc_a: DocumentNode | dict,
        doc_b: DocumentNode | dict,
        context: WorkingContext
    ) -> DiffCollection:
        """
        Compare two object-rooted documents.

        Args:
            doc_a: Side A, a DocumentNode or a plain dict as produced by a parser
            doc_b: Side B, same forms as doc_a
            context: Labels, array ordering policy and enabled categories

        Returns:
            DiffCollection with one list per enabled category
        """
        root_a = self._as_document(doc_a, context.side_a_label)
        root_b = self._as_document(doc_b, context.side_b_label)

        results: dict[DiffCategory, Optional[list]] = {}
        for category, checker in CHECKERS.items():
            if not context.is_enabled(category):
                results[category] = None
                continue

            start_time = time.perf_counter()
            records = checker(ROOT_PATH, root_a, root_b, context)
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(
                "%s checker found %d differences in %.2fms",
                category.value, len(records), duration_ms
            )
            results[category] = records

        collection = DiffCollection(
            key_diffs=results[DiffCategory.KEY],
            type_diffs=results[DiffCategory.TYPE],
            value_diffs=results[DiffCategory.VALUE],
            array_diffs=results[DiffCategory.ARRAY],
        )
        logger.debug(
            "Compared %s with %s: %d differences",
            context.side_a_label, context.side_b_label, collection.total
        )
        return collection

    def _as_document(self, doc: Any, label: str) -> DocumentNode:
        node = doc if isinstance(doc, DocumentNode) else build_node(doc)
        if node.type != ValueType.OBJECT:
            raise NonObjectRootError(label, node.type.value)
        return node


def compare(
    doc_a: DocumentNode | dict,
    doc_b: DocumentNode | dict,
    context: WorkingContext
) -> DiffCollection:
    """
    Convenience function to compare two documents.

    Args:
        doc_a: Side A document
        doc_b: Side B document
        context: Run configuration

    Returns:
        DiffCollection with one list per enabled category
    """
    engine = DiffEngine()
    return engine.compare(doc_a, doc_b, context)
