"""
treediff - Structural diff engine for JSON and YAML documents

Compares two object-rooted documents and reports, per location, missing
keys, type mismatches, differing scalar values and differing array contents.
"""

from .engine import DiffEngine, compare
from .config import ConfigBuilder
from .document import DocumentNode, build_node
from .loader import (
    DocumentFormat,
    load_document,
    parse_document,
    parse_json,
    parse_yaml,
)
from .models import (
    WorkingContext,
    DiffCollection,
    DiffCategory,
    KeyDiff,
    TypeDiff,
    ValueDiff,
    ArrayDiff,
    ArrayDiffTag,
    ValueType,
)
from .storage import save_results, load_results
from .exceptions import (
    TreeDiffError,
    DocumentParseError,
    DocumentReadError,
    NonObjectRootError,
    ConfigError,
    ResultStoreError,
)

__version__ = "0.3.0"
__all__ = [
    # Engine
    "DiffEngine",
    "compare",
    "ConfigBuilder",
    "WorkingContext",
    # Documents
    "DocumentNode",
    "build_node",
    "DocumentFormat",
    "load_document",
    "parse_document",
    "parse_json",
    "parse_yaml",
    # Results
    "DiffCollection",
    "DiffCategory",
    "KeyDiff",
    "TypeDiff",
    "ValueDiff",
    "ArrayDiff",
    "ArrayDiffTag",
    "ValueType",
    "save_results",
    "load_results",
    # Errors
    "TreeDiffError",
    "DocumentParseError",
    "DocumentReadError",
    "NonObjectRootError",
    "ConfigError",
    "ResultStoreError",
]
