"""Load JSON and YAML documents into DocumentNode trees."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .document import DocumentNode, build_node
from .exceptions import DocumentParseError, DocumentReadError, NonObjectRootError
from .models import ValueType

logger = logging.getLogger(__name__)


class DocumentFormat(Enum):
    JSON = "json"
    YAML = "yaml"


_SUFFIX_FORMATS = {
    ".json": DocumentFormat.JSON,
    ".yaml": DocumentFormat.YAML,
    ".yml": DocumentFormat.YAML,
}


def detect_format(path: Union[str, Path]) -> DocumentFormat:
    """Pick the document format from a file suffix."""
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise DocumentParseError(
            f"Unknown document format '{suffix or '<none>'}', "
            f"expected one of {', '.join(sorted(_SUFFIX_FORMATS))}",
            source=str(path)
        ) from None


def load_document(
    path: Union[str, Path],
    fmt: Optional[DocumentFormat] = None
) -> DocumentNode:
    """
    Read and parse a document file.

    Args:
        path: Path to a .json, .yaml or .yml file
        fmt: Force a format instead of detecting it from the suffix

    Returns:
        The object-rooted DocumentNode

    Raises:
        FileNotFoundError: if the file does not exist
        DocumentReadError: if the file cannot be read
        DocumentParseError: if the content is malformed or not UTF-8
        NonObjectRootError: if the root is not an object
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")

    fmt = fmt or detect_format(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise DocumentParseError(
            f"File is not valid UTF-8 ({e.reason} at byte {e.start})",
            source=str(path)
        ) from e
    except OSError as e:
        raise DocumentReadError(str(path), e.strerror or str(e)) from e

    logger.info("Loading %s document from %s", fmt.value, path)
    return parse_document(content, fmt, source=str(path))


def parse_document(
    text: str,
    fmt: DocumentFormat,
    source: str = "<string>"
) -> DocumentNode:
    """Parse document text of the given format."""
    if fmt == DocumentFormat.JSON:
        return parse_json(text, source)
    return parse_yaml(text, source)


def parse_json(text: str, source: str = "<string>") -> DocumentNode:
    """Parse JSON text into an object-rooted DocumentNode."""
    try:
        data = json.loads(
            text,
            object_pairs_hook=_reject_duplicate_keys,
            parse_constant=_reject_constant
        )
    except json.JSONDecodeError as e:
        raise DocumentParseError(e.msg, source, e.lineno, e.colno) from e
    except ValueError as e:
        raise DocumentParseError(str(e), source) from e

    return _to_root_node(data, source)


def parse_yaml(text: str, source: str = "<string>") -> DocumentNode:
    """Parse YAML text into an object-rooted DocumentNode."""
    try:
        data = yaml.safe_load(text)
    except yaml.MarkedYAMLError as e:
        mark = e.problem_mark
        line = mark.line + 1 if mark is not None else None
        column = mark.column + 1 if mark is not None else None
        raise DocumentParseError(e.problem or str(e), source, line, column) from e
    except yaml.YAMLError as e:
        raise DocumentParseError(str(e), source) from e

    return _to_root_node(data, source)


def _to_root_node(data: Any, source: str) -> DocumentNode:
    try:
        node = build_node(data)
    except (TypeError, ValueError) as e:
        raise DocumentParseError(str(e), source) from e

    if node.type != ValueType.OBJECT:
        raise NonObjectRootError(source, node.type.value)
    return node


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict:
    result = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key: {key!r}")
        result[key] = value
    return result


def _reject_constant(token: str):
    # NaN, Infinity and -Infinity are not valid JSON
    raise ValueError(f"Invalid JSON constant: {token}")
