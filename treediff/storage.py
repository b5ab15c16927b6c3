"""Save comparison results to disk and read them back."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .exceptions import ResultStoreError
from .models import DiffCollection, WorkingContext

logger = logging.getLogger(__name__)


def save_results(
    collection: DiffCollection,
    context: WorkingContext,
    path: Union[str, Path]
):
    """
    Write a DiffCollection and the context it was produced with as JSON.

    Disabled categories are stored as null so they stay disabled when the
    file is loaded again.
    """
    path = Path(path)
    data = {"config": context.to_dict()}
    data.update(collection.to_dict())

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ResultStoreError(f"Could not write results ({e.strerror})", str(path)) from e

    logger.info("Saved %d differences to %s", collection.total, path)


def load_results(path: Union[str, Path]) -> tuple[DiffCollection, WorkingContext]:
    """
    Read results written by save_results.

    Returns:
        Tuple of (DiffCollection, WorkingContext)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Saved results not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ResultStoreError(f"Saved results are not valid JSON ({e.msg})", str(path)) from e
    except UnicodeDecodeError as e:
        raise ResultStoreError(f"Saved results are not valid UTF-8 ({e.reason})", str(path)) from e
    except OSError as e:
        raise ResultStoreError(f"Could not read results ({e.strerror or e})", str(path)) from e

    if not isinstance(data, dict) or not isinstance(data.get("config"), dict):
        raise ResultStoreError("Saved results are corrupted, config is missing", str(path))

    try:
        context = WorkingContext.from_dict(data["config"])
        collection = DiffCollection.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ResultStoreError(f"Saved results are corrupted ({e})", str(path)) from e

    logger.info("Loaded %d differences from %s", collection.total, path)
    return collection, context
