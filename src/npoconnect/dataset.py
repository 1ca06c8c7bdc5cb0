"""Loader for the static organisation directory."""

import json
import logging
from pathlib import Path
from typing import Optional

from .config import BUNDLED_DATASET
from .models import Organization

logger = logging.getLogger(__name__)


def load_organizations(path: Optional[Path] = None) -> tuple:
    """Load the directory dataset from a JSON file.

    The file holds a list of organisation objects, or ``{"organizations": [...]}``.

    Args:
        path: Dataset file; the bundled sample directory when omitted

    Returns:
        Tuple of Organization records in file order
    """
    path = path or BUNDLED_DATASET
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and "organizations" in data:
        data = data["organizations"]
    if not isinstance(data, list):
        raise ValueError("Dataset must be a list or have an 'organizations' key")

    records = tuple(Organization.from_dict(item) for item in data)

    seen = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate organisation id in dataset: {record.id}")
        seen.add(record.id)

    logger.debug(f"Loaded {len(records)} organisations from {path}")
    return records
