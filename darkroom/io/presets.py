"""
Adjustments files: YAML or JSON documents holding an Adjustments value.
"""

import json
import logging
from pathlib import Path
from typing import Union

import yaml

from ..processing.models import Adjustments

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')
JSON_SUFFIXES = ('.json',)


def _check_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise ValueError(
            f"Unsupported adjustments file type '{suffix}', "
            f"expected one of {', '.join(YAML_SUFFIXES + JSON_SUFFIXES)}"
        )
    return suffix


def load_adjustments(path: Union[str, Path]) -> Adjustments:
    """
    Read adjustments from a YAML or JSON file.

    Missing sections and fields keep their identity values, so a file may
    hold only the sliders it changes.
    """
    path = Path(path)
    suffix = _check_suffix(path)
    with open(path, 'r') as f:
        data = json.load(f) if suffix in JSON_SUFFIXES else yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Adjustments file {path} must contain a mapping")

    adjustments = Adjustments.from_dict(data)
    logger.debug(f"Loaded adjustments from {path}")
    return adjustments


def save_adjustments(adjustments: Adjustments, path: Union[str, Path]) -> Path:
    """Write *adjustments* as YAML or JSON depending on the file suffix."""
    path = Path(path)
    suffix = _check_suffix(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        if suffix in JSON_SUFFIXES:
            json.dump(adjustments.to_dict(), f, indent=2)
        else:
            yaml.safe_dump(adjustments.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved adjustments to {path}")
    return path
