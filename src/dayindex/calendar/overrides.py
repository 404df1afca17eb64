"""Loading of the JSON override file (``{"YYYYMMDD": 0|1|2, ...}``)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from loguru import logger

from ._exceptions import ConfigReadError
from .builder import normalize_overrides
from .types import DayType

PathLike = Union[str, Path]


def read_overrides(path: PathLike) -> dict[str, DayType]:
    """Strict read: raise ConfigReadError if the file cannot be used at all.

    Individual malformed entries are still only logged and skipped.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigReadError(f"Override file not found: {p}") from e
    except OSError as e:
        raise ConfigReadError(f"Cannot read override file {p}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigReadError(f"Override file {p} is not UTF-8: {e}") from e

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigReadError(f"Override file {p} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigReadError(
            f"Override file {p} must hold a JSON object; got {type(data).__name__}."
        )
    return normalize_overrides(data)


def load_overrides(path: PathLike | None) -> dict[str, DayType]:
    """Lenient read: any problem with the file degrades to no overrides."""
    if path is None:
        return {}
    if not Path(path).exists():
        logger.info(f"No override file at {path}; using weekday defaults only")
        return {}
    try:
        overrides = read_overrides(path)
    except ConfigReadError as e:
        logger.warning(f"{e}; using weekday defaults only")
        return {}
    logger.info(f"Loaded {len(overrides)} overrides from {path}")
    return overrides
