from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML mapping file.

    An empty file gives an empty dict.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError("Only YAML files are supported.")

    try:
        data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path_obj}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping: {path_obj}")

    return data
