from __future__ import annotations
import logging
from dataclasses import dataclass
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from sparse_matrix_calc.config.yaml_io import read_yaml

logger = logging.getLogger(__name__)

DEFAULTS_RESOURCE = "calculator_defaults.yaml"

# Allowed keys and their expected Python types, per YAML section.
CONFIG_SCHEMA: Dict[str, Dict[str, type]] = {
    "parsing": {"strict_headers": bool, "check_bounds": bool, "encoding": str},
    "output": {"sort_entries": bool},
    "logging": {"log_dir": str},
}


@dataclass(frozen=True, slots=True)
class CalculatorConfig:
    """
    Immutable settings for loading matrices and writing results.

    Attributes
    ----------
    strict_headers : bool
        Require clean integer literals in the `rows=`/`cols=` headers.
    check_bounds : bool
        Reject entries outside the declared matrix dimensions.
    encoding : str
        Text encoding used to read and write matrix files.
    sort_entries : bool
        Emit result entries in `(row, col)` order.
    log_dir : Path
        Directory for timestamped log files.
    """
    strict_headers: bool = False
    check_bounds: bool = False
    encoding: str = "utf-8"
    sort_entries: bool = False
    log_dir: Path = Path("var/log")


def default_config_path() -> Path:
    """Returns the path of the default settings file bundled with the package."""
    return Path(str(importlib_files("sparse_matrix_calc") / "data" / DEFAULTS_RESOURCE))


def _validate_sections(data: Mapping[str, Any], source: str) -> None:
    """
    Checks a parsed YAML tree against `CONFIG_SCHEMA`.

    Raises
    ------
    ValueError
        On an unknown section, an unknown key, a non-mapping section or a
        value of the wrong type.
    """
    for section, values in data.items():
        if section not in CONFIG_SCHEMA:
            raise ValueError(f"Unknown config section '{section}' in {source}")
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a mapping in {source}")

        allowed = CONFIG_SCHEMA[section]
        for key, value in values.items():
            if key not in allowed:
                raise ValueError(f"Unknown config key '{section}.{key}' in {source}")
            if not isinstance(value, allowed[key]):
                raise ValueError(
                    f"Config key '{section}.{key}' must be {allowed[key].__name__}, got {type(value).__name__}"
                )


def _merge_sections(base: Dict[str, Dict[str, Any]], overlay: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Overlays `overlay` onto `base` one section at a time."""
    merged = {section: dict(values or {}) for section, values in base.items()}
    for section, values in overlay.items():
        merged.setdefault(section, {}).update(values or {})
    return merged


def load_calculator_config(yaml_path: Optional[str | Path] = None) -> CalculatorConfig:
    """
    Loads the calculator settings.

    The bundled defaults are always read first. If `yaml_path` is given, its
    sections are overlaid on the defaults, so a user file only needs the keys
    it changes.

    Parameters
    ----------
    yaml_path : Optional[str | Path]
        Path to a user YAML file (`.yml`/`.yaml`), or None for defaults only.

    Returns
    -------
    CalculatorConfig
        The resolved settings.

    Raises
    ------
    ValueError
        If a file is not YAML or does not match the expected schema.
    OSError
        If a file cannot be read.
    """
    defaults_path = default_config_path()
    data = read_yaml(defaults_path)
    _validate_sections(data, str(defaults_path))

    if yaml_path is not None:
        logger.info(f"Loading calculator config from: {yaml_path}")
        user_data = read_yaml(yaml_path)
        _validate_sections(user_data, str(yaml_path))
        data = _merge_sections(data, user_data)

    parsing = data.get("parsing") or {}
    output = data.get("output") or {}
    logging_section = data.get("logging") or {}

    config = CalculatorConfig(
        strict_headers=parsing.get("strict_headers", False),
        check_bounds=parsing.get("check_bounds", False),
        encoding=parsing.get("encoding", "utf-8"),
        sort_entries=output.get("sort_entries", False),
        log_dir=Path(logging_section.get("log_dir", "var/log")),
    )
    logger.debug(f"Resolved calculator config: {config}")

    return config
