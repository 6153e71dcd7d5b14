# pagelayouts/config/loader.py
"""
Handles loading build configuration from TOML files and merging it with
command-line overrides.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
import structlog

from pagelayouts.exceptions import ConfigError

from .settings import BuildConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".pagelayouts.toml", "pagelayouts.toml", "pyproject.toml"]

# toml key -> (BuildConfig attribute, expected type)
CONFIG_KEY_TO_BUILDCONFIG_ATTR_MAP: Dict[str, Tuple[str, Any]] = {
    "pages": ("pages_dir", str),
    "layouts": ("layouts_dir", str),
    "output": ("output_dir", str),
    "default_layout": ("default_layout", str),
    "cache": ("cache_enabled", bool),
    "workers": ("workers", int),
    "exclude": ("exclude_patterns", list),
    "encoding": ("encoding", str),
    "site": ("site_data", dict),
}

PATH_ATTRS = {"pages_dir", "layouts_dir", "output_dir"}


def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("pagelayouts", {}) if file_path.name == "pyproject.toml" else data


def find_config_file(base_dir: Path) -> Optional[Path]:
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = base_dir / filename
        if candidate.is_file():
            return candidate
    return None


def load_project_config(base_dir: Path, config_path: Optional[Path] = None) -> Dict[str, Any]:
    # an explicit config_path wins over the project file search.
    source = config_path or find_config_file(base_dir)
    if source is None:
        log.debug("no_configuration_files_loaded", base_dir=str(base_dir))
        return {}
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"Config file {config_path} does not exist")
    log.info("loading_project_config", path=str(source))
    return _load_toml_file_data(source)


def build_config_from_mapping(raw: Dict[str, Any], base_dir: Path, **overrides: Any) -> BuildConfig:
    """
    Creates a BuildConfig from raw TOML data, then applies `overrides`
    (BuildConfig attribute names; None values are ignored).
    """
    options: Dict[str, Any] = {}
    for toml_key, value in raw.items():
        if toml_key not in CONFIG_KEY_TO_BUILDCONFIG_ATTR_MAP:
            log.warning("unknown_config_key_ignored", key=toml_key)
            continue
        attr, expected_type = CONFIG_KEY_TO_BUILDCONFIG_ATTR_MAP[toml_key]
        # bool is a subclass of int; "workers = true" is still a mistake.
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise ConfigError(f"Config key '{toml_key}' must be of type {expected_type.__name__}, got {type(value).__name__}")
        if expected_type is list and not all(isinstance(item, str) for item in value):
            raise ConfigError(f"Config key '{toml_key}' must be a list of strings")
        options[attr] = Path(value) if attr in PATH_ATTRS else value

    for attr, value in overrides.items():
        if value is None: continue
        if attr in ("exclude_patterns",) and not value: continue
        options[attr] = value

    return BuildConfig(base_dir=base_dir, **options)


def load_build_config(base_dir: Optional[Path] = None, config_path: Optional[Path] = None, **overrides: Any) -> BuildConfig:
    base = Path(base_dir or Path.cwd()).resolve()
    raw = load_project_config(base, config_path)
    return build_config_from_mapping(raw, base, **overrides)
