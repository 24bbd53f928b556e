"""Main settings class for vodsplit configuration."""
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ..exceptions import ConfigurationError
from .defaults import (
    DEFAULT_CONFIG_FILES, ENV_PREFIX,
    get_default_path_config, get_default_process_config, get_default_split_config
)
from .types import PathConfig, ProcessConfig, SplitConfig
from .validation import validate_path_config, validate_process_config, validate_split_config


def _optional_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "none")):
        return None
    return float(value)


# option name -> (section, converter)
OPTIONS: Dict[str, tuple[str, Callable[[Any], Any]]] = {
    "download_dir": ("paths", Path),
    "db_path": ("paths", Path),
    "log_dir": ("paths", Path),
    "max_items_to_process": ("split", int),
    "soft_cap_minutes": ("split", int),
    "hard_cap_minutes": ("split", int),
    "ffmpeg_path": ("process", str),
    "encoder_timeout": ("process", _optional_float),
    "log_level": ("process", str),
}


@dataclass
class Settings:
    """Main configuration class for vodsplit."""
    paths: PathConfig
    split: SplitConfig
    process: ProcessConfig

    @classmethod
    def from_environment(
        cls,
        config_files: Optional[Iterable[Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any
    ) -> "Settings":
        """Create settings from defaults, config files, environment variables and overrides.

        Later sources win. Missing config files are skipped.

        Raises:
            ConfigurationError: If a source cannot be read or the result is invalid
        """
        environ = os.environ if environ is None else environ
        files = DEFAULT_CONFIG_FILES if config_files is None else config_files

        values: Dict[str, Any] = {}
        for config_file in files:
            values.update(_read_config_file(Path(config_file).expanduser()))
        values.update(_read_environment(environ))
        values.update({k: v for k, v in overrides.items() if v is not None})

        settings = cls(
            paths=get_default_path_config(),
            split=get_default_split_config(),
            process=get_default_process_config()
        )
        settings = settings.with_values(values)
        settings.validate()
        return settings

    def with_values(self, values: Mapping[str, Any]) -> "Settings":
        """Return a copy with the given options applied."""
        sections: Dict[str, Dict[str, Any]] = {"paths": {}, "split": {}, "process": {}}
        for name, raw in values.items():
            if name not in OPTIONS:
                raise ConfigurationError(f"Unknown configuration option: {name}", module="config")
            section, convert = OPTIONS[name]
            try:
                sections[section][name] = convert(raw)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}", module="config") from e

        return Settings(
            paths=replace(self.paths, **sections["paths"]),
            split=replace(self.split, **sections["split"]),
            process=replace(self.process, **sections["process"])
        )

    def validate(self) -> None:
        """Validate all configuration settings.

        Raises:
            ConfigurationError: If any section is invalid
        """
        try:
            validate_path_config(self.paths)
            validate_split_config(self.split)
            validate_process_config(self.process)
        except ValueError as e:
            raise ConfigurationError(str(e), module="config") from e


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Read the ``[paths]``, ``[split]`` and ``[process]`` tables of a TOML file."""
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Could not load config file {path}: {e}", module="config") from e

    values: Dict[str, Any] = {}
    for section, table in data.items():
        if section not in ("paths", "split", "process") or not isinstance(table, dict):
            raise ConfigurationError(f"Unknown section '{section}' in {path}", module="config")
        for name, value in table.items():
            if OPTIONS.get(name, (None,))[0] != section:
                raise ConfigurationError(f"Unknown option '{section}.{name}' in {path}", module="config")
            values[name] = value
    return values


def _read_environment(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect ``VODSPLIT_<OPTION>`` variables."""
    values: Dict[str, Any] = {}
    for name in OPTIONS:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return values
