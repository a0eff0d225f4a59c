import json
import os
from dataclasses import asdict, fields
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from lunchctl.errors import ConfigError
from lunchctl.models.config import LaunchctlConfig, LoggingConfig, LunchctlConfig

CONFIG_PATH_ENV = "LUNCHCTL_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "~/.lunchctl/config.yaml"


# Expected value types per key; a list holds the element type
_SCHEMA = {
    LaunchctlConfig: {
        "executable": str,
        "not_found_exit_codes": [int],
        "not_found_markers": [str],
    },
    LoggingConfig: {
        "level": str,
        "log_dir": (str, type(None)),
        "enable_console": bool,
        "enable_syslog": bool,
    },
}


def _matches(value, kind) -> bool:
    if isinstance(kind, list):
        return isinstance(value, list) and all(_matches(item, kind[0]) for item in value)
    # bool is a subclass of int
    if kind is int and isinstance(value, bool):
        return False
    return isinstance(value, kind)


def _build(cls, data, path: Path):
    if not isinstance(data, dict):
        raise ConfigError(path, f"section for {cls.__name__} must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(path, f"unknown keys: {', '.join(sorted(unknown))}")
    for key, value in data.items():
        if not _matches(value, _SCHEMA[cls][key]):
            raise ConfigError(path, f"'{key}' has unexpected value {value!r}")
    return cls(**data)


class ConfigManager:
    """Loads lunchctl settings from a YAML or JSON file.

    The file is looked up in ``$LUNCHCTL_CONFIG_PATH`` (which may come from a
    ``.env`` file) and defaults to ``~/.lunchctl/config.yaml``. A missing
    file means every setting keeps its default.
    """

    def __init__(self, config_path: Path | None = None):
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)

        if config_path is None:
            config_path = Path(
                os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
            ).expanduser()
        self.config_path = Path(config_path)

        self.config = self.load_config()

    def _is_yaml(self) -> bool:
        return self.config_path.suffix in [".yaml", ".yml"]

    def load_config(self) -> LunchctlConfig:
        if not self.config_path.exists():
            return LunchctlConfig()

        try:
            with open(self.config_path, "r") as f:
                if self._is_yaml():
                    config_data = yaml.safe_load(f) or {}
                else:
                    config_data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError, OSError) as e:
            raise ConfigError(self.config_path, str(e)) from e

        if not isinstance(config_data, dict):
            raise ConfigError(self.config_path, "top level must be a mapping")

        unknown = set(config_data) - {"launchctl", "logging"}
        if unknown:
            raise ConfigError(self.config_path, f"unknown sections: {', '.join(sorted(unknown))}")

        return LunchctlConfig(
            launchctl=_build(LaunchctlConfig, config_data.get("launchctl") or {}, self.config_path),
            logging=_build(LoggingConfig, config_data.get("logging") or {}, self.config_path),
        )

    def save_config(self, config: LunchctlConfig):
        data = asdict(config)

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            if self._is_yaml():
                yaml.safe_dump(data, f, default_flow_style=False)
            else:
                json.dump(data, f, indent=2)
        self.config = config
