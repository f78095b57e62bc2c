"""
Engine settings loader.

Settings are merged from, lowest precedence first:
  1. <config_dir>/config.yaml           (`engine_settings:` mapping)
  2. <config_dir>/config_<env>.yaml     (same shape, merged with dict.update)
  3. SQLBENCH_SETTING_<NAME>=<value>    environment variables
"""
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from sqlbench.util.log_config import setup_logger

logger = setup_logger(__name__)

CONFIG_DIR_ENV = "SQLBENCH_CONFIG_DIR"
CONFIG_ENV_ENV = "SQLBENCH_ENV"
SETTING_ENV_PREFIX = "SQLBENCH_SETTING_"

# --concurrency owns this one
RESERVED_SETTINGS = ("threads",)


class ConfigLoader:

    def __init__(self, config_path: Optional[Path] = None, env: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        if config_path is None and self.environ.get(CONFIG_DIR_ENV):
            config_path = Path(self.environ[CONFIG_DIR_ENV])
        self.config_path = config_path
        self.env = env if env is not None else (self.environ.get(CONFIG_ENV_ENV) or None)

    def _load_yaml(self) -> dict:
        """
        Load config.yaml and the optional config_<env>.yaml override.

        A missing base file means no YAML settings; a missing env file is an error,
        since the caller asked for it explicitly.
        """
        if self.config_path is None:
            return {}

        data = {}
        base_config_file = self.config_path / "config.yaml"
        if base_config_file.exists():
            with open(base_config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        if self.env:
            env_config_file = self.config_path / f"config_{self.env}.yaml"
            with open(env_config_file, "r", encoding="utf-8") as f:
                env_data = yaml.safe_load(f) or {}
            # dict.update() will overwrite existing keys
            data.update(env_data)
        return data

    def _load_environment(self) -> Dict[str, str]:
        settings = {}
        for key, value in self.environ.items():
            if key.startswith(SETTING_ENV_PREFIX) and len(key) > len(SETTING_ENV_PREFIX):
                settings[key[len(SETTING_ENV_PREFIX):].lower()] = value
        return settings

    def engine_settings(self) -> Dict[str, str]:
        settings = {str(k): str(v) for k, v in (self._load_yaml().get("engine_settings") or {}).items()}
        settings.update(self._load_environment())
        for name in RESERVED_SETTINGS:
            if settings.pop(name, None) is not None:
                logger.warning(f"Ignoring engine setting '{name}'; it is controlled by --concurrency")
        return settings
