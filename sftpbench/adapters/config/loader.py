"""
Configuration loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.config import BenchConfig
from ...core.constants import ENV_PREFIX
from ...core.exceptions import InvalidArgument


# Config key -> converter
_FIELDS = {
    "host": str,
    "port": int,
    "user": str,
    "password": str,
    "localdir": str,
    "remotedir": str,
    "client": str,
    "timeout": float,
    "chunk_size": int,
}


class ConfigLoader:
    """Configuration loader with priority support"""

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file, keeping only known keys"""
        path = Path(path).expanduser()
        if not path.exists():
            raise InvalidArgument(f"Configuration file not found: {path}")

        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except (tomllib.TOMLDecodeError, OSError) as e:
            raise InvalidArgument(f"Failed to parse TOML configuration: {e}") from e

        return {k: v for k, v in data.items() if k in _FIELDS}

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from SFTPBENCH_* environment variables"""
        config = {}
        for key in _FIELDS:
            value = os.getenv(self._env_prefix + key.upper())
            if value:
                config[key] = value
        return config

    def merge_configs(self, *configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones; None values never override.
        """
        result = {}
        for config in configs:
            if not config:
                continue
            for key, value in config.items():
                if value is not None:
                    result[key] = value
        return result

    def load(
        self,
        cli_values: Dict[str, Any],
        config_file: Optional[Path] = None,
    ) -> BenchConfig:
        """
        Build the run configuration.

        Args:
            cli_values: Values given on the command line (None = not given)
            config_file: Optional TOML file

        Returns:
            BenchConfig instance

        Raises:
            InvalidArgument: If values are missing, malformed or invalid
        """
        toml_values = self.load_toml(config_file) if config_file else {}
        merged = self.merge_configs(toml_values, self.load_env(), cli_values)

        missing = [
            key for key in ("host", "user", "password", "localdir", "client")
            if merged.get(key) in (None, "")
        ]
        if missing:
            options = ", ".join(f"--{key}" for key in missing)
            raise InvalidArgument(f"Missing required options: {options}")

        values = {}
        for key, value in merged.items():
            # TOML may hand over booleans, arrays or tables
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise InvalidArgument(f"Invalid value for {key}: {value!r}")
            try:
                values[key] = _FIELDS[key](value)
            except (TypeError, ValueError) as e:
                raise InvalidArgument(f"Invalid value for {key}: {value!r}") from e

        optional = {}
        if "port" in values:
            optional["port"] = values["port"]
        if "remotedir" in values:
            optional["remote_dir"] = values["remotedir"]
        if "timeout" in values:
            optional["connect_timeout"] = values["timeout"]
        if "chunk_size" in values:
            optional["chunk_size"] = values["chunk_size"]

        return BenchConfig(
            host=values["host"],
            username=values["user"],
            password=values["password"],
            local_dir=Path(values["localdir"]),
            backend=values["client"],
            **optional,
        )
