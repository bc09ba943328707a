"""Main configuration class that combines all config modules."""

import logging
import tomllib
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import ConfigurationError
from .base import get_bool_env, get_env
from .errors import ErrorsConfig
from .permissions import PermissionsConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "settings.toml"


class Config(BaseModel):
    """Main configuration class for the provider bridge core.

    Configuration is loaded from multiple sources in priority order:
    1. Environment variables
    2. TOML configuration file
    3. Default values
    """

    model_config = ConfigDict(extra="ignore")

    # Core settings
    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    errors: ErrorsConfig = Field(default_factory=ErrorsConfig)
    permissions: PermissionsConfig = Field(default_factory=PermissionsConfig)

    # Internal state
    loaded_from: list[Path] = Field(default_factory=list)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "Config":
        """Load configuration from files and environment."""
        load_dotenv()

        core_config_path = get_env("PROVIDERBRIDGE_CORE_CONFIG_PATH")

        config = cls()

        toml_path = (
            Path(config_path)
            if config_path
            else (
                Path(core_config_path).resolve()
                if core_config_path
                else Path.cwd() / DEFAULT_CONFIG_FILENAME
            )
        )
        if toml_path.exists():
            try:
                with open(toml_path, "rb") as f:
                    toml_data = tomllib.load(f)

                toml_data.pop("loaded_from", None)

                # Merge TOML data with defaults using Pydantic
                config_dict = config.model_dump()
                config_dict.update(toml_data)
                config = cls.model_validate(config_dict)
                config.loaded_from.append(toml_path)
            except Exception as e:
                # An explicitly requested file must load; the implicit default may not.
                if config_path:
                    raise ConfigurationError(
                        f"Failed to load TOML config from {toml_path}: {e}", path=str(toml_path)
                    ) from e
                logger.warning("Failed to load TOML config from %s: %s", toml_path, e)

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to config."""
        # Error normalization
        log_raw = get_bool_env("PROVIDERBRIDGE_LOG_RAW_ERRORS")
        if log_raw is not None:
            self.errors.log_raw_errors = log_raw
        if raw_level := get_env("PROVIDERBRIDGE_RAW_ERROR_LOG_LEVEL"):
            self.errors = ErrorsConfig.model_validate(
                {**self.errors.model_dump(), "raw_error_log_level": raw_level}
            )

        # Permission map
        if namespace := get_env("PROVIDERBRIDGE_PERMISSION_NAMESPACE"):
            self.permissions.namespace = namespace

        # Debug/Logging
        if (debug_val := get_bool_env("PROVIDERBRIDGE_DEBUG")) is not None:
            self.debug = debug_val
        if log_level := get_env("PROVIDERBRIDGE_LOG_LEVEL"):
            self.log_level = log_level


# ---- Global config management ----

_GLOBAL_CONFIG: Config | None = None


def get_core_config() -> Config:
    """Return process-global core config."""
    global _GLOBAL_CONFIG
    if _GLOBAL_CONFIG is None:
        _GLOBAL_CONFIG = Config.load()
    return _GLOBAL_CONFIG


def set_core_config(config: Config) -> None:
    """Set the global core config."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = config
