"""Hierarchical loader for force-feedback configuration files."""

import json
import os
from pathlib import Path

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..feedback_logging import LogCategory, get_category_logger
from .models import FeedbackConfig, get_default_config

logger = get_category_logger(LogCategory.CONFIG)

CONFIG_DIRNAME = ".force-feedback"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "FORCE_FEEDBACK_CONFIG"


class ConfigLoader:
    """Loads FeedbackConfig from JSON files."""

    GLOBAL_CONFIG_DIR = Path.home() / CONFIG_DIRNAME

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root (defaults to CWD)
        """
        self.project_path = Path(project_path) if project_path else Path.cwd()

    @property
    def project_config_path(self) -> Path:
        return self.project_path / CONFIG_DIRNAME / CONFIG_FILENAME

    @property
    def global_config_path(self) -> Path:
        return self.GLOBAL_CONFIG_DIR / CONFIG_FILENAME

    def load(self, config_path: Path | None = None) -> FeedbackConfig:
        """Load configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable FORCE_FEEDBACK_CONFIG
        3. <project>/.force-feedback/config.json
        4. ~/.force-feedback/config.json
        5. Built-in defaults

        Args:
            config_path: Optional explicit path to a config file.

        Returns:
            Loaded FeedbackConfig.

        Raises:
            ConfigurationError: If the explicit file is missing or invalid.
        """
        if config_path is not None:
            if not config_path.exists():
                raise ConfigurationError(
                    "Configuration file does not exist", path=str(config_path)
                )
            return self.load_file(config_path)

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_config = self._try_load(Path(env_path))
            if env_config is not None:
                return env_config

        for candidate in (self.project_config_path, self.global_config_path):
            if candidate.exists():
                config = self._try_load(candidate)
                if config is not None:
                    return config

        logger.debug("No force-feedback config found, using defaults")
        return get_default_config()

    def load_file(self, path: Path) -> FeedbackConfig:
        """Load and validate a single configuration file.

        Raises:
            ConfigurationError: If the file is unreadable, not JSON, or invalid.
        """
        logger.debug(f"Loading force-feedback config from {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(
                "Could not read configuration file", path=str(path), reason=str(e)
            ) from e

        try:
            return FeedbackConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid configuration file",
                path=str(path),
                errors=e.error_count(),
                reason=str(e),
            ) from e

    def _try_load(self, path: Path) -> FeedbackConfig | None:
        """Load a discovered file, returning None when it cannot be used."""
        if not path.exists():
            logger.warning(f"Configured path {path} does not exist, skipping")
            return None
        try:
            return self.load_file(path)
        except ConfigurationError as e:
            logger.warning(f"Could not load config from {path}: {e.message}")
            return None

    def save(self, config: FeedbackConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file.

        Args:
            config: Configuration to save.
            config_path: Optional path. Defaults to the project config file.

        Returns:
            Path where config was saved.
        """
        if config_path is None:
            config_path = self.project_config_path

        config_path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
        config_path.write_text(content + "\n", encoding="utf-8")
        logger.info(f"Saved force-feedback config to {config_path}")
        return config_path


def load_config(project_path: Path | None = None) -> FeedbackConfig:
    """Convenience function to load configuration for a project."""
    return ConfigLoader(project_path).load()
