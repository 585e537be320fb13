from typing import Optional

from msgdiag.config.models import DiagnosticsConfig, LoggingConfig


class ConfigurationService:
    """Configuration service that manages config loading without global state."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self._config = self._load_config()

    def _load_config(self) -> DiagnosticsConfig:
        return DiagnosticsConfig.load(self.config_path)

    def get_config(self) -> DiagnosticsConfig:
        """Get the configuration instance."""
        return self._config

    def reload_config(self) -> DiagnosticsConfig:
        """Reload configuration from file."""
        self._config = self._load_config()
        return self._config


__all__ = ['ConfigurationService', 'DiagnosticsConfig', 'LoggingConfig']
