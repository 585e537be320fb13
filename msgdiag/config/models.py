from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field

from msgdiag.common.utils import get_app_dir


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default='INFO', description='Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')
    console_enabled: bool = Field(default=True, description='Enable console logging')
    file_enabled: bool = Field(default=False, description='Enable file logging')
    log_file_dir: str | None = Field(default=None, description='Log directory (defaults to ~/.msgdiag/logs)')
    max_file_size: str = Field(default='10MB', description='Maximum log file size before rotation')
    backup_count: int = Field(default=4, ge=0, description='Number of backup files to keep')


class DiagnosticsConfig(BaseModel):
    """Defaults used when the pipeline context does not supply its own options."""

    model_config = ConfigDict(extra='allow')

    version: str = Field(default='1', description='Config version')
    log_debug_body_streams: bool = Field(default=False, description='Allow stream bodies to be logged')
    log_debug_body_max_chars: int = Field(default=1000, description='Clip logged bodies after this many chars, 0 for no limit, negative to disable')
    dump_include_body: bool = Field(default=True)
    dump_indent: int = Field(default=0, ge=0)
    dump_allow_streams: bool = Field(default=False)
    dump_allow_files: bool = Field(default=True)
    dump_max_chars: int = Field(default=128 * 1024)
    redact_uri_parameters: List[str] = Field(default_factory=list, description='Extra query parameter names masked in endpoint URIs')
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description='Logging configuration')

    @classmethod
    def load(cls, config_path: str | None = None) -> 'DiagnosticsConfig':
        """Load configuration from YAML file.

        Tries multiple locations in order:
        1. Explicit config_path if provided
        2. ~/.msgdiag/config.yaml in user home directory
        3. ./msgdiag.yaml in current directory
        """
        config_paths = []
        if config_path:
            config_paths.append(config_path)
        else:
            home_config = get_app_dir() / 'config.yaml'
            if home_config.exists():
                config_paths.append(str(home_config))
            config_paths.append('msgdiag.yaml')

        # Later files override earlier ones
        data = {}
        for path in config_paths:
            try:
                with open(path, 'r') as f:
                    file_data = yaml.safe_load(f) or {}
                    data.update(file_data)
            except FileNotFoundError:
                continue
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in config file {path}: {e}')
            except Exception as e:
                raise ValueError(f'Error reading config file {path}: {e}')

        return cls(**data)

    def save(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        with open(config_path, 'w') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False, indent=2)
