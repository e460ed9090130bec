# isogit Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from isogit.config.defaults import DEFAULT_CONFIG, generate_default_config
from isogit.config.loader import (
    ensure_config_exists,
    get_config_dir,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from isogit.config.schema import CloneConfig, IsogitConfig, OutputConfig, SshConfig

__all__ = [
    # Schema
    "IsogitConfig",
    "SshConfig",
    "CloneConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_dir",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
