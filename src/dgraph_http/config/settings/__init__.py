"""Config settings – 12-factor env-based configuration."""
from dgraph_http.config.settings.base import Settings
from dgraph_http.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
