"""Config settings – 12-factor env-based configuration."""
from todo_service.config.settings.base import Settings
from todo_service.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from todo_service.config.settings.service import TodoServiceSettings

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader", "TodoServiceSettings"]
