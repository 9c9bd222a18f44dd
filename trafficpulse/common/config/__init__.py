from .models import (
    AppConfig, DatabaseConfig, ResolverConfig, ServerConfig,
    AuthConfig, LoggingConfig, SimulationConfig
)
from .manager import ConfigManager

__all__ = [
    "AppConfig", "DatabaseConfig", "ResolverConfig", "ServerConfig",
    "AuthConfig", "LoggingConfig", "SimulationConfig", "ConfigManager",
]
