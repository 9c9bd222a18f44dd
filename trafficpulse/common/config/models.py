from dataclasses import dataclass, field
from typing import List

@dataclass
class DatabaseConfig:
    url: str = "sqlite:///data/trafficpulse.db"
    query_timeout_seconds: float = 5.0
    pool_pre_ping: bool = True
    echo: bool = False
    create_tables: bool = True

@dataclass
class ResolverConfig:
    tolerance_degrees: float = 0.00001

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

@dataclass
class AuthConfig:
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    token_expire_minutes: int = 1440
    bcrypt_rounds: int = 10

@dataclass
class LoggingConfig:
    level: str = "INFO"

@dataclass
class SimulationConfig:
    enabled: bool = True
    revenue_per_violation: float = 1000.0
    trend_days: int = 7

@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
