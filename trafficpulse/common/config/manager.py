from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ..exceptions import ConfigurationError
from .models import AppConfig

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "conf"


class ConfigManager:
    """Centralizes loading and validation of application configuration"""

    required_sections = ('database', 'resolver', 'server', 'auth')

    def __init__(self, config_dir: Path = DEFAULT_CONFIG_DIR):
        self.config_dir = Path(config_dir)

    def load_app_config(self, name: str = "config", overrides: Optional[List[str]] = None) -> DictConfig:
        """Loads conf/<name>.yaml, applies dot-list overrides and validates"""
        config_path = self.config_dir / f"{name}.yaml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")

        raw = OmegaConf.load(config_path)
        for key in self.required_sections:
            if key not in raw:
                raise ConfigurationError(f"Missing required config key: {key}")

        if overrides:
            raw = OmegaConf.merge(raw, OmegaConf.from_dotlist(list(overrides)))

        return self.structure(raw)

    @staticmethod
    def structure(raw: Union[DictConfig, Mapping[str, Any], None] = None) -> DictConfig:
        """
        Merges raw settings onto the typed AppConfig schema.
        Unknown keys and wrongly typed values raise ConfigurationError.
        """
        schema = OmegaConf.structured(AppConfig)
        try:
            if raw is None:
                cfg = schema
            else:
                if not isinstance(raw, DictConfig):
                    raw = OmegaConf.create(dict(raw))
                # hydra injects its own node when running under @hydra.main
                raw = OmegaConf.masked_copy(raw, [k for k in raw.keys() if k != "hydra"])
                cfg = OmegaConf.merge(schema, raw)
            OmegaConf.resolve(cfg)
        except OmegaConfBaseException as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        if cfg.database.query_timeout_seconds <= 0:
            raise ConfigurationError("database.query_timeout_seconds must be positive")
        if cfg.resolver.tolerance_degrees < 0:
            raise ConfigurationError("resolver.tolerance_degrees must be non-negative")
        return cfg
