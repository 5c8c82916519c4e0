from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path(__file__).with_name("settings.yaml")

ENV_PREFIX = "BQCHECK_"


class Settings(BaseSettings):
    endpoint_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    submit_delay_seconds: float = Field(default=0.0, ge=0)
    face: Literal["round", "rect"] = "round"

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # init kwargs carry the YAML file; BQCHECK_* env vars win over it
        return (env_settings, init_settings)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text())
    except FileNotFoundError:
        raise RuntimeError(f"Config file not found: {path}")
    except yaml.YAMLError as e:
        raise RuntimeError(f"Config file {path} is not valid YAML: {e}")
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise RuntimeError(f"Config file {path} must hold a mapping, got {type(raw).__name__}")
    return raw


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> Settings:
    """YAML file, then BQCHECK_* environment, then explicit (non-None) overrides such as CLI flags."""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    settings = Settings(**_read_yaml(path))

    explicit = {k: v for k, v in overrides.items() if v is not None}
    if explicit:
        # model_validate skips the env source, so explicit values are final
        settings = Settings.model_validate({**settings.model_dump(), **explicit})

    if not settings.endpoint_url:
        raise RuntimeError(
            f"Missing qualification endpoint. Set {ENV_PREFIX}ENDPOINT_URL or endpoint_url in {path}."
        )
    return settings
