"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_SESSION_SECRET = "relationship-wise-secret-key"


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from config/settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested sections to match Settings field names
        flattened = {}
        if 'server' in data:
            flattened['host'] = data['server'].get('host')
            flattened['port'] = data['server'].get('port')
            flattened['allowed_origins'] = data['server'].get('allowed_origins')
        if 'openai' in data:
            openai_cfg = data['openai']
            flattened['coaching_model'] = openai_cfg.get('coaching_model')
            flattened['analysis_model'] = openai_cfg.get('analysis_model')
            flattened['coaching_max_tokens'] = openai_cfg.get('coaching_max_tokens')
            flattened['analysis_max_tokens'] = openai_cfg.get('analysis_max_tokens')
            flattened['llm_timeout_seconds'] = openai_cfg.get('timeout_seconds')
            flattened['llm_max_retries'] = openai_cfg.get('max_retries')
        if 'session' in data:
            flattened['session_max_age_seconds'] = data['session'].get('max_age_seconds')

        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(default="development")

    # OpenAI
    openai_api_key: str = Field(description="OpenAI API key")
    coaching_model: str = Field(default="gpt-4o-mini")
    analysis_model: str = Field(default="gpt-4o-mini")
    coaching_max_tokens: int = Field(default=800)
    analysis_max_tokens: int = Field(default=600)
    llm_timeout_seconds: float = Field(default=30.0)
    llm_max_retries: int = Field(default=2)

    # Sessions and passwords
    session_secret: str = Field(default=DEFAULT_SESSION_SECRET)
    session_max_age_seconds: int = Field(default=24 * 60 * 60)
    bcrypt_rounds: int = Field(default=12)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    allowed_origins: str = Field(default="http://localhost:5000,http://127.0.0.1:5000")

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"

    @property
    def allowed_origin_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
