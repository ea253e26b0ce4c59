from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(default="development", validation_alias="APP_ENV")

    cdn_root: str = Field(
        default="https://cdn.jsdelivr.net/gh/selfhst/icons",
        validation_alias="CDN_ROOT",
    )
    upstream_user_agent: str = Field(default="SelfHostedIconServer/1.0", validation_alias="UPSTREAM_USER_AGENT")

    service_banner: str = Field(default="Self-hosted icon server", validation_alias="SERVICE_BANNER")

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=4050, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    cors_allow_origins: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGINS")


settings = Settings()


def _is_prod() -> bool:
    return (settings.app_env or "").strip().lower() in {"prod", "production"}


if _is_prod():
    if not (settings.cdn_root or "").strip().lower().startswith("https://"):
        raise RuntimeError("CDN_ROOT must be an https:// URL in production")
