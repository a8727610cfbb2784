from pydantic_settings import BaseSettings, SettingsConfigDict


class DeploymentSettings(BaseSettings):
    revision: str = ""
    color: str = "#34577c"
    environment: str = "unknown"
    log_level: str = "info"

    # Empty values fall back to the defaults above
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )


class AppSettings(DeploymentSettings):
    app_name: str = "canary-service"
    host: str = "0.0.0.0"
    port: int = 9898
