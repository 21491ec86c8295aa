from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """服务配置，支持环境变量（TASKBOARD_ 前缀）和 .env 文件"""

    model_config = SettingsConfigDict(
        env_prefix="TASKBOARD_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "Taskboard API"
    host: str = "127.0.0.1"
    port: int = 8080
    reload: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


settings = Settings()
