"""Application settings, read from the environment or a ``.env`` file."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_TITLE: str = "Mortgage Engine"
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s  %(message)s"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
