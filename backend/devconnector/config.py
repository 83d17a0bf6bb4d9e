from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/devconnector.db"
    jwt_secret: str = "dev-secret-key-change-in-production"
    jwt_expire_seconds: int = 360000
    log_level: str = "INFO"

    # CORS origins for the React client
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub repository lookup
    github_api_url: str = "https://api.github.com"
    github_client_id: str = ""
    github_secret: str = ""
    github_timeout_seconds: float = 10.0
    github_repos_per_page: int = 5

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
