from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from cms.clients.github_contents import GitHubConfig


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # GitHub content store
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_REPO_OWNER: str = ""
    GITHUB_REPO_NAME: str = ""
    GITHUB_TOKEN: str = ""
    GITHUB_BRANCH: str = "main"
    GITHUB_POSTS_DIR: str = "posts"
    GITHUB_USER_AGENT: str = "ailodi-cms"

    # CouchDB
    COUCHDB_HOST: str = "localhost"
    COUCHDB_PORT: int = 5984
    COUCHDB_USERNAME: str = "admin"
    COUCHDB_PASSWORD: str = ""
    COUCHDB_COMMENTS_DATABASE: str = "comments"
    COUCHDB_SUBSCRIBERS_DATABASE: str = "subscribers"

    # Admin access
    ADMIN_PASSWORD: str = ""
    CMS_API_KEY: str = ""
    SESSION_COOKIE_NAME: str = "admin-session"
    SESSION_MAX_AGE: int = 24 * 60 * 60
    ENVIRONMENT: str = "development"

    # Public endpoints (subscribe, comments)
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def couchdb_url(self) -> str:
        return f"http://{self.COUCHDB_USERNAME}:{self.COUCHDB_PASSWORD}@{self.COUCHDB_HOST}:{self.COUCHDB_PORT}"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def github_config(self) -> GitHubConfig:
        return GitHubConfig(
            owner=self.GITHUB_REPO_OWNER,
            repo=self.GITHUB_REPO_NAME,
            token=self.GITHUB_TOKEN,
            branch=self.GITHUB_BRANCH,
            api_url=self.GITHUB_API_URL,
            user_agent=self.GITHUB_USER_AGENT,
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
